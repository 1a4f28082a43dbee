"""
OrderService - Order Lifecycle Management

Handles checkout, order queries for customers and vendors, and the order
status workflow. Orchestrates cart, inventory, and pricing services.

Checkout validates every line against the live catalog before touching the
database, then writes the order, its item snapshots, the stock decrements and
the cart clear inside one transaction: either all of them land or none do.
"""

import logging
from typing import Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q

from authentication.infra.observability.tracing import tracer
from infrastructure.events import get_event_bus
from marketplace.cart.domain.models.cart import ITEM_TYPE_CHOICES, ITEM_TYPE_PRODUCT
from marketplace.cart.domain.services.cart_service import CartService
from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.cart.domain.services.pricing_service import PricingService
from marketplace.domain.events import OrderCancelledEvent, OrderPlacedEvent, OrderStatusChangedEvent
from marketplace.infra.observability.metrics import (
    order_number_collisions_total,
    order_status_transitions_total,
    order_value,
    orders_placed_total,
)
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .order_number import generate_order_number


User = get_user_model()
logger = logging.getLogger(__name__)

ORDER_TYPES = {value for value, _ in ITEM_TYPE_CHOICES}
DELIVERY_FIELDS = (
    "delivery_address",
    "delivery_area",
    "delivery_city",
    "delivery_pincode",
    "scheduled_date",
    "scheduled_time",
    "notes",
)


class CheckoutAborted(Exception):
    """Raised inside the checkout transaction to force a rollback."""

    def __init__(self, result: ServiceResult):
        super().__init__(result.error_detail)
        self.result = result


class OrderService(BaseService):
    """
    Service for managing order lifecycle.
    """

    def __init__(
        self,
        cart_service: CartService = None,
        inventory_service: InventoryService = None,
        pricing_service: PricingService = None,
        event_bus=None,
    ):
        """
        Initialize OrderService.

        Args:
            cart_service: Service for cart operations (injected)
            inventory_service: Service for stock management (injected)
            pricing_service: Service for price calculations (injected)
            event_bus: Event bus for publishing domain events (injected)
        """
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()
        self.pricing_service = pricing_service or PricingService()
        self.cart_service = cart_service or CartService(self.inventory_service, self.pricing_service)
        self.event_bus = event_bus or get_event_bus()
        self.max_number_attempts = getattr(settings, "ORDER_NUMBER_MAX_ATTEMPTS", 5)

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def _validate_lines(self, order_type: str, items: List[Dict]) -> ServiceResult[List[Dict]]:
        """
        Resolve every requested line against the live catalog.

        Duplicate lines for the same item are merged. Returns priced lines
        ``{item_type, item_id, item, name, price, quantity, vendor_id}``.
        """
        merged: Dict[tuple, Dict] = {}

        for raw in items:
            if not isinstance(raw, dict):
                return service_err(ErrorCodes.VALIDATION_ERROR, "Invalid order item")

            item_type = raw.get("item_type") or order_type
            if item_type not in ORDER_TYPES:
                return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

            try:
                quantity = int(raw.get("quantity", 1))
            except (TypeError, ValueError):
                return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")
            if quantity < 1:
                return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

            resolved = self.inventory_service.resolve_item(item_type, raw.get("item_id"))
            if not resolved.ok:
                return resolved
            item = resolved.value

            key = (item_type, item.pk)
            if key in merged:
                merged[key]["quantity"] += quantity
            else:
                merged[key] = {
                    "item_type": item_type,
                    "item_id": item.pk,
                    "item": item,
                    "name": item.name,
                    "price": item.price,
                    "quantity": quantity,
                    "vendor_id": item.vendor_id,
                }

        lines = list(merged.values())
        for line in lines:
            if self.inventory_service.stock_of(line["item"]) < line["quantity"]:
                return service_err(ErrorCodes.INSUFFICIENT_STOCK, f"Insufficient stock for {line['name']}")

        return service_ok(lines)

    def _create_order_row(self, **fields) -> Order:
        """Insert the order, retrying with a fresh number on a unique collision."""
        for attempt in range(1, self.max_number_attempts + 1):
            order_number = generate_order_number()
            try:
                with transaction.atomic():
                    return Order.objects.create(order_number=order_number, **fields)
            except IntegrityError:
                order_number_collisions_total.inc()
                self.logger.warning(f"Order number collision on {order_number} (attempt {attempt})")

        raise CheckoutAborted(service_err(ErrorCodes.INTERNAL_ERROR, "Could not allocate an order number"))

    @BaseService.log_performance
    def place_order(
        self,
        user: User,
        order_type: str,
        items: List[Dict],
        delivery_info: Optional[Dict] = None,
        payment_method: str = "cod",
    ) -> ServiceResult[Order]:
        """
        Place an order for an explicit list of lines.

        Args:
            user: Buyer placing the order
            order_type: ``"service"`` or ``"product"``
            items: List of ``{"item_type", "item_id", "quantity"}`` dicts
            delivery_info: delivery_address (required), delivery_area, delivery_city,
                delivery_pincode, scheduled_date, scheduled_time, notes
            payment_method: Defaults to cash on delivery

        Returns:
            ServiceResult with the created Order (items prefetched)

        Example:
            >>> result = order_service.place_order(
            ...     user, "product", [{"item_type": "product", "item_id": 3, "quantity": 2}],
            ...     {"delivery_address": "12 Trunk Road"},
            ... )
            >>> if result.ok:
            ...     print(result.value.order_number)
        """
        delivery_info = delivery_info or {}

        with tracer.start_as_current_span("order_place_transaction") as span:
            span.set_attribute("user.id", str(user.id))
            span.set_attribute("order.type", str(order_type))

            # Step 1: Validate request shape
            if order_type not in ORDER_TYPES or not items:
                orders_placed_total.labels(status="rejected", order_type=str(order_type)).inc()
                return service_err(ErrorCodes.VALIDATION_ERROR, "Order type and items are required")
            if not isinstance(items, list):
                orders_placed_total.labels(status="rejected", order_type=order_type).inc()
                return service_err(ErrorCodes.VALIDATION_ERROR, "Order items must be a list")
            if not str(delivery_info.get("delivery_address") or "").strip():
                orders_placed_total.labels(status="rejected", order_type=order_type).inc()
                return service_err(ErrorCodes.VALIDATION_ERROR, "Delivery address is required")

            # Step 2: Resolve lines against the live catalog
            with tracer.start_as_current_span("validate_lines"):
                lines_result = self._validate_lines(order_type, items)
                if not lines_result.ok:
                    orders_placed_total.labels(status="rejected", order_type=order_type).inc()
                    return lines_result
                lines = lines_result.value

            vendor_ids = {line["vendor_id"] for line in lines}
            if len(vendor_ids) > 1:
                orders_placed_total.labels(status="rejected", order_type=order_type).inc()
                return service_err(
                    ErrorCodes.MIXED_VENDOR_ORDER, "All items in an order must come from the same vendor"
                )
            vendor_id = vendor_ids.pop()

            # Step 3: Server-side pricing
            with tracer.start_as_current_span("calculate_totals"):
                totals_result = self.pricing_service.calculate_order_total(lines, order_type)
                if not totals_result.ok:
                    return totals_result
                totals = totals_result.value

            fields = {key: delivery_info[key] for key in DELIVERY_FIELDS if delivery_info.get(key) not in (None, "")}

            # Step 4: Persist everything atomically
            try:
                with tracer.start_as_current_span("save_order"), transaction.atomic():
                    order = self._create_order_row(
                        user=user,
                        vendor_id=vendor_id,
                        order_type=order_type,
                        payment_method=payment_method or "cod",
                        subtotal=totals["subtotal"],
                        delivery_fee=totals["delivery_fee"],
                        discount=totals["discount"],
                        total=totals["total"],
                        **fields,
                    )

                    OrderItem.objects.bulk_create(
                        [
                            OrderItem(
                                order=order,
                                item_type=line["item_type"],
                                item_id=line["item_id"],
                                item_name=line["name"],
                                quantity=line["quantity"],
                                price=line["price"],
                                total=self.pricing_service.line_total(line["price"], line["quantity"]),
                            )
                            for line in lines
                        ]
                    )

                    for line in lines:
                        if line["item_type"] != ITEM_TYPE_PRODUCT:
                            continue
                        reserved = self.inventory_service.reserve_stock(
                            line["item_id"], line["quantity"], order_number=order.order_number
                        )
                        if not reserved.ok:
                            raise CheckoutAborted(
                                service_err(reserved.error, f"Insufficient stock for {line['name']}")
                            )

                    self.cart_service.clear_cart(user)
            except CheckoutAborted as aborted:
                orders_placed_total.labels(status="failed", order_type=order_type).inc()
                span.set_attribute("order.failure", aborted.result.error)
                self.logger.warning(f"Checkout rolled back for user {user.id}: {aborted.result.error_detail}")
                return aborted.result

            # Step 5: Publish event (after commit)
            with tracer.start_as_current_span("publish_event"):
                self.event_bus.publish(
                    "order.placed",
                    OrderPlacedEvent(
                        order_id=order.id,
                        order_number=order.order_number,
                        user_id=user.id,
                        vendor_id=vendor_id,
                        order_type=order_type,
                        total_amount=order.total,
                    ).payload,
                )

            orders_placed_total.labels(status="success", order_type=order_type).inc()
            order_value.observe(float(order.total))
            span.set_attribute("order.id", str(order.id))
            span.set_attribute("order.total", str(order.total))

            self.logger.info(f"Order {order.order_number} placed by user {user.id}, total={order.total}")
            return service_ok(Order.objects.prefetch_related("items").get(pk=order.pk))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _paginate(self, queryset, status: Optional[str], limit: int, offset: int) -> ServiceResult[Dict]:
        if status:
            if not Order.is_valid_status(status):
                return service_err(ErrorCodes.INVALID_STATUS, "Invalid status")
            queryset = queryset.filter(status=status)

        total = queryset.count()
        orders = list(queryset[offset : offset + limit])
        return service_ok({"orders": orders, "total": total, "limit": limit, "offset": offset})

    @BaseService.log_performance
    def list_orders(
        self, user: User, status: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> ServiceResult[Dict]:
        """
        List the customer's own orders, newest first, each with its items.

        Returns:
            ServiceResult with ``{"orders", "total", "limit", "offset"}``
        """
        queryset = Order.objects.filter(user=user).prefetch_related("items")
        return self._paginate(queryset, status, limit, offset)

    @BaseService.log_performance
    def list_vendor_orders(
        self, vendor: User, status: Optional[str] = None, limit: int = 20, offset: int = 0
    ) -> ServiceResult[Dict]:
        """
        List orders attributed to a vendor, with the customer's contact details.
        """
        queryset = Order.objects.filter(vendor=vendor).select_related("user").prefetch_related("items")
        return self._paginate(queryset, status, limit, offset)

    @BaseService.log_performance
    def get_order(self, user: User, order_id) -> ServiceResult[Order]:
        """
        Get a single order visible to the buyer, its vendor or an admin.

        Orders belonging to someone else are reported as missing.
        """
        try:
            order_id = int(order_id)
        except (TypeError, ValueError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        queryset = Order.objects.select_related("user", "vendor", "vendor__business").prefetch_related("items")
        if not user.is_admin():
            queryset = queryset.filter(Q(user=user) | Q(vendor=user))

        order = queryset.filter(pk=order_id).first()
        if order is None:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")
        return service_ok(order)

    # ------------------------------------------------------------------
    # Status workflow
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def set_status(self, order_id, new_status: str, actor: User) -> ServiceResult[Order]:
        """
        Move an order along its status workflow.

        Checks run in order: status value, order existence, actor permission,
        transition legality. Cancelling returns every product line's units to
        stock in the same transaction as the status change.

        Example:
            >>> result = order_service.set_status(order.id, "confirmed", vendor)
            >>> result.ok
            True
        """
        if not Order.is_valid_status(new_status):
            return service_err(ErrorCodes.INVALID_STATUS, "Invalid status")

        try:
            order_id = int(order_id)
        except (TypeError, ValueError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        released_units = 0
        with tracer.start_as_current_span("order_set_status") as span, transaction.atomic():
            span.set_attribute("order.id", str(order_id))
            span.set_attribute("order.new_status", new_status)

            order = Order.objects.select_for_update().filter(pk=order_id).first()
            if order is None:
                return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

            if order.vendor_id != actor.pk and not actor.is_admin():
                self.logger.warning(f"User {actor.pk} tried to update order {order.order_number}")
                return service_err(ErrorCodes.NOT_ORDER_VENDOR, "Not authorized to update this order")

            old_status = order.status
            if not order.can_transition_to(new_status):
                return service_err(
                    ErrorCodes.INVALID_TRANSITION, f"Cannot change order status from {old_status} to {new_status}"
                )

            order.status = new_status
            order.save(update_fields=["status", "updated_at"])

            if new_status == Order.STATUS_CANCELLED:
                for line in order.items.filter(item_type=ITEM_TYPE_PRODUCT):
                    released = self.inventory_service.release_stock(
                        line.item_id, line.quantity, reason=f"order_cancelled:{order.order_number}"
                    )
                    if released.ok:
                        released_units += line.quantity

        order_status_transitions_total.labels(from_status=old_status, to_status=new_status).inc()
        self.event_bus.publish(
            "order.status_changed",
            OrderStatusChangedEvent(
                order_id=order.id,
                order_number=order.order_number,
                from_status=old_status,
                to_status=new_status,
                changed_by=actor.pk,
            ).payload,
        )
        if new_status == Order.STATUS_CANCELLED:
            self.event_bus.publish(
                "order.cancelled",
                OrderCancelledEvent(
                    order_id=order.id,
                    order_number=order.order_number,
                    user_id=order.user_id,
                    from_status=old_status,
                    released_units=released_units,
                ).payload,
            )

        self.logger.info(f"Order {order.order_number}: {old_status} -> {new_status} by user {actor.pk}")
        return service_ok(order)
