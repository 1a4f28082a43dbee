"""
CartService - Shopping Cart Operations

Handles cart add/update/remove/clear for services and products.
Prices are never stored on the cart; every read joins the live catalog so the
customer always sees current prices. Stock is checked on every mutation of a
product line.
"""

from collections import defaultdict
from typing import Dict, List

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import F

from marketplace.cart.domain.models.cart import ITEM_TYPE_PRODUCT, ITEM_TYPE_SERVICE, CartItem
from marketplace.infra.observability.metrics import cart_operations_total
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .inventory_service import ITEM_MODELS, InventoryService
from .pricing_service import PricingService


User = get_user_model()


class CartService(BaseService):
    """
    Service for managing shopping cart operations.

    Responsibilities:
    - Get user's cart joined with live catalog data
    - Add items to cart (upsert, with stock validation)
    - Update line quantities
    - Remove lines and clear the cart

    Dependencies:
    - InventoryService: item lookup and stock checks
    - PricingService: cart totals
    """

    def __init__(self, inventory_service: InventoryService = None, pricing_service: PricingService = None):
        """
        Initialize CartService.

        Args:
            inventory_service: Service for stock management (injected)
            pricing_service: Service for price calculations (injected)
        """
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()
        self.pricing_service = pricing_service or PricingService()

    def _load_items(self, cart_items) -> Dict[tuple, object]:
        """Fetch the catalog rows behind the cart lines, one query per item type."""
        ids_by_type = defaultdict(set)
        for cart_item in cart_items:
            ids_by_type[cart_item.item_type].add(cart_item.item_id)

        loaded = {}
        for item_type, ids in ids_by_type.items():
            model = ITEM_MODELS[item_type]
            for item in model.objects.filter(pk__in=ids):
                loaded[(item_type, item.pk)] = item
        return loaded

    def _serialize_line(self, cart_item: CartItem, item) -> Dict:
        available = item is not None and item.is_active
        price = item.price if item is not None else None
        return {
            "id": cart_item.id,
            "item_type": cart_item.item_type,
            "item_id": cart_item.item_id,
            "quantity": cart_item.quantity,
            "name": item.name if item is not None else None,
            "price": price,
            "image": item.image if item is not None else "",
            "stock": self.inventory_service.stock_of(item) if item is not None else 0,
            "line_total": self.pricing_service.line_total(price, cart_item.quantity) if available else None,
            "is_available": available,
            "created_at": cart_item.created_at,
        }

    @BaseService.log_performance
    def get_cart(self, user: User) -> ServiceResult[Dict]:
        """
        Get user's cart with live names, prices, images and stock.

        Lines whose item was deleted or deactivated stay visible with
        ``is_available=False`` and are left out of the total.

        Returns:
            ServiceResult with ``{"items": [...], "total": Decimal, "count": int}``

        Example:
            >>> result = cart_service.get_cart(user)
            >>> if result.ok:
            ...     print(result.value["total"], result.value["count"])
        """
        cart_items = list(CartItem.objects.filter(user=user))
        loaded = self._load_items(cart_items)

        items: List[Dict] = [
            self._serialize_line(cart_item, loaded.get((cart_item.item_type, cart_item.item_id)))
            for cart_item in cart_items
        ]

        totals_result = self.pricing_service.calculate_cart_total(
            [{"price": line["price"], "quantity": line["quantity"]} for line in items if line["is_available"]]
        )
        if not totals_result.ok:
            return totals_result

        return service_ok({"items": items, "total": totals_result.value["total"], "count": len(items)})

    @BaseService.log_performance
    def add_to_cart(self, user: User, item_type: str, item_id, quantity: int = 1) -> ServiceResult[Dict]:
        """
        Add an item to the cart, incrementing the quantity if it is already there.

        Args:
            user: User adding the item
            item_type: ``"service"`` or ``"product"``
            item_id: Catalog primary key
            quantity: Quantity to add (default: 1)

        Returns:
            ServiceResult with the updated cart

        Example:
            >>> cart_service.add_to_cart(user, "product", 5, 3)
            >>> cart_service.add_to_cart(user, "product", 5, 4)  # line now holds 7
        """
        if item_type not in (ITEM_TYPE_SERVICE, ITEM_TYPE_PRODUCT):
            return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

        if quantity is None or quantity < 1:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

        resolved = self.inventory_service.resolve_item(item_type, item_id)
        if not resolved.ok:
            cart_operations_total.labels(operation="add", status="failed").inc()
            return resolved

        item = resolved.value
        if self.inventory_service.stock_of(item) < quantity:
            cart_operations_total.labels(operation="add", status="failed").inc()
            return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock")

        lookup = {"user": user, "item_type": item_type, "item_id": item.pk}
        with transaction.atomic():
            # Increment in SQL so concurrent adds of the same item never lose an update
            updated = CartItem.objects.filter(**lookup).update(quantity=F("quantity") + quantity)
            if not updated:
                try:
                    with transaction.atomic():
                        CartItem.objects.create(quantity=quantity, **lookup)
                except IntegrityError:
                    CartItem.objects.filter(**lookup).update(quantity=F("quantity") + quantity)

        cart_operations_total.labels(operation="add", status="success").inc()
        self.logger.info(f"Added to cart for user {user.id}: {quantity}x {item_type} #{item.pk}")

        return self.get_cart(user)

    @BaseService.log_performance
    @transaction.atomic
    def update_quantity(self, user: User, cart_item_id, quantity: int) -> ServiceResult[Dict]:
        """
        Set the quantity of one of the user's cart lines.

        Args:
            user: Owner of the cart line
            cart_item_id: CartItem primary key
            quantity: New quantity (must be >= 1)

        Returns:
            ServiceResult with the updated cart, or ITEM_NOT_IN_CART / INSUFFICIENT_STOCK
        """
        if quantity is None or quantity < 1:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

        cart_item = CartItem.objects.select_for_update().filter(pk=cart_item_id, user=user).first()
        if cart_item is None:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Cart item not found")

        if cart_item.item_type == ITEM_TYPE_PRODUCT:
            stock_check = self.inventory_service.check_availability(cart_item.item_type, cart_item.item_id, quantity)
            if not stock_check.ok:
                return stock_check
            if not stock_check.value:
                cart_operations_total.labels(operation="update", status="failed").inc()
                return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock")

        old_quantity = cart_item.quantity
        cart_item.quantity = quantity
        cart_item.save(update_fields=["quantity"])

        cart_operations_total.labels(operation="update", status="success").inc()
        self.logger.info(f"Updated cart line {cart_item.pk} for user {user.id}: {old_quantity} -> {quantity}")

        return self.get_cart(user)

    @BaseService.log_performance
    def remove_from_cart(self, user: User, cart_item_id) -> ServiceResult[Dict]:
        """
        Remove one line from the user's cart.

        Returns:
            ServiceResult with the updated cart, or ITEM_NOT_IN_CART if nothing was deleted
        """
        deleted, _ = CartItem.objects.filter(pk=cart_item_id, user=user).delete()
        if not deleted:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Cart item not found")

        cart_operations_total.labels(operation="remove", status="success").inc()
        self.logger.info(f"Removed cart line {cart_item_id} for user {user.id}")

        return self.get_cart(user)

    @BaseService.log_performance
    def clear_cart(self, user: User) -> ServiceResult[int]:
        """
        Remove every line from the user's cart. Clearing an empty cart is a no-op.

        Returns:
            ServiceResult with the number of lines removed
        """
        deleted, _ = CartItem.objects.filter(user=user).delete()

        cart_operations_total.labels(operation="clear", status="success").inc()
        self.logger.info(f"Cleared cart for user {user.id}: {deleted} lines removed")

        return service_ok(deleted)
