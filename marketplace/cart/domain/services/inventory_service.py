"""
InventoryService - Stock Management

Resolves cart/order lines to live catalog rows and moves product stock.
Stock is decremented with a single conditional UPDATE
(``stock = stock - q WHERE stock >= q``) so two concurrent checkouts can
never both take the last units; the affected-row count tells us who won.
Services have no stock and always report the ``SERVICE_STOCK_SENTINEL``.
"""

from typing import Union

from django.conf import settings
from django.db.models import F

from marketplace.cart.domain.models.cart import ITEM_TYPE_PRODUCT, ITEM_TYPE_SERVICE
from marketplace.catalog.domain.models.catalog import Product, Service
from marketplace.infra.observability.metrics import stock_released_units, stock_reservation_failures
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


ITEM_MODELS = {
    ITEM_TYPE_SERVICE: Service,
    ITEM_TYPE_PRODUCT: Product,
}


class InventoryService(BaseService):
    """
    Service for catalog lookups and product stock movements.
    """

    def __init__(self):
        """Initialize InventoryService."""
        super().__init__()
        self.service_stock = getattr(settings, "SERVICE_STOCK_SENTINEL", 999)

    def resolve_item(self, item_type: str, item_id, active_only: bool = True) -> ServiceResult[Union[Service, Product]]:
        """
        Fetch the live catalog row for a cart or order line.

        Args:
            item_type: ``"service"`` or ``"product"``
            item_id: Primary key of the item
            active_only: Treat inactive items as missing (default: True)

        Returns:
            ServiceResult with the Service/Product, or INVALID_ITEM_TYPE / ITEM_NOT_FOUND

        Example:
            >>> result = inventory_service.resolve_item("product", 5)
            >>> if result.ok:
            ...     print(result.value.price)
        """
        model = ITEM_MODELS.get(item_type)
        if model is None:
            return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

        try:
            item_id = int(item_id)
        except (TypeError, ValueError):
            return service_err(ErrorCodes.VALIDATION_ERROR, "Invalid item id")

        filters = {"pk": item_id}
        if active_only:
            filters["is_active"] = True

        item = model.objects.filter(**filters).first()
        if item is None:
            return service_err(ErrorCodes.ITEM_NOT_FOUND, f"{item_type.capitalize()} not found")
        return service_ok(item)

    def stock_of(self, item) -> int:
        """Available units; services are never stock-limited."""
        if isinstance(item, Product):
            return item.stock
        return self.service_stock

    @BaseService.log_performance
    def check_availability(self, item_type: str, item_id, quantity: int = 1) -> ServiceResult[bool]:
        """
        Check if an item can cover ``quantity`` units.

        Returns:
            ServiceResult with True/False, or an error if the item is missing

        Example:
            >>> result = inventory_service.check_availability("product", 5, 3)
            >>> if result.ok and result.value:
            ...     print("In stock")
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

        resolved = self.resolve_item(item_type, item_id)
        if not resolved.ok:
            return resolved

        available = self.stock_of(resolved.value) >= quantity
        self.logger.debug(f"Availability check {item_type} #{item_id}: requested={quantity}, result={available}")
        return service_ok(available)

    @BaseService.log_performance
    def reserve_stock(self, product_id, quantity: int, order_number: str = "") -> ServiceResult[dict]:
        """
        Atomically take ``quantity`` units of a product.

        Must run inside the caller's transaction: the decrement only becomes
        permanent when the surrounding checkout commits.

        Returns:
            ServiceResult with ``{"product_id", "quantity_reserved"}`` or INSUFFICIENT_STOCK
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

        updated = Product.objects.filter(pk=product_id, is_active=True, stock__gte=quantity).update(
            stock=F("stock") - quantity
        )

        if updated == 0:
            stock_reservation_failures.inc()
            self.logger.warning(f"Stock reservation failed: product={product_id}, quantity={quantity}")
            return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock")

        self.logger.info(f"Stock reserved: product={product_id}, quantity={quantity}, order={order_number}")
        return service_ok({"product_id": product_id, "quantity_reserved": quantity})

    @BaseService.log_performance
    def release_stock(self, product_id, quantity: int, reason: str = "order_cancelled") -> ServiceResult[dict]:
        """
        Return units to stock (compensating action for a cancelled order).

        Inactive products still get their units back so a later reactivation
        shows the right level.
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be at least 1")

        updated = Product.objects.filter(pk=product_id).update(stock=F("stock") + quantity)
        if updated == 0:
            # Product row removed from the catalog; nothing to restore
            self.logger.warning(f"Stock release skipped, product {product_id} no longer exists")
            return service_err(ErrorCodes.ITEM_NOT_FOUND, "Product not found")

        stock_released_units.inc(quantity)
        self.logger.info(f"Stock released: product={product_id}, quantity={quantity}, reason={reason}")
        return service_ok({"product_id": product_id, "quantity_released": quantity, "reason": reason})
