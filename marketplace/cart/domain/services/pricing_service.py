"""
PricingService - Price Calculations

Line totals, cart totals, the flat delivery fee and MRP discounts.
All calculations use Decimal for precision (no floating point errors).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from django.conf import settings

from marketplace.cart.domain.models.cart import ITEM_TYPE_PRODUCT
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


CENT = Decimal("0.01")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class PricingService(BaseService):
    """
    Service for calculating prices, delivery fees and totals.

    Responsibilities:
    - Line totals (unit price x quantity)
    - Cart totals shown to the customer
    - Order totals including the delivery fee
    - Discount percentage off MRP

    All methods are stateless (pure functions) for easy testing.
    """

    def __init__(self):
        """Initialize PricingService."""
        super().__init__()
        self.delivery_fee = Decimal(str(getattr(settings, "DELIVERY_FEE", "39")))
        self.free_delivery_threshold = Decimal(str(getattr(settings, "FREE_DELIVERY_THRESHOLD", "500")))

    def line_total(self, price, quantity: int) -> Decimal:
        return money(Decimal(str(price)) * quantity)

    def calculate_delivery_fee(self, order_type: str, subtotal: Decimal) -> Decimal:
        """
        Flat fee for product orders under the free-delivery threshold; services never pay it.

        Example:
            >>> pricing_service.calculate_delivery_fee("product", Decimal("499"))
            Decimal('39.00')
            >>> pricing_service.calculate_delivery_fee("product", Decimal("500"))
            Decimal('0.00')
        """
        if order_type == ITEM_TYPE_PRODUCT and subtotal < self.free_delivery_threshold:
            return money(self.delivery_fee)
        return money(0)

    def calculate_discount_percentage(self, price, mrp: Optional[Decimal]) -> Decimal:
        """
        Percentage off MRP, 2 decimal places; 0 when there is no MRP above price.

        Example:
            >>> pricing_service.calculate_discount_percentage(Decimal("80"), Decimal("100"))
            Decimal('20.00')
        """
        if not mrp:
            return money(0)

        mrp = Decimal(str(mrp))
        price = Decimal(str(price))
        if mrp <= 0 or mrp <= price:
            return money(0)

        # Calculate percentage: ((mrp - price) / mrp) * 100
        return ((mrp - price) / mrp * Decimal("100")).quantize(CENT, rounding=ROUND_HALF_UP)

    @BaseService.log_performance
    def calculate_cart_total(self, cart_lines: List[Dict]) -> ServiceResult[Dict]:
        """
        Calculate the customer-facing cart total.

        Args:
            cart_lines: List of dicts with 'price' and 'quantity'

        Returns:
            ServiceResult with ``{"total", "count"}``; count is the number of lines

        Example:
            >>> result = pricing_service.calculate_cart_total([{"price": Decimal("20"), "quantity": 2}])
            >>> result.value["total"]
            Decimal('40.00')
        """
        total = Decimal("0")
        for line in cart_lines:
            quantity = line.get("quantity", 0)
            if quantity <= 0:
                return service_err(ErrorCodes.INVALID_QUANTITY, f"Invalid quantity: {quantity}")
            total += Decimal(str(line["price"])) * quantity

        return service_ok({"total": money(total), "count": len(cart_lines)})

    @BaseService.log_performance
    def calculate_order_total(self, order_lines: List[Dict], order_type: str) -> ServiceResult[Dict[str, Decimal]]:
        """
        Calculate totals for an order.

        Args:
            order_lines: List of dicts with 'price' and 'quantity'
            order_type: ``"service"`` or ``"product"`` (drives the delivery fee)

        Returns:
            ServiceResult with subtotal, delivery_fee, discount and total, where
            ``total == subtotal + delivery_fee``
        """
        if not order_lines:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Order must contain at least one item")

        subtotal = Decimal("0")
        for line in order_lines:
            quantity = line.get("quantity", 0)
            if quantity <= 0:
                return service_err(ErrorCodes.INVALID_QUANTITY, f"Invalid quantity: {quantity}")
            subtotal += self.line_total(line["price"], quantity)

        delivery_fee = self.calculate_delivery_fee(order_type, subtotal)
        discount = money(0)
        total = subtotal + delivery_fee - discount

        self.logger.info(f"Order total calculated: lines={len(order_lines)}, fee={delivery_fee}, total={total}")

        return service_ok(
            {
                "subtotal": money(subtotal),
                "delivery_fee": delivery_fee,
                "discount": discount,
                "total": money(total),
            }
        )
