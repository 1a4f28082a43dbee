from decimal import Decimal

import pytest
from django.test import override_settings

from marketplace.cart.domain.services.pricing_service import PricingService, money
from marketplace.services.base import ErrorCodes


@pytest.mark.unit
class TestPricingServiceUnit:
    def setup_method(self):
        self.service = PricingService()

    def test_money_rounds_half_up(self):
        assert money("10.005") == Decimal("10.01")
        assert money(3) == Decimal("3.00")

    def test_line_total(self):
        assert self.service.line_total(Decimal("149.50"), 3) == Decimal("448.50")

    def test_delivery_fee_below_threshold(self):
        assert self.service.calculate_delivery_fee("product", Decimal("499.99")) == Decimal("39.00")

    def test_delivery_fee_free_at_threshold(self):
        assert self.service.calculate_delivery_fee("product", Decimal("500")) == Decimal("0.00")

    def test_services_never_pay_delivery(self):
        assert self.service.calculate_delivery_fee("service", Decimal("10")) == Decimal("0.00")

    @override_settings(DELIVERY_FEE=Decimal("25"), FREE_DELIVERY_THRESHOLD=Decimal("1000"))
    def test_delivery_fee_reads_settings(self):
        service = PricingService()
        assert service.calculate_delivery_fee("product", Decimal("999")) == Decimal("25.00")

    def test_calculate_discount_percentage(self):
        assert self.service.calculate_discount_percentage(Decimal("100"), Decimal("200")) == Decimal("50.00")

    def test_discount_zero_without_mrp(self):
        assert self.service.calculate_discount_percentage(Decimal("100"), None) == Decimal("0.00")
        assert self.service.calculate_discount_percentage(Decimal("100"), Decimal("0")) == Decimal("0.00")

    def test_discount_zero_when_mrp_below_price(self):
        assert self.service.calculate_discount_percentage(Decimal("120"), Decimal("100")) == Decimal("0.00")

    def test_calculate_cart_total_empty(self):
        result = self.service.calculate_cart_total([])
        assert result.ok
        assert result.value["total"] == Decimal("0.00")
        assert result.value["count"] == 0

    def test_calculate_cart_total(self):
        lines = [
            {"price": Decimal("399"), "quantity": 7},
            {"price": Decimal("149"), "quantity": 1},
        ]

        result = self.service.calculate_cart_total(lines)
        assert result.ok
        assert result.value["total"] == Decimal("2942.00")
        assert result.value["count"] == 2

    def test_calculate_cart_total_rejects_bad_quantity(self):
        result = self.service.calculate_cart_total([{"price": Decimal("10"), "quantity": 0}])
        assert not result.ok
        assert result.error == ErrorCodes.INVALID_QUANTITY

    def test_calculate_order_total_product_under_threshold(self):
        # 2 x 199 = 398, under 500 so the flat fee applies
        result = self.service.calculate_order_total([{"price": Decimal("199"), "quantity": 2}], "product")

        assert result.ok
        assert result.value["subtotal"] == Decimal("398.00")
        assert result.value["delivery_fee"] == Decimal("39.00")
        assert result.value["discount"] == Decimal("0.00")
        assert result.value["total"] == Decimal("437.00")

    def test_calculate_order_total_service(self):
        result = self.service.calculate_order_total([{"price": Decimal("149"), "quantity": 1}], "service")

        assert result.ok
        assert result.value["delivery_fee"] == Decimal("0.00")
        assert result.value["total"] == result.value["subtotal"] == Decimal("149.00")

    def test_calculate_order_total_empty(self):
        result = self.service.calculate_order_total([], "product")
        assert not result.ok
        assert result.error == ErrorCodes.VALIDATION_ERROR
