from decimal import Decimal
from unittest.mock import Mock, patch

import pytest

from infrastructure.events import EventBus
from marketplace.cart.domain.services import CartService, InventoryService, PricingService
from marketplace.ordering.domain.services.order_service import OrderService
from marketplace.services.base import ErrorCodes, service_err, service_ok


def catalog_item(pk, vendor_id, price="100.00", name=None):
    item = Mock()
    item.pk = pk
    item.vendor_id = vendor_id
    item.price = Decimal(price)
    item.name = name or f"Item {pk}"
    return item


@pytest.mark.unit
class TestOrderServiceUnit:
    def setup_method(self):
        self.inventory_service = Mock(spec=InventoryService)
        self.pricing_service = Mock(spec=PricingService)
        self.cart_service = Mock(spec=CartService)
        self.event_bus = Mock(spec=EventBus)

        self.service = OrderService(
            cart_service=self.cart_service,
            inventory_service=self.inventory_service,
            pricing_service=self.pricing_service,
            event_bus=self.event_bus,
        )

        self.user = Mock()
        self.user.id = 1
        self.items = {
            10: catalog_item(10, vendor_id=5, name="Plumber"),
            11: catalog_item(11, vendor_id=5, name="Electrician"),
            12: catalog_item(12, vendor_id=6, name="Carpenter"),
        }
        self.inventory_service.resolve_item.side_effect = lambda item_type, item_id: (
            service_ok(self.items[int(item_id)]) if int(item_id) in self.items else service_err(
                ErrorCodes.ITEM_NOT_FOUND, "Service not found"
            )
        )
        self.inventory_service.stock_of.return_value = 999

    def _place(self, items, address="12 Trunk Road", order_type="service"):
        return self.service.place_order(self.user, order_type, items, {"delivery_address": address})

    def test_requires_order_type_and_items(self):
        result = self._place([])

        assert not result.ok
        assert result.error == ErrorCodes.VALIDATION_ERROR
        assert result.error_detail == "Order type and items are required"
        self.event_bus.publish.assert_not_called()

    def test_rejects_unknown_order_type(self):
        result = self._place([{"item_id": 10}], order_type="rental")
        assert result.error == ErrorCodes.VALIDATION_ERROR

    def test_requires_delivery_address(self):
        result = self._place([{"item_id": 10}], address="   ")

        assert not result.ok
        assert result.error_detail == "Delivery address is required"
        self.inventory_service.resolve_item.assert_not_called()

    def test_lines_resolve_by_their_own_item_type(self):
        result = self.service._validate_lines("service", [{"item_type": "product", "item_id": 10}, {"item_id": 11}])

        assert result.ok
        assert [line["item_type"] for line in result.value] == ["product", "service"]
        self.inventory_service.resolve_item.assert_any_call("product", 10)
        self.inventory_service.resolve_item.assert_any_call("service", 11)

    @patch("marketplace.ordering.domain.services.order_service.orders_placed_total")
    def test_items_must_be_a_list(self, mock_counter):
        result = self._place({"item_id": 10})

        assert result.error_detail == "Order items must be a list"
        mock_counter.labels.assert_called_once_with(status="rejected", order_type="service")
        mock_counter.labels.return_value.inc.assert_called_once()

    def test_rejects_bad_quantity(self):
        result = self._place([{"item_id": 10, "quantity": 0}])
        assert result.error == ErrorCodes.INVALID_QUANTITY

    def test_missing_item_is_reported(self):
        result = self._place([{"item_id": 99}])
        assert result.error == ErrorCodes.ITEM_NOT_FOUND

    def test_rejects_mixed_vendors_before_writing(self):
        result = self._place([{"item_id": 10}, {"item_id": 12}])

        assert not result.ok
        assert result.error == ErrorCodes.MIXED_VENDOR_ORDER
        self.pricing_service.calculate_order_total.assert_not_called()
        self.inventory_service.reserve_stock.assert_not_called()
        self.cart_service.clear_cart.assert_not_called()

    def test_insufficient_stock_names_the_item(self):
        self.inventory_service.stock_of.return_value = 1

        result = self._place([{"item_id": 10, "quantity": 2}])

        assert result.error == ErrorCodes.INSUFFICIENT_STOCK
        assert result.error_detail == "Insufficient stock for Plumber"

    def test_validate_lines_merges_duplicates(self):
        result = self.service._validate_lines(
            "service",
            [{"item_id": 10, "quantity": 1}, {"item_id": 11}, {"item_id": 10, "quantity": 2}],
        )

        assert result.ok
        lines = {line["item_id"]: line for line in result.value}
        assert lines[10]["quantity"] == 3
        assert lines[11]["quantity"] == 1
        assert lines[10]["price"] == Decimal("100.00")
        assert lines[10]["vendor_id"] == 5

    def test_merged_quantity_is_checked_against_stock(self):
        self.inventory_service.stock_of.return_value = 2

        result = self.service._validate_lines("service", [{"item_id": 10}, {"item_id": 10}, {"item_id": 10}])

        assert result.error == ErrorCodes.INSUFFICIENT_STOCK

    def test_set_status_rejects_unknown_status(self):
        result = self.service.set_status(1, "shipped", Mock())

        assert result.error == ErrorCodes.INVALID_STATUS
        self.event_bus.publish.assert_not_called()

    def test_set_status_rejects_non_string_status(self):
        assert self.service.set_status(1, None, Mock()).error == ErrorCodes.INVALID_STATUS

    def test_set_status_bad_order_id(self):
        assert self.service.set_status("abc", "confirmed", Mock()).error == ErrorCodes.ORDER_NOT_FOUND
