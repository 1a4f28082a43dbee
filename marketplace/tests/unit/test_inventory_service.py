from unittest.mock import MagicMock, Mock, patch

import pytest

from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.models import Product, Service
from marketplace.services.base import ErrorCodes


@pytest.mark.unit
class TestInventoryServiceUnit:
    def setup_method(self):
        self.service = InventoryService()
        self.product_id = 42

    def _product(self, stock):
        product = Mock(spec=Product)
        product.pk = self.product_id
        product.stock = stock
        product.name = "Nellore Masuri Rice"
        return product

    @patch("marketplace.models.Product.objects.filter")
    def test_resolve_item_success(self, mock_filter):
        product = self._product(stock=10)
        mock_filter.return_value.first.return_value = product

        result = self.service.resolve_item("product", "42")

        assert result.ok
        assert result.value is product
        mock_filter.assert_called_once_with(pk=42, is_active=True)

    @patch("marketplace.models.Product.objects.filter")
    def test_resolve_item_includes_inactive_on_request(self, mock_filter):
        mock_filter.return_value.first.return_value = self._product(stock=1)

        self.service.resolve_item("product", 42, active_only=False)

        mock_filter.assert_called_once_with(pk=42)

    @patch("marketplace.models.Product.objects.filter")
    def test_resolve_item_not_found(self, mock_filter):
        mock_filter.return_value.first.return_value = None

        result = self.service.resolve_item("product", 42)

        assert not result.ok
        assert result.error == ErrorCodes.ITEM_NOT_FOUND
        assert result.error_detail == "Product not found"

    def test_resolve_item_invalid_type(self):
        result = self.service.resolve_item("vehicle", 1)
        assert not result.ok
        assert result.error == ErrorCodes.INVALID_ITEM_TYPE

    def test_resolve_item_invalid_id(self):
        result = self.service.resolve_item("product", "abc")
        assert not result.ok
        assert result.error == ErrorCodes.VALIDATION_ERROR

    def test_services_report_sentinel_stock(self):
        service = Mock(spec=Service)
        assert self.service.stock_of(service) == 999

    def test_products_report_their_stock(self):
        assert self.service.stock_of(self._product(stock=3)) == 3

    @patch("marketplace.models.Product.objects.filter")
    def test_check_availability(self, mock_filter):
        mock_filter.return_value.first.return_value = self._product(stock=3)

        assert self.service.check_availability("product", 42, quantity=3).value is True
        assert self.service.check_availability("product", 42, quantity=4).value is False

    def test_check_availability_negative_quantity(self):
        result = self.service.check_availability("product", self.product_id, quantity=-1)
        assert not result.ok
        assert result.error == ErrorCodes.INVALID_QUANTITY

    @patch("marketplace.models.Product.objects.filter")
    def test_reserve_stock_success(self, mock_filter):
        mock_queryset = MagicMock()
        mock_queryset.update.return_value = 1
        mock_filter.return_value = mock_queryset

        result = self.service.reserve_stock(self.product_id, quantity=2, order_number="NLRX")

        assert result.ok
        assert result.value == {"product_id": self.product_id, "quantity_reserved": 2}
        mock_filter.assert_called_once_with(pk=self.product_id, is_active=True, stock__gte=2)
        mock_queryset.update.assert_called_once()

    @patch("marketplace.models.Product.objects.filter")
    def test_reserve_stock_insufficient(self, mock_filter):
        mock_filter.return_value.update.return_value = 0

        result = self.service.reserve_stock(self.product_id, quantity=2)

        assert not result.ok
        assert result.error == ErrorCodes.INSUFFICIENT_STOCK

    def test_reserve_stock_negative_quantity(self):
        result = self.service.reserve_stock(self.product_id, quantity=-1)
        assert not result.ok
        assert result.error == ErrorCodes.INVALID_QUANTITY

    @patch("marketplace.models.Product.objects.filter")
    def test_release_stock(self, mock_filter):
        mock_filter.return_value.update.return_value = 1

        result = self.service.release_stock(self.product_id, quantity=2)

        assert result.ok
        assert result.value["quantity_released"] == 2
        assert result.value["reason"] == "order_cancelled"
        mock_filter.assert_called_once_with(pk=self.product_id)

    @patch("marketplace.models.Product.objects.filter")
    def test_release_stock_missing_product(self, mock_filter):
        mock_filter.return_value.update.return_value = 0

        result = self.service.release_stock(self.product_id, quantity=2)

        assert not result.ok
        assert result.error == ErrorCodes.ITEM_NOT_FOUND
