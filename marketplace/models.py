from marketplace.cart.domain.models import CartItem
from marketplace.catalog.domain.models import (
    Product,
    ProductCategory,
    Review,
    Service,
    ServiceCategory,
)
from marketplace.ordering.domain.models import Order, OrderItem
from marketplace.vendors.domain.models import Business


__all__ = [
    "ServiceCategory",
    "ProductCategory",
    "Service",
    "Product",
    "Review",
    "Business",
    "CartItem",
    "Order",
    "OrderItem",
]
