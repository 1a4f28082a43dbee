from .order_serializers import (
    OrderDetailSerializer,
    OrderItemSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    PlaceOrderSerializer,
    VendorOrderSerializer,
)


__all__ = [
    "PlaceOrderSerializer",
    "OrderStatusSerializer",
    "OrderItemSerializer",
    "OrderSerializer",
    "OrderDetailSerializer",
    "VendorOrderSerializer",
]
