from .order_number import generate_order_number
from .order_service import OrderService


__all__ = ["OrderService", "generate_order_number"]
