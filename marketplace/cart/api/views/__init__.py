from .cart_views import CartViewSet


__all__ = ["CartViewSet"]
