from .cart_serializers import AddToCartSerializer, CartLineSerializer, CartSerializer, UpdateCartSerializer


__all__ = ["AddToCartSerializer", "UpdateCartSerializer", "CartLineSerializer", "CartSerializer"]
