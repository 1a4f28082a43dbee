from .cart import ITEM_TYPE_CHOICES, ITEM_TYPE_PRODUCT, ITEM_TYPE_SERVICE, CartItem


__all__ = ["CartItem", "ITEM_TYPE_CHOICES", "ITEM_TYPE_PRODUCT", "ITEM_TYPE_SERVICE"]
