from .catalog import CatalogItem, Product, ProductCategory, Service, ServiceCategory
from .interaction import Review


__all__ = [
    "CatalogItem",
    "ServiceCategory",
    "ProductCategory",
    "Service",
    "Product",
    "Review",
]
