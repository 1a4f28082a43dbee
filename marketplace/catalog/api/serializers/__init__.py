from .catalog_serializers import (
    CatalogItemSummarySerializer,
    ProductCategorySerializer,
    ProductDetailSerializer,
    ProductSerializer,
    ProductWriteSerializer,
    ServiceCategorySerializer,
    ServiceDetailSerializer,
    ServiceSerializer,
    ServiceWriteSerializer,
)
from .review_serializers import ReviewRequestSerializer, ReviewSerializer


__all__ = [
    "ServiceCategorySerializer",
    "ProductCategorySerializer",
    "ServiceSerializer",
    "ServiceDetailSerializer",
    "ProductSerializer",
    "ProductDetailSerializer",
    "CatalogItemSummarySerializer",
    "ServiceWriteSerializer",
    "ProductWriteSerializer",
    "ReviewSerializer",
    "ReviewRequestSerializer",
]
