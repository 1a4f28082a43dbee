# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import (
    AnalyticsResponseSerializer,
    BusinessDetailResponseSerializer,
    BusinessListResponseSerializer,
    BusinessMutationResponseSerializer,
    BusinessStatsResponseSerializer,
    CartMutationResponseSerializer,
    CompareProductsRequestSerializer,
    CompareServicesRequestSerializer,
    ComparisonResponseSerializer,
    ErrorResponseSerializer,
    HealthResponseSerializer,
    OrderDetailResponseSerializer,
    OrderListResponseSerializer,
    OrderStatusResponseSerializer,
    PageMetaSerializer,
    PaginationQuerySerializer,
    PlaceOrderResponseSerializer,
    ProductDetailResponseSerializer,
    ProductListResponseSerializer,
    RecommendationsResponseSerializer,
    ResearchProductsRequestSerializer,
    ResearchResponseSerializer,
    ResearchServicesRequestSerializer,
    ReviewResponseSerializer,
    ServiceDetailResponseSerializer,
    ServiceListResponseSerializer,
    StatsResponseSerializer,
    SuccessResponseSerializer,
    VendorOrderListResponseSerializer,
)


__all__ = [
    "ErrorResponseSerializer",
    "SuccessResponseSerializer",
    "PaginationQuerySerializer",
    "PageMetaSerializer",
    "ServiceListResponseSerializer",
    "ProductListResponseSerializer",
    "ServiceDetailResponseSerializer",
    "ProductDetailResponseSerializer",
    "ReviewResponseSerializer",
    "CartMutationResponseSerializer",
    "PlaceOrderResponseSerializer",
    "OrderListResponseSerializer",
    "VendorOrderListResponseSerializer",
    "OrderDetailResponseSerializer",
    "OrderStatusResponseSerializer",
    "BusinessListResponseSerializer",
    "BusinessDetailResponseSerializer",
    "BusinessMutationResponseSerializer",
    "BusinessStatsResponseSerializer",
    "ResearchServicesRequestSerializer",
    "ResearchProductsRequestSerializer",
    "CompareServicesRequestSerializer",
    "CompareProductsRequestSerializer",
    "ResearchResponseSerializer",
    "ComparisonResponseSerializer",
    "RecommendationsResponseSerializer",
    "AnalyticsResponseSerializer",
    "HealthResponseSerializer",
    "StatsResponseSerializer",
]
