"""
Response Serializers for Marketplace API Documentation

Most of these define the structure of API responses for OpenAPI schema
generation only. The request serializers (pagination, research bodies) also
validate input.
"""

from rest_framework import serializers

from marketplace.cart.api.serializers import CartSerializer
from marketplace.catalog.api.serializers import (
    CatalogItemSummarySerializer,
    ProductSerializer,
    ReviewSerializer,
    ServiceSerializer,
)
from marketplace.ordering.api.serializers import OrderDetailSerializer, OrderSerializer, VendorOrderSerializer
from marketplace.vendors.api.serializers import BusinessSerializer, BusinessStatsSerializer


# ===== Common =====


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    error = serializers.CharField(help_text="Human-readable error message")


class SuccessResponseSerializer(serializers.Serializer):
    """Generic success response"""

    message = serializers.CharField(help_text="Success message")


class PaginationQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, default=20)
    offset = serializers.IntegerField(min_value=0, default=0)


class PageMetaSerializer(serializers.Serializer):
    total = serializers.IntegerField(help_text="Rows matching the filters")
    limit = serializers.IntegerField()
    offset = serializers.IntegerField()


# ===== Catalog =====


class ServiceListResponseSerializer(PageMetaSerializer):
    services = ServiceSerializer(many=True)


class ProductListResponseSerializer(PageMetaSerializer):
    products = ProductSerializer(many=True)


class ServiceDetailResponseSerializer(serializers.Serializer):
    service = ServiceSerializer()
    reviews = ReviewSerializer(many=True)
    related = CatalogItemSummarySerializer(many=True)


class ProductDetailResponseSerializer(serializers.Serializer):
    product = ProductSerializer()
    reviews = ReviewSerializer(many=True)
    related = CatalogItemSummarySerializer(many=True)


class ReviewResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    review = ReviewSerializer()
    rating = serializers.FloatField(help_text="New average rating of the reviewed item")
    review_count = serializers.IntegerField()


# ===== Cart & Orders =====


class CartMutationResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    cart = CartSerializer()


class PlaceOrderResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    order_number = serializers.CharField()
    order = OrderSerializer()


class OrderListResponseSerializer(PageMetaSerializer):
    orders = OrderSerializer(many=True)


class VendorOrderListResponseSerializer(PageMetaSerializer):
    orders = VendorOrderSerializer(many=True)


class OrderDetailResponseSerializer(serializers.Serializer):
    order = OrderDetailSerializer()


class OrderStatusResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    order = OrderSerializer()


# ===== Businesses =====


class BusinessListResponseSerializer(PageMetaSerializer):
    businesses = BusinessSerializer(many=True)


class BusinessDetailResponseSerializer(serializers.Serializer):
    business = BusinessSerializer()
    services = CatalogItemSummarySerializer(many=True)
    products = CatalogItemSummarySerializer(many=True)
    reviews = ReviewSerializer(many=True)


class BusinessMutationResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    business = BusinessSerializer()


class BusinessStatsResponseSerializer(serializers.Serializer):
    business = BusinessSerializer()
    stats = BusinessStatsSerializer()


# ===== Research =====


class ResearchServicesRequestSerializer(serializers.Serializer):
    query = serializers.CharField(required=False, allow_blank=True, help_text="Keywords (required)")
    budget = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    location = serializers.CharField(required=False, allow_blank=True)
    preferences = serializers.DictField(required=False)


class ResearchProductsRequestSerializer(serializers.Serializer):
    query = serializers.CharField(required=False, allow_blank=True, help_text="Keywords (required)")
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    min_rating = serializers.FloatField(min_value=0, max_value=5, required=False, allow_null=True)
    preferences = serializers.DictField(required=False)


class CompareServicesRequestSerializer(serializers.Serializer):
    # Count and numeric checks happen in ResearchService
    service_ids = serializers.ListField(required=False, help_text="2 to 5 service IDs")


class CompareProductsRequestSerializer(serializers.Serializer):
    product_ids = serializers.ListField(required=False, help_text="2 to 5 product IDs")


class ResearchResponseSerializer(serializers.Serializer):
    query = serializers.CharField()
    insights = serializers.DictField()
    search_metadata = serializers.DictField()


class ComparisonResponseSerializer(serializers.Serializer):
    insights = serializers.DictField()
    recommendation = serializers.DictField()


class RecommendationsResponseSerializer(serializers.Serializer):
    recommendations = serializers.DictField(help_text="personalized, trending and new_arrivals lists")
    user_insights = serializers.DictField()


class AnalyticsResponseSerializer(serializers.Serializer):
    item = serializers.DictField()
    performance = serializers.DictField()
    competitive_analysis = serializers.DictField()
    sentiment_summary = serializers.DictField()


# ===== System =====


class HealthResponseSerializer(serializers.Serializer):
    status = serializers.CharField()
    timestamp = serializers.DateTimeField()
    version = serializers.CharField()
    name = serializers.CharField()


class StatsResponseSerializer(serializers.Serializer):
    businesses = serializers.IntegerField()
    services = serializers.IntegerField()
    products = serializers.IntegerField()
    orders = serializers.IntegerField()
