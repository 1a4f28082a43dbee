from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.responses import error_response
from marketplace.api.serializers import (
    AnalyticsResponseSerializer,
    CompareProductsRequestSerializer,
    CompareServicesRequestSerializer,
    ComparisonResponseSerializer,
    ErrorResponseSerializer,
    RecommendationsResponseSerializer,
    ResearchProductsRequestSerializer,
    ResearchResponseSerializer,
    ResearchServicesRequestSerializer,
)
from marketplace.research.domain.services import ResearchService


COMMON_ERRORS = {
    400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
    404: OpenApiResponse(response=ErrorResponseSerializer, description="Not found"),
}


class ResearchViewSet(viewsets.ViewSet):
    """Decision support: keyword research, comparison, analytics, recommendations."""

    def get_permissions(self):
        if self.action == "recommendations":
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_service(self) -> ResearchService:
        return container.research_service()

    @staticmethod
    def _respond(result):
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="research_services",
        summary="Research services",
        description="""
        **What it receives:**
        - `query` (required): matched against name, description and category
        - `budget` (optional): maximum price
        - `location` (optional)

        **What it returns:**
        - Up to 10 services ranked by relevance score
        - Insights (averages, verified vendors) and recommendation buckets
        """,
        request=ResearchServicesRequestSerializer,
        responses={200: ResearchResponseSerializer, 400: COMMON_ERRORS[400]},
        tags=["Marketplace - Research"],
    )
    def services(self, request):
        input_serializer = ResearchServicesRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        return self._respond(
            self.get_service().research_services(data.get("query"), data.get("budget"), data.get("location"))
        )

    @extend_schema(
        operation_id="research_products",
        summary="Research products",
        description="""
        **What it receives:**
        - `query` (required)
        - Optional `min_price`, `max_price`, `min_rating`

        **What it returns:**
        - Up to 20 products ranked by relevance score, with discount percentages
        - Price range, average rating/discount and recommendation buckets
        """,
        request=ResearchProductsRequestSerializer,
        responses={200: ResearchResponseSerializer, 400: COMMON_ERRORS[400]},
        tags=["Marketplace - Research"],
    )
    def products(self, request):
        input_serializer = ResearchProductsRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        return self._respond(
            self.get_service().research_products(
                data.get("query"), data.get("min_price"), data.get("max_price"), data.get("min_rating")
            )
        )

    @extend_schema(
        operation_id="research_compare_services",
        summary="Compare 2-5 services",
        request=CompareServicesRequestSerializer,
        responses={200: ComparisonResponseSerializer, **COMMON_ERRORS},
        tags=["Marketplace - Research"],
    )
    def compare_services(self, request):
        input_serializer = CompareServicesRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        return self._respond(self.get_service().compare_services(input_serializer.validated_data.get("service_ids")))

    @extend_schema(
        operation_id="research_compare_products",
        summary="Compare 2-5 products",
        request=CompareProductsRequestSerializer,
        responses={200: ComparisonResponseSerializer, **COMMON_ERRORS},
        tags=["Marketplace - Research"],
    )
    def compare_products(self, request):
        input_serializer = CompareProductsRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        return self._respond(self.get_service().compare_products(input_serializer.validated_data.get("product_ids")))

    @extend_schema(
        operation_id="research_recommendations",
        summary="Personal recommendations",
        description="""
        **What it returns:**
        - `trending`, `new_arrivals` and `personalized` (from your purchase history)
        - `user_insights`: distinct items bought and your top items
        """,
        parameters=[OpenApiParameter(name="type", type=str, description="all (default), services or products")],
        responses={200: RecommendationsResponseSerializer, 400: COMMON_ERRORS[400]},
        tags=["Marketplace - Research"],
    )
    def recommendations(self, request):
        return self._respond(self.get_service().recommendations(request.user, request.query_params.get("type", "all")))

    @extend_schema(
        operation_id="research_analytics",
        summary="Item analytics",
        description="""
        **What it returns:**
        - Rating distribution and sentiment over the latest reviews
        - Price and rating position against up to 5 items in the same category
        """,
        responses={200: AnalyticsResponseSerializer, **COMMON_ERRORS},
        tags=["Marketplace - Research"],
    )
    def analytics(self, request, item_type=None, pk=None):
        return self._respond(self.get_service().analytics(item_type, pk))
