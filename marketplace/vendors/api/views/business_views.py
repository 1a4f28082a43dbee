from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.pagination import pagination_params
from marketplace.api.responses import error_response
from marketplace.api.serializers import (
    BusinessDetailResponseSerializer,
    BusinessListResponseSerializer,
    BusinessMutationResponseSerializer,
    BusinessStatsResponseSerializer,
    ErrorResponseSerializer,
    ReviewResponseSerializer,
)
from marketplace.catalog.api.serializers import CatalogItemSummarySerializer, ReviewRequestSerializer, ReviewSerializer
from marketplace.catalog.domain.models.interaction import Review
from marketplace.permissions import IsVendor
from marketplace.vendors.api.serializers import (
    BusinessRegisterSerializer,
    BusinessSerializer,
    BusinessStatsSerializer,
    BusinessUpdateSerializer,
)
from marketplace.vendors.domain.services import BusinessService


class BusinessViewSet(viewsets.ViewSet):
    """Local business directory and vendor onboarding."""

    def get_permissions(self):
        if self.action in ("update_mine", "my_stats"):
            return [IsAuthenticated(), IsVendor()]
        if self.action in ("register", "review"):
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_service(self) -> BusinessService:
        return container.business_service()

    @extend_schema(
        operation_id="businesses_list",
        summary="Browse local businesses",
        description="""
        **What it receives:**
        - `type`: service, product or both (businesses offering both always match)
        - `area`: locality, partial match
        - `search`: business name or description

        **What it returns:**
        - Active businesses, verified and best rated first
        """,
        parameters=[
            OpenApiParameter(name="type", type=str, description="service, product or both"),
            OpenApiParameter(name="area", type=str, description="Area / locality"),
            OpenApiParameter(name="search", type=str, description="Search in name and description"),
            OpenApiParameter(name="limit", type=int, description="Page size (default: 20, max: 100)"),
            OpenApiParameter(name="offset", type=int, description="Rows to skip (default: 0)"),
        ],
        responses={200: BusinessListResponseSerializer},
        tags=["Marketplace - Businesses"],
    )
    def list(self, request):
        limit, offset = pagination_params(request)
        result = self.get_service().list_businesses(request.query_params, limit, offset)
        if not result.ok:
            return error_response(result)

        page = result.value
        return Response(
            {
                "businesses": BusinessSerializer(page["businesses"], many=True).data,
                "total": page["total"],
                "limit": page["limit"],
                "offset": page["offset"],
            }
        )

    @extend_schema(
        operation_id="businesses_retrieve",
        summary="Business profile",
        responses={
            200: BusinessDetailResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Business not found"),
        },
        tags=["Marketplace - Businesses"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_business(pk)
        if not result.ok:
            return error_response(result)

        detail = result.value
        return Response(
            {
                "business": BusinessSerializer(detail["business"]).data,
                "services": CatalogItemSummarySerializer(detail["services"], many=True).data,
                "products": CatalogItemSummarySerializer(detail["products"], many=True).data,
                "reviews": ReviewSerializer(detail["reviews"], many=True).data,
            }
        )

    @extend_schema(
        operation_id="businesses_register",
        summary="Register your business",
        description="""
        **What it receives:**
        - `business_name`, `business_type` (service/product/both), `address`, `area`
        - `pincode` (6 digits), `phone` (Indian mobile number)
        - Optional: description, logo, whatsapp (defaults to phone), email, gstin

        **What it returns:**
        - The business, pending verification. Your account becomes a vendor account.
        """,
        request=BusinessRegisterSerializer,
        responses={
            201: BusinessMutationResponseSerializer,
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Validation error or already registered"
            ),
        },
        tags=["Marketplace - Businesses"],
    )
    def register(self, request):
        input_serializer = BusinessRegisterSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = self.get_service().register_business(request.user, input_serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(
            {
                "message": "Business registered successfully. Verification pending.",
                "business": BusinessSerializer(result.value).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="businesses_update_mine",
        summary="Update your business (vendor)",
        request=BusinessUpdateSerializer,
        responses={
            200: BusinessMutationResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="No fields to update"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Business not found"),
        },
        tags=["Marketplace - Businesses"],
    )
    def update_mine(self, request):
        input_serializer = BusinessUpdateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = self.get_service().update_business(request.user, input_serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response({"message": "Business updated", "business": BusinessSerializer(result.value).data})

    @extend_schema(
        operation_id="businesses_my_stats",
        summary="Vendor dashboard numbers",
        responses={
            200: BusinessStatsResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Business not found"),
        },
        tags=["Marketplace - Businesses"],
    )
    def my_stats(self, request):
        result = self.get_service().get_stats(request.user)
        if not result.ok:
            return error_response(result)

        return Response(
            {
                "business": BusinessSerializer(result.value["business"]).data,
                "stats": BusinessStatsSerializer(result.value["stats"]).data,
            }
        )

    @extend_schema(
        operation_id="businesses_review",
        summary="Rate a business",
        request=ReviewRequestSerializer,
        responses={
            200: ReviewResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Rating must be 1-5"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Business not found"),
        },
        tags=["Marketplace - Businesses"],
    )
    def review(self, request, pk=None):
        input_serializer = ReviewRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        result = container.review_service().submit_review(
            request.user, Review.TYPE_BUSINESS, pk, data["rating"], data["comment"]
        )
        if not result.ok:
            return error_response(result)

        outcome = result.value
        return Response(
            {
                "message": "Review submitted",
                "review": ReviewSerializer(outcome["review"]).data,
                "rating": outcome["rating"],
                "review_count": outcome["review_count"],
            }
        )
