from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.pagination import pagination_params
from marketplace.api.responses import error_response
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    ProductDetailResponseSerializer,
    ProductListResponseSerializer,
    ReviewResponseSerializer,
    ServiceDetailResponseSerializer,
    ServiceListResponseSerializer,
)
from marketplace.cart.domain.models.cart import ITEM_TYPE_PRODUCT, ITEM_TYPE_SERVICE
from marketplace.catalog.api.serializers import (
    CatalogItemSummarySerializer,
    ProductCategorySerializer,
    ProductDetailSerializer,
    ProductSerializer,
    ProductWriteSerializer,
    ReviewRequestSerializer,
    ReviewSerializer,
    ServiceCategorySerializer,
    ServiceDetailSerializer,
    ServiceSerializer,
    ServiceWriteSerializer,
)
from marketplace.permissions import IsVendor


LIST_PARAMETERS = [
    OpenApiParameter(name="category", type=str, description="Category slug"),
    OpenApiParameter(name="search", type=str, description="Search in name and description"),
    OpenApiParameter(name="min_price", type=float, description="Minimum price"),
    OpenApiParameter(name="max_price", type=float, description="Maximum price"),
    OpenApiParameter(
        name="sort", type=str, description="popular (default), price_low, price_high, rating, newest"
    ),
    OpenApiParameter(name="limit", type=int, description="Page size (default: 20, max: 100)"),
    OpenApiParameter(name="offset", type=int, description="Rows to skip (default: 0)"),
]


class CatalogViewSet(viewsets.ViewSet):
    """
    Shared browse/create/update/review endpoints for one catalog kind.

    Subclasses set ``kind`` and the serializers; the response keys follow the
    kind (``service``/``services`` or ``product``/``products``).
    """

    kind = None
    category_serializer_class = None
    serializer_class = None
    detail_serializer_class = None
    write_serializer_class = None

    def get_permissions(self):
        if self.action in ("create", "update"):
            return [IsAuthenticated(), IsVendor()]
        if self.action == "review":
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_service(self):
        return container.catalog_service()

    @property
    def plural(self):
        return f"{self.kind}s"

    @extend_schema(summary="List categories with active item counts")
    def categories(self, request):
        result = self.get_service().list_categories(self.kind)
        if not result.ok:
            return error_response(result)
        return Response({"categories": self.category_serializer_class(result.value, many=True).data})

    @extend_schema(
        summary="Browse the catalog",
        description="""
        **What it receives:**
        - Optional filters: `category` (slug), `search`, price range, `sort`
        - `limit` / `offset` pagination

        **What it returns:**
        - Active items with category and vendor display fields
        - `total` rows matching the filters
        """,
    )
    def list(self, request):
        limit, offset = pagination_params(request)
        result = self.get_service().list_items(self.kind, request.query_params, limit, offset)
        if not result.ok:
            return error_response(result)

        page = result.value
        return Response(
            {
                self.plural: self.serializer_class(page["items"], many=True).data,
                "total": page["total"],
                "limit": page["limit"],
                "offset": page["offset"],
            }
        )

    @extend_schema(
        summary="Item details",
        description="""
        **What it returns:**
        - The item with vendor contact details
        - The 10 latest reviews
        - Up to 4 related items from the same category
        """,
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_item_detail(self.kind, pk)
        if not result.ok:
            return error_response(result)

        detail = result.value
        return Response(
            {
                self.kind: self.detail_serializer_class(detail["item"]).data,
                "reviews": ReviewSerializer(detail["reviews"], many=True).data,
                "related": CatalogItemSummarySerializer(detail["related"], many=True).data,
            }
        )

    @extend_schema(summary="Create an item (vendor)")
    def create(self, request):
        input_serializer = self.write_serializer_class(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = self.get_service().create_item(self.kind, request.user, input_serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(
            {"message": f"{self.kind.capitalize()} created", self.kind: self.serializer_class(result.value).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(summary="Update an item (owner or admin)")
    def update(self, request, pk=None):
        input_serializer = self.write_serializer_class(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = self.get_service().update_item(self.kind, request.user, pk, input_serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(
            {"message": f"{self.kind.capitalize()} updated", self.kind: self.serializer_class(result.value).data}
        )

    @extend_schema(
        summary="Rate an item",
        description="""
        **What it receives:**
        - `rating` (1-5) and optional `comment`

        **What it returns:**
        - The review and the item's new average rating. Reviewing again replaces your earlier review.
        """,
        request=ReviewRequestSerializer,
    )
    def review(self, request, pk=None):
        input_serializer = ReviewRequestSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        result = container.review_service().submit_review(request.user, self.kind, pk, data["rating"], data["comment"])
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


def _catalog_schema(kind, list_response, detail_response, write_serializer):
    """Per-kind OpenAPI metadata for the shared CatalogViewSet actions."""
    tag = [f"Marketplace - {kind.capitalize()}s"]
    errors = {
        400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
        404: OpenApiResponse(response=ErrorResponseSerializer, description=f"{kind.capitalize()} not found"),
    }
    return extend_schema_view(
        categories=extend_schema(operation_id=f"{kind}s_categories", tags=tag),
        list=extend_schema(
            operation_id=f"{kind}s_list", tags=tag, parameters=LIST_PARAMETERS, responses={200: list_response}
        ),
        retrieve=extend_schema(
            operation_id=f"{kind}s_retrieve", tags=tag, responses={200: detail_response, 404: errors[404]}
        ),
        create=extend_schema(
            operation_id=f"{kind}s_create",
            tags=tag,
            request=write_serializer,
            responses={201: detail_response, **errors, 403: ErrorResponseSerializer},
        ),
        update=extend_schema(
            operation_id=f"{kind}s_update",
            tags=tag,
            request=write_serializer,
            responses={200: detail_response, **errors, 403: ErrorResponseSerializer},
        ),
        review=extend_schema(
            operation_id=f"{kind}s_review", tags=tag, responses={200: ReviewResponseSerializer, **errors}
        ),
    )


@_catalog_schema(
    ITEM_TYPE_SERVICE, ServiceListResponseSerializer, ServiceDetailResponseSerializer, ServiceWriteSerializer
)
class ServiceViewSet(CatalogViewSet):
    kind = ITEM_TYPE_SERVICE
    category_serializer_class = ServiceCategorySerializer
    serializer_class = ServiceSerializer
    detail_serializer_class = ServiceDetailSerializer
    write_serializer_class = ServiceWriteSerializer


@_catalog_schema(
    ITEM_TYPE_PRODUCT, ProductListResponseSerializer, ProductDetailResponseSerializer, ProductWriteSerializer
)
class ProductViewSet(CatalogViewSet):
    kind = ITEM_TYPE_PRODUCT
    category_serializer_class = ProductCategorySerializer
    serializer_class = ProductSerializer
    detail_serializer_class = ProductDetailSerializer
    write_serializer_class = ProductWriteSerializer

    @extend_schema(
        operation_id="products_featured",
        summary="Featured products",
        responses={200: ProductSerializer(many=True)},
        tags=["Marketplace - Products"],
    )
    def featured(self, request):
        result = self.get_service().featured_products()
        if not result.ok:
            return error_response(result)
        return Response({"products": ProductSerializer(result.value, many=True).data})
