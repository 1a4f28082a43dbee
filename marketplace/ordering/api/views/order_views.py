from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.pagination import pagination_params
from marketplace.api.responses import error_response
from marketplace.api.serializers import (
    ErrorResponseSerializer,
    OrderDetailResponseSerializer,
    OrderListResponseSerializer,
    OrderStatusResponseSerializer,
    PlaceOrderResponseSerializer,
    VendorOrderListResponseSerializer,
)
from marketplace.ordering.api.serializers import (
    OrderDetailSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    PlaceOrderSerializer,
    VendorOrderSerializer,
)
from marketplace.ordering.domain.services import OrderService
from marketplace.permissions import IsVendor


LIST_PARAMETERS = [
    OpenApiParameter(name="status", type=str, description="Filter by order status"),
    OpenApiParameter(name="limit", type=int, description="Page size (default: 20, max: 100)"),
    OpenApiParameter(name="offset", type=int, description="Rows to skip (default: 0)"),
]


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action in ("set_status", "vendor_orders"):
            return [IsAuthenticated(), IsVendor()]
        return super().get_permissions()

    def get_service(self) -> OrderService:
        return container.order_service()

    @extend_schema(
        operation_id="orders_create",
        summary="Place an order",
        description="""
        **What it receives:**
        - `order_type`: `service` or `product`
        - `items`: list of `{item_type, item_id, quantity}`; all from one vendor
        - `delivery_address` (required) plus optional area, city, pincode
        - `scheduled_date` / `scheduled_time` for service visits, `notes`
        - `payment_method` (default: `cod`)

        **What it returns:**
        - The created order with server-computed subtotal, delivery fee and total
        - `order_number`: human-readable reference (e.g. `NLR...`)

        Stock is decremented and the cart is cleared in the same transaction.
        """,
        request=PlaceOrderSerializer,
        responses={
            201: OpenApiResponse(response=PlaceOrderResponseSerializer, description="Order placed"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Validation error, mixed vendors or insufficient stock"
            ),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        input_serializer = PlaceOrderSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = dict(input_serializer.validated_data)

        order_type = data.pop("order_type")
        items = [dict(line) for line in data.pop("items")]
        payment_method = data.pop("payment_method", "cod")

        result = self.get_service().place_order(request.user, order_type, items, data, payment_method)
        if not result.ok:
            return error_response(result)

        order = result.value
        return Response(
            {
                "message": "Order placed successfully",
                "order_number": order.order_number,
                "order": OrderSerializer(order).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="orders_list",
        summary="List user's orders (as buyer)",
        description="""
        **What it receives:**
        - Authentication token
        - Optional status filter and limit/offset pagination

        **What it returns:**
        - The user's orders, newest first, each with its items
        """,
        parameters=LIST_PARAMETERS,
        responses={
            200: OpenApiResponse(response=OrderListResponseSerializer, description="Orders retrieved successfully"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid status or pagination"),
        },
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        limit, offset = pagination_params(request)
        result = self.get_service().list_orders(request.user, request.query_params.get("status"), limit, offset)
        if not result.ok:
            return error_response(result)

        page = result.value
        return Response(
            {
                "orders": OrderSerializer(page["orders"], many=True).data,
                "total": page["total"],
                "limit": page["limit"],
                "offset": page["offset"],
            }
        )

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get order details",
        description="""
        **What it returns:**
        - The order with its items and the vendor's name and phone

        Only the buyer or the vendor can see an order; anyone else gets 404.
        """,
        responses={
            200: OpenApiResponse(response=OrderDetailResponseSerializer, description="Order retrieved"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response({"order": OrderDetailSerializer(result.value).data})

    @extend_schema(
        operation_id="orders_set_status",
        summary="Update order status (vendor)",
        description="""
        **What it receives:**
        - `status`: one of pending, confirmed, in_progress, completed, cancelled

        **What it returns:**
        - The updated order

        Orders only move forward; `completed` and `cancelled` are final.
        Cancelling returns product stock.
        """,
        request=OrderStatusSerializer,
        responses={
            200: OpenApiResponse(response=OrderStatusResponseSerializer, description="Status updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid status or transition"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not this order's vendor"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def set_status(self, request, pk=None):
        input_serializer = OrderStatusSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        new_status = input_serializer.validated_data.get("status")

        result = self.get_service().set_status(pk, new_status, request.user)
        if not result.ok:
            return error_response(result)

        return Response({"message": "Order status updated", "order": OrderSerializer(result.value).data})

    @extend_schema(
        operation_id="orders_vendor_list",
        summary="List orders received (vendor)",
        description="""
        **What it returns:**
        - Orders attributed to the vendor with customer name and phone
        """,
        parameters=LIST_PARAMETERS,
        responses={
            200: OpenApiResponse(response=VendorOrderListResponseSerializer, description="Orders retrieved"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Vendor access required"),
        },
        tags=["Marketplace - Orders"],
    )
    def vendor_orders(self, request):
        limit, offset = pagination_params(request)
        result = self.get_service().list_vendor_orders(
            request.user, request.query_params.get("status"), limit, offset
        )
        if not result.ok:
            return error_response(result)

        page = result.value
        return Response(
            {
                "orders": VendorOrderSerializer(page["orders"], many=True).data,
                "total": page["total"],
                "limit": page["limit"],
                "offset": page["offset"],
            }
        )
