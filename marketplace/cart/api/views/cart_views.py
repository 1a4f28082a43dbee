from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container  # For DI
from marketplace.api.responses import error_response
from marketplace.api.serializers import (
    CartMutationResponseSerializer,
    ErrorResponseSerializer,
    SuccessResponseSerializer,
)
from marketplace.cart.api.serializers import AddToCartSerializer, CartSerializer, UpdateCartSerializer
from marketplace.cart.domain.services import CartService


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> CartService:
        # Inject CartService via DI container
        return container.cart_service()

    def _cart_response(self, message, result):
        if not result.ok:
            return error_response(result)
        return Response({"message": message, "cart": CartSerializer(result.value).data}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_get",
        summary="Get user's cart",
        description="""
        **What it receives:**
        - Authentication token (header)

        **What it returns:**
        - `items`: cart lines joined with the live catalog (name, price, image, stock)
        - `total`: sum of available lines at current prices
        - `count`: number of lines
        """,
        responses={
            200: OpenApiResponse(response=CartSerializer, description="Cart retrieved successfully"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Not authenticated"),
        },
        tags=["Marketplace - Cart"],
    )
    def list(self, request):
        result = self.get_service().get_cart(request.user)
        if not result.ok:
            return error_response(result)
        return Response(CartSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add item to cart",
        description="""
        **What it receives:**
        - `item_type`: `service` or `product`
        - `item_id` (integer): Item to add
        - `quantity` (integer, optional): Quantity to add (default: 1)

        **What it returns:**
        - Updated cart. Adding an item already in the cart increments its quantity.
        """,
        request=AddToCartSerializer,
        responses={
            200: OpenApiResponse(response=CartMutationResponseSerializer, description="Item added"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data or insufficient stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Item not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def create(self, request):
        input_serializer = AddToCartSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        result = self.get_service().add_to_cart(request.user, data["item_type"], data["item_id"], data["quantity"])
        return self._cart_response("Item added to cart", result)

    @extend_schema(
        operation_id="cart_update_item",
        summary="Update cart line quantity",
        description="""
        **What it receives:**
        - `id` (path): Cart line ID
        - `quantity` (integer): New quantity (at least 1)

        **What it returns:**
        - Updated cart
        """,
        request=UpdateCartSerializer,
        responses={
            200: OpenApiResponse(response=CartMutationResponseSerializer, description="Cart updated"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Invalid quantity or insufficient stock"
            ),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Cart item not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def update(self, request, pk=None):
        input_serializer = UpdateCartSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = self.get_service().update_quantity(request.user, pk, input_serializer.validated_data["quantity"])
        return self._cart_response("Cart updated", result)

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove line from cart",
        responses={
            200: OpenApiResponse(response=CartMutationResponseSerializer, description="Item removed"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Cart item not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().remove_from_cart(request.user, pk)
        return self._cart_response("Item removed from cart", result)

    @extend_schema(
        operation_id="cart_clear",
        summary="Clear cart",
        responses={200: OpenApiResponse(response=SuccessResponseSerializer, description="Cart cleared")},
        tags=["Marketplace - Cart"],
    )
    def clear(self, request):
        result = self.get_service().clear_cart(request.user)
        if not result.ok:
            return error_response(result)
        return Response({"message": "Cart cleared", "removed": result.value}, status=status.HTTP_200_OK)
