from rest_framework import serializers

from marketplace.cart.domain.models.cart import ITEM_TYPE_CHOICES


class AddToCartSerializer(serializers.Serializer):
    item_type = serializers.ChoiceField(
        choices=ITEM_TYPE_CHOICES, error_messages={"invalid_choice": "Invalid item type"}
    )
    item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(
        min_value=1, default=1, error_messages={"min_value": "Quantity must be at least 1"}
    )


class UpdateCartSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(
        min_value=1,
        error_messages={"min_value": "Valid quantity required", "required": "Valid quantity required"},
    )


class CartLineSerializer(serializers.Serializer):
    """One cart row joined with the live catalog (built by CartService)."""

    id = serializers.IntegerField()
    item_type = serializers.CharField()
    item_id = serializers.IntegerField()
    quantity = serializers.IntegerField()
    name = serializers.CharField(allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    image = serializers.CharField(allow_blank=True)
    stock = serializers.IntegerField()
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    is_available = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class CartSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    count = serializers.IntegerField()
