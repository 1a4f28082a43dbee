from rest_framework import serializers

from marketplace.cart.domain.models.cart import ITEM_TYPE_CHOICES
from marketplace.ordering.domain.models.order import Order, OrderItem


class OrderLineRequestSerializer(serializers.Serializer):
    item_type = serializers.ChoiceField(choices=ITEM_TYPE_CHOICES, required=False)
    item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, default=1)


class PlaceOrderSerializer(serializers.Serializer):
    """
    Checkout request. Prices are never accepted from the client.
    """

    order_type = serializers.ChoiceField(
        choices=ITEM_TYPE_CHOICES, error_messages={"required": "Order type and items are required"}
    )
    items = OrderLineRequestSerializer(
        many=True, allow_empty=False, error_messages={"required": "Order type and items are required"}
    )
    delivery_address = serializers.CharField(
        error_messages={"required": "Delivery address is required", "blank": "Delivery address is required"}
    )
    delivery_area = serializers.CharField(required=False, allow_blank=True, max_length=100)
    delivery_city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    delivery_pincode = serializers.RegexField(r"^\d{6}$", required=False, allow_blank=True)
    scheduled_date = serializers.DateField(required=False, allow_null=True)
    scheduled_time = serializers.CharField(required=False, allow_blank=True, max_length=20)
    notes = serializers.CharField(required=False, allow_blank=True)
    payment_method = serializers.CharField(required=False, default="cod", max_length=20)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField(required=False, allow_blank=True)


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "item_type", "item_id", "item_name", "quantity", "price", "total"]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user_id",
            "vendor_id",
            "order_type",
            "status",
            "payment_method",
            "payment_status",
            "subtotal",
            "delivery_fee",
            "discount",
            "total",
            "delivery_address",
            "delivery_area",
            "delivery_city",
            "delivery_pincode",
            "scheduled_date",
            "scheduled_time",
            "notes",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = fields


class OrderDetailSerializer(OrderSerializer):
    """Order as seen by its buyer or vendor, with the vendor's contact details."""

    vendor_name = serializers.SerializerMethodField()
    vendor_phone = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["vendor_name", "vendor_phone"]
        read_only_fields = fields

    def _business(self, obj):
        if obj.vendor is None:
            return None
        return getattr(obj.vendor, "business", None)

    def get_vendor_name(self, obj):
        business = self._business(obj)
        if business:
            return business.business_name
        return obj.vendor.name if obj.vendor else None

    def get_vendor_phone(self, obj):
        business = self._business(obj)
        if business:
            return business.phone
        return obj.vendor.phone if obj.vendor else None


class VendorOrderSerializer(OrderSerializer):
    customer_name = serializers.CharField(source="user.name", read_only=True)
    customer_phone = serializers.CharField(source="user.phone", read_only=True, allow_null=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["customer_name", "customer_phone"]
        read_only_fields = fields
