from rest_framework import serializers

from marketplace.vendors.domain.models.business import Business


PINCODE_PATTERN = r"^\d{6}$"
# Indian mobile numbers, optionally prefixed with +91
PHONE_PATTERN = r"^(\+91[\-\s]?)?[6-9]\d{9}$"


class BusinessSerializer(serializers.ModelSerializer):
    owner_name = serializers.CharField(source="user.name", read_only=True)

    class Meta:
        model = Business
        fields = [
            "id",
            "user_id",
            "owner_name",
            "business_name",
            "business_type",
            "description",
            "logo",
            "address",
            "area",
            "city",
            "pincode",
            "phone",
            "whatsapp",
            "email",
            "gstin",
            "is_verified",
            "rating",
            "review_count",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BusinessRegisterSerializer(serializers.Serializer):
    business_name = serializers.CharField(
        max_length=200, error_messages={"required": "Business name required", "blank": "Business name required"}
    )
    business_type = serializers.ChoiceField(
        choices=Business.BUSINESS_TYPE_CHOICES,
        error_messages={"required": "Invalid business type", "invalid_choice": "Invalid business type"},
    )
    description = serializers.CharField(required=False, allow_blank=True)
    logo = serializers.CharField(required=False, allow_blank=True, max_length=500)
    address = serializers.CharField(error_messages={"required": "Address required", "blank": "Address required"})
    area = serializers.CharField(max_length=100, error_messages={"required": "Area required", "blank": "Area required"})
    pincode = serializers.RegexField(
        PINCODE_PATTERN, error_messages={"required": "Valid pincode required", "invalid": "Valid pincode required"}
    )
    phone = serializers.RegexField(
        PHONE_PATTERN, error_messages={"required": "Valid phone required", "invalid": "Valid phone required"}
    )
    whatsapp = serializers.RegexField(PHONE_PATTERN, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    gstin = serializers.CharField(required=False, allow_blank=True, max_length=15)


class BusinessUpdateSerializer(serializers.Serializer):
    business_name = serializers.CharField(required=False, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    logo = serializers.CharField(required=False, allow_blank=True, max_length=500)
    address = serializers.CharField(required=False)
    area = serializers.CharField(required=False, max_length=100)
    pincode = serializers.RegexField(
        PINCODE_PATTERN, required=False, error_messages={"invalid": "Valid pincode required"}
    )
    phone = serializers.RegexField(PHONE_PATTERN, required=False, error_messages={"invalid": "Valid phone required"})
    whatsapp = serializers.RegexField(PHONE_PATTERN, required=False)
    email = serializers.EmailField(required=False)


class BusinessStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
    completed_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_services = serializers.IntegerField()
    total_products = serializers.IntegerField()
