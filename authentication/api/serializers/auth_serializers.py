from collections.abc import Mapping

from rest_framework import serializers

from authentication.domain.models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = (
            "id",
            "name",
            "email",
            "phone",
            "role",
            "avatar",
            "address",
            "city",
            "created_at",
        )
        read_only_fields = fields


class BusinessSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    business_name = serializers.CharField()
    business_type = serializers.CharField()
    area = serializers.CharField()
    phone = serializers.CharField()
    is_verified = serializers.BooleanField()
    rating = serializers.FloatField()
    review_count = serializers.IntegerField()


class UserRegistrationSerializer(serializers.Serializer):
    """Body shape only; required fields and email format are checked by AuthService."""

    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, trim_whitespace=False, style={"input_type": "password"}
    )
    role = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class LoginUserSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, trim_whitespace=False, style={"input_type": "password"}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False)


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, required=False, allow_blank=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, required=False, allow_blank=True, trim_whitespace=False)

    # Browser clients send camelCase keys
    ALIASES = {"currentPassword": "current_password", "newPassword": "new_password"}

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            data = {self.ALIASES.get(key, key): value for key, value in data.items()}
        return super().to_internal_value(data)
