from rest_framework import serializers

from .auth_serializers import BusinessSummarySerializer, UserSerializer


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    token = serializers.CharField()
    user = UserSerializer()


class MeResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    business = BusinessSummarySerializer(allow_null=True)
