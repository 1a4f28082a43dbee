from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    BusinessSummarySerializer,
    LoginUserSerializer,
    PasswordChangeSerializer,
    ProfileUpdateSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from authentication.api.serializers.response_serializers import (
    AuthResponseSerializer,
    ErrorResponseSerializer,
    MeResponseSerializer,
    MessageResponseSerializer,
)
from authentication.domain.services.auth_service import AuthService
from utils.exception_handler import first_error_message


# Dependency Injection Helper
def get_auth_service():
    """Factory to get AuthService instance."""
    return AuthService()


# Error codes that are reported as authentication failures rather than bad input
UNAUTHORIZED_CODES = {"invalid_credentials"}


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_register",
        summary="Register new user account",
        description="""
        Create a customer account, or a vendor account when `role` is `vendor`.

        **What it receives:**
        - `name`, `email`, `password` (min 6 characters)
        - `phone` (optional, unique)
        - `role` (optional, only `vendor` is honoured)

        **What it returns:**
        - Access token and the created user
        """,
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(
                response=AuthResponseSerializer,
                description="Account created",
                examples=[
                    OpenApiExample(
                        "Registered",
                        value={
                            "message": "Registration successful",
                            "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {"id": 3, "name": "Priya", "email": "priya@example.com", "role": "customer"},
                        },
                    )
                ],
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error or duplicate"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": first_error_message(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        service = get_auth_service()
        result = service.register(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            phone=data.get("phone"),
            role=data.get("role"),
        )

        if not result.success:
            return Response({"error": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {"message": result.message, "token": result.access_token, "user": UserSerializer(result.user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        request=LoginUserSerializer,
        responses={
            200: OpenApiResponse(response=AuthResponseSerializer, description="Login successful"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginUserSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": first_error_message(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        service = get_auth_service()
        result = service.login(serializer.validated_data.get("email"), serializer.validated_data.get("password"))

        if not result.success:
            return Response({"error": result.error}, status=status.HTTP_401_UNAUTHORIZED)

        return Response(
            {"message": result.message, "token": result.access_token, "user": UserSerializer(result.user).data},
            status=status.HTTP_200_OK,
        )


class MeAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user profile",
        description="""
        **What it returns:**
        - The authenticated user
        - `business`: the vendor's business profile, or null
        """,
        responses={
            200: OpenApiResponse(response=MeResponseSerializer, description="Profile retrieved"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Not authenticated"),
        },
        tags=["Authentication"],
    )
    def get(self, request):
        result = get_auth_service().get_profile(request.user)
        business = result.data["business"]
        return Response(
            {
                "user": UserSerializer(result.data["user"]).data,
                "business": BusinessSummarySerializer(business).data if business else None,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        operation_id="auth_me_update",
        summary="Update current user profile",
        description="Updates any of `name`, `phone`, `address`, `city`. At least one field is required.",
        request=ProfileUpdateSerializer,
        responses={
            200: OpenApiResponse(response=MeResponseSerializer, description="Profile updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="No fields or duplicate phone"),
        },
        tags=["Authentication"],
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": first_error_message(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        result = get_auth_service().update_profile(request.user, serializer.validated_data)
        if not result.success:
            return Response({"error": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {"message": result.message, "user": UserSerializer(result.data["user"]).data},
            status=status.HTTP_200_OK,
        )


class PasswordChangeAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_password_change",
        summary="Change password",
        description="Requires `current_password` (or `currentPassword`) and `new_password` (or `newPassword`).",
        request=PasswordChangeSerializer,
        responses={
            200: OpenApiResponse(response=MessageResponseSerializer, description="Password updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or too short"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Current password is incorrect"),
        },
        tags=["Authentication"],
    )
    def put(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": first_error_message(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)

        result = get_auth_service().change_password(
            request.user,
            serializer.validated_data.get("current_password"),
            serializer.validated_data.get("new_password"),
        )
        if not result.success:
            status_code = (
                status.HTTP_401_UNAUTHORIZED if result.error_code in UNAUTHORIZED_CODES else status.HTTP_400_BAD_REQUEST
            )
            return Response({"error": result.error}, status=status_code)

        return Response({"message": result.message}, status=status.HTTP_200_OK)
