from .auth_serializers import (
    BusinessSummarySerializer,
    LoginUserSerializer,
    PasswordChangeSerializer,
    ProfileUpdateSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from .jwt_serializers import CustomAccessToken, issue_token


__all__ = [
    "UserSerializer",
    "BusinessSummarySerializer",
    "LoginUserSerializer",
    "UserRegistrationSerializer",
    "ProfileUpdateSerializer",
    "PasswordChangeSerializer",
    "CustomAccessToken",
    "issue_token",
]
