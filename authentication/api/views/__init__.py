from .auth_views import LoginAPIView, MeAPIView, PasswordChangeAPIView, RegisterAPIView


__all__ = [
    "LoginAPIView",
    "RegisterAPIView",
    "MeAPIView",
    "PasswordChangeAPIView",
]
