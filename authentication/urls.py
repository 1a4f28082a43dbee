from django.urls import path

from authentication.api.views import LoginAPIView, MeAPIView, PasswordChangeAPIView, RegisterAPIView


app_name = "authentication"

urlpatterns = [
    path("register", RegisterAPIView.as_view(), name="register"),
    path("login", LoginAPIView.as_view(), name="login"),
    path("me", MeAPIView.as_view(), name="me"),
    path("password", PasswordChangeAPIView.as_view(), name="password"),
]
