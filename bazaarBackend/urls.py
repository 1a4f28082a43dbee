"""
URL configuration for bazaarBackend project.

Every API route lives under ``/api/`` and is declared without a trailing slash.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView


urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # API endpoints
    path("api/auth/", include("authentication.urls")),
    path("api/", include("marketplace.urls")),
]
