from .business_views import BusinessViewSet


__all__ = ["BusinessViewSet"]
