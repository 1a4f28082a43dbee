from .catalog_views import ProductViewSet, ServiceViewSet


__all__ = ["ServiceViewSet", "ProductViewSet"]
