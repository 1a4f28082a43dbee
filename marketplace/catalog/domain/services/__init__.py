from .catalog_service import CatalogService
from .review_service import ReviewService


__all__ = ["CatalogService", "ReviewService"]
