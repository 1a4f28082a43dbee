"""
CatalogService - Service & Product Browsing and Vendor CRUD

Handles category listings, filtered and paginated browsing of services and
products, item details with recent reviews and related items, and vendor
create/update of their own listings.
"""

import logging
from typing import Dict, Optional

from django.contrib.auth import get_user_model
from django.db.models import Count, Q

from authentication.infra.observability.tracing import tracer
from marketplace.cart.domain.models.cart import ITEM_TYPE_PRODUCT, ITEM_TYPE_SERVICE
from marketplace.catalog.domain.models.catalog import Product, ProductCategory, Service, ServiceCategory
from marketplace.catalog.domain.models.interaction import Review
from marketplace.filters import ProductFilter, ServiceFilter
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


User = get_user_model()
logger = logging.getLogger(__name__)

CATALOG = {
    ITEM_TYPE_SERVICE: {
        "model": Service,
        "category_model": ServiceCategory,
        "filterset": ServiceFilter,
        "related_name": "services",
        "create_fields": ("description", "price_unit", "duration_mins", "image"),
        "update_fields": ("name", "description", "price", "price_unit", "duration_mins", "image", "is_active"),
    },
    ITEM_TYPE_PRODUCT: {
        "model": Product,
        "category_model": ProductCategory,
        "filterset": ProductFilter,
        "related_name": "products",
        "create_fields": ("description", "mrp", "stock", "unit", "image", "is_featured"),
        "update_fields": ("name", "description", "price", "mrp", "stock", "unit", "image", "is_featured", "is_active"),
    },
}

DETAIL_REVIEW_LIMIT = 10
RELATED_LIMIT = 4
FEATURED_LIMIT = 6


class CatalogService(BaseService):
    """
    Service for catalog operations on both services and products.

    Responsibilities:
    - List categories with their active item counts
    - List items with filtering (django-filter) and pagination
    - Get item details with reviews and related items
    - Create items (vendor only, enforced by the view)
    - Update items (owner or admin)

    All operations return ServiceResult.
    """

    def _config(self, kind: str) -> Optional[Dict]:
        return CATALOG.get(kind)

    def _base_queryset(self, kind: str):
        return CATALOG[kind]["model"].objects.select_related("category", "vendor__business")

    @BaseService.log_performance
    def list_categories(self, kind: str) -> ServiceResult[list]:
        """
        List active categories of ``kind`` annotated with ``item_count``.

        Only active items are counted.
        """
        config = self._config(kind)
        if config is None:
            return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

        related = config["related_name"]
        categories = (
            config["category_model"]
            .objects.filter(is_active=True)
            .annotate(item_count=Count(related, filter=Q(**{f"{related}__is_active": True})))
            .order_by("name")
        )
        return service_ok(list(categories))

    @BaseService.log_performance
    def list_items(self, kind: str, params=None, limit: int = 20, offset: int = 0) -> ServiceResult[Dict]:
        """
        List active items with filtering and pagination.

        Args:
            kind: ``"service"`` or ``"product"``
            params: Query parameters (category, search, featured, min_price, max_price, sort)
            limit: Page size
            offset: Rows to skip

        Returns:
            ServiceResult with ``{"items", "total", "limit", "offset"}``

        Example:
            >>> result = catalog_service.list_items("service", {"category": "plumbing", "sort": "price_low"})
            >>> if result.ok:
            ...     print(result.value["total"])
        """
        config = self._config(kind)
        if config is None:
            return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

        with tracer.start_as_current_span("catalog_list_items") as span:
            span.set_attribute("catalog.kind", kind)

            queryset = self._base_queryset(kind).filter(is_active=True)
            filterset = config["filterset"](params or {}, queryset=queryset)
            queryset = filterset.qs

            total = queryset.count()
            items = list(queryset[offset : offset + limit])
            span.set_attribute("catalog.total", total)

        return service_ok({"items": items, "total": total, "limit": limit, "offset": offset})

    @BaseService.log_performance
    def featured_products(self) -> ServiceResult[list]:
        """Top rated featured products for the home page."""
        products = self._base_queryset(ITEM_TYPE_PRODUCT).filter(is_active=True, is_featured=True).order_by("-rating")
        return service_ok(list(products[:FEATURED_LIMIT]))

    @BaseService.log_performance
    def get_item_detail(self, kind: str, item_id) -> ServiceResult[Dict]:
        """
        Get an active item with its latest reviews and related items.

        Returns:
            ServiceResult with ``{"item", "reviews", "related"}`` or ITEM_NOT_FOUND
        """
        config = self._config(kind)
        if config is None:
            return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

        try:
            item_id = int(item_id)
        except (TypeError, ValueError):
            return service_err(ErrorCodes.ITEM_NOT_FOUND, f"{kind.capitalize()} not found")

        item = self._base_queryset(kind).filter(pk=item_id, is_active=True).first()
        if item is None:
            return service_err(ErrorCodes.ITEM_NOT_FOUND, f"{kind.capitalize()} not found")

        reviews = (
            Review.objects.filter(review_type=kind, item_id=item.pk)
            .select_related("user")
            .order_by("-created_at", "-id")[:DETAIL_REVIEW_LIMIT]
        )
        related = (
            config["model"]
            .objects.filter(category_id=item.category_id, is_active=True)
            .exclude(pk=item.pk)
            .order_by("-rating", "-review_count")[:RELATED_LIMIT]
        )
        return service_ok({"item": item, "reviews": list(reviews), "related": list(related)})

    @BaseService.log_performance
    def create_item(self, kind: str, vendor: User, data: Dict) -> ServiceResult:
        """
        Create a service or product owned by ``vendor``.

        ``category_id``, ``name`` and ``price`` are required. Products default
        their MRP to the selling price.
        """
        config = self._config(kind)
        if config is None:
            return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

        category_id = data.get("category_id")
        name = (data.get("name") or "").strip()
        price = data.get("price")
        if not category_id or not name or price in (None, ""):
            return service_err(ErrorCodes.VALIDATION_ERROR, "Category, name, and price are required")

        category = config["category_model"].objects.filter(pk=category_id, is_active=True).first()
        if category is None:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Invalid category")

        fields = {key: data[key] for key in config["create_fields"] if data.get(key) is not None}
        if kind == ITEM_TYPE_PRODUCT and "mrp" not in fields:
            fields["mrp"] = price

        item = config["model"].objects.create(category=category, vendor=vendor, name=name, price=price, **fields)
        self.logger.info(f"{kind.capitalize()} {item.pk} created by vendor {vendor.pk}")
        return service_ok(self._base_queryset(kind).get(pk=item.pk))

    @BaseService.log_performance
    def update_item(self, kind: str, actor: User, item_id, data: Dict) -> ServiceResult:
        """
        Partially update an item. Only its vendor or an admin may do so.

        Inactive items can be updated too, so a vendor can re-activate one.
        """
        config = self._config(kind)
        if config is None:
            return service_err(ErrorCodes.INVALID_ITEM_TYPE, "Invalid item type")

        try:
            item = config["model"].objects.filter(pk=int(item_id)).first()
        except (TypeError, ValueError):
            item = None
        if item is None:
            return service_err(ErrorCodes.ITEM_NOT_FOUND, f"{kind.capitalize()} not found")

        if item.vendor_id != actor.pk and not actor.is_admin():
            return service_err(ErrorCodes.NOT_ITEM_OWNER, f"Not authorized to update this {kind}")

        changes = {key: data[key] for key in config["update_fields"] if key in data and data[key] is not None}
        if "name" in changes and not str(changes["name"]).strip():
            changes.pop("name")
        if not changes:
            return service_err(ErrorCodes.VALIDATION_ERROR, "No fields to update")

        for key, value in changes.items():
            setattr(item, key, value)
        item.save(update_fields=list(changes.keys()))

        self.logger.info(f"{kind.capitalize()} {item.pk} updated by user {actor.pk}: {sorted(changes)}")
        return service_ok(self._base_queryset(kind).get(pk=item.pk))
