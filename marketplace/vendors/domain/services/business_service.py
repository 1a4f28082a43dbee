"""
BusinessService - Local Business Directory

Handles the public business directory, vendor onboarding (registering a
business promotes the owner to the vendor role) and a vendor's own
business profile and dashboard numbers.
"""

import logging
from decimal import Decimal
from typing import Dict

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, Q, Sum

from marketplace.catalog.domain.models.catalog import Product, Service
from marketplace.catalog.domain.models.interaction import Review
from marketplace.filters import BusinessFilter
from marketplace.ordering.domain.models.order import Order
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.vendors.domain.models.business import Business


User = get_user_model()
logger = logging.getLogger(__name__)

REGISTER_FIELDS = (
    "business_name",
    "business_type",
    "description",
    "logo",
    "address",
    "area",
    "pincode",
    "phone",
    "whatsapp",
    "email",
    "gstin",
)
UPDATE_FIELDS = ("business_name", "description", "logo", "address", "area", "pincode", "phone", "whatsapp", "email")
DETAIL_LIMIT = 10


class BusinessService(BaseService):
    """
    Service for the business directory and vendor business profiles.

    Responsibilities:
    - List active businesses (type/area/search filters)
    - Business detail with its listings and reviews
    - Register a business for the current user
    - Update the current vendor's business
    - Vendor dashboard stats
    """

    @BaseService.log_performance
    def list_businesses(self, params=None, limit: int = 20, offset: int = 0) -> ServiceResult[Dict]:
        """
        List active businesses, verified and best rated first.

        Returns:
            ServiceResult with ``{"businesses", "total", "limit", "offset"}``
        """
        queryset = Business.objects.filter(is_active=True).select_related("user")
        queryset = BusinessFilter(params or {}, queryset=queryset).qs

        total = queryset.count()
        businesses = list(queryset[offset : offset + limit])
        return service_ok({"businesses": businesses, "total": total, "limit": limit, "offset": offset})

    @BaseService.log_performance
    def get_business(self, business_id) -> ServiceResult[Dict]:
        """
        Get an active business with its top listings and latest reviews.
        """
        try:
            business = Business.objects.select_related("user").filter(pk=int(business_id), is_active=True).first()
        except (TypeError, ValueError):
            business = None
        if business is None:
            return service_err(ErrorCodes.BUSINESS_NOT_FOUND, "Business not found")

        services = Service.objects.filter(vendor_id=business.user_id, is_active=True).order_by("-rating")
        products = Product.objects.filter(vendor_id=business.user_id, is_active=True).order_by("-rating")
        reviews = (
            Review.objects.filter(review_type=Review.TYPE_BUSINESS, item_id=business.pk)
            .select_related("user")
            .order_by("-created_at", "-id")
        )
        return service_ok(
            {
                "business": business,
                "services": list(services[:DETAIL_LIMIT]),
                "products": list(products[:DETAIL_LIMIT]),
                "reviews": list(reviews[:DETAIL_LIMIT]),
            }
        )

    @BaseService.log_performance
    def register_business(self, user: User, data: Dict) -> ServiceResult[Business]:
        """
        Register ``user``'s business and promote them to vendor.

        A user owns at most one business. WhatsApp defaults to the phone number.
        New businesses start unverified.

        Example:
            >>> result = business_service.register_business(user, {"business_name": "Ravi Electricals", ...})
            >>> result.value.is_verified
            False
        """
        if Business.objects.filter(user=user).exists():
            return service_err(ErrorCodes.BUSINESS_EXISTS, "You already have a registered business")

        fields = {key: data[key] for key in REGISTER_FIELDS if data.get(key) not in (None, "")}
        fields.setdefault("whatsapp", fields.get("phone", ""))

        try:
            with transaction.atomic():
                business = Business.objects.create(user=user, **fields)
                user.promote_to_vendor()
        except IntegrityError:
            return service_err(ErrorCodes.BUSINESS_EXISTS, "You already have a registered business")

        self.logger.info(f"Business {business.pk} registered by user {user.pk} ({business.business_type})")
        return service_ok(business)

    @BaseService.log_performance
    def update_business(self, user: User, data: Dict) -> ServiceResult[Business]:
        """Partially update the current vendor's business."""
        business = Business.objects.filter(user=user).first()
        if business is None:
            return service_err(ErrorCodes.BUSINESS_NOT_FOUND, "Business not found")

        changes = {key: data[key] for key in UPDATE_FIELDS if data.get(key) is not None}
        # Required columns cannot be blanked
        for key in ("business_name", "address", "area", "pincode", "phone"):
            if key in changes and not str(changes[key]).strip():
                changes.pop(key)
        if not changes:
            return service_err(ErrorCodes.VALIDATION_ERROR, "No fields to update")

        for key, value in changes.items():
            setattr(business, key, value)
        business.save(update_fields=[*changes.keys(), "updated_at"])

        self.logger.info(f"Business {business.pk} updated: {sorted(changes)}")
        return service_ok(business)

    @BaseService.log_performance
    def get_stats(self, user: User) -> ServiceResult[Dict]:
        """
        Dashboard numbers for the current vendor.

        Revenue only counts completed orders.
        """
        business = Business.objects.filter(user=user).first()
        if business is None:
            return service_err(ErrorCodes.BUSINESS_NOT_FOUND, "Business not found")

        orders = Order.objects.filter(vendor=user).aggregate(
            total=Count("id"),
            pending=Count("id", filter=Q(status=Order.STATUS_PENDING)),
            completed=Count("id", filter=Q(status=Order.STATUS_COMPLETED)),
            revenue=Sum("total", filter=Q(status=Order.STATUS_COMPLETED)),
        )
        stats = {
            "total_orders": orders["total"],
            "pending_orders": orders["pending"],
            "completed_orders": orders["completed"],
            "total_revenue": orders["revenue"] or Decimal("0.00"),
            "total_services": Service.objects.filter(vendor=user, is_active=True).count(),
            "total_products": Product.objects.filter(vendor=user, is_active=True).count(),
        }
        return service_ok({"business": business, "stats": stats})
