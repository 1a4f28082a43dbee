"""
ReviewService - Ratings for Services, Products and Businesses

One review per (user, target); submitting again replaces the earlier rating.
The target's ``rating`` (average, 1 decimal) and ``review_count`` are
recomputed from all of its reviews in the same transaction as the write.
"""

import logging
from typing import Dict

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Avg, Count
from django.utils import timezone

from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.catalog.domain.models.catalog import Product, Service
from marketplace.catalog.domain.models.interaction import Review
from marketplace.infra.observability.metrics import reviews_submitted_total
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.vendors.domain.models.business import Business


User = get_user_model()
logger = logging.getLogger(__name__)

REVIEW_TARGETS = {
    Review.TYPE_SERVICE: Service,
    Review.TYPE_PRODUCT: Product,
    Review.TYPE_BUSINESS: Business,
}


class ReviewService(BaseService):
    """
    Service for submitting reviews and keeping rating aggregates in sync.

    Dependencies:
    - InventoryService: resolves service/product targets
    """

    def __init__(self, inventory_service: InventoryService = None):
        """
        Initialize ReviewService.

        Args:
            inventory_service: Service for catalog lookups (injected)
        """
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()

    def _resolve_target(self, review_type: str, target_id) -> ServiceResult:
        if review_type == Review.TYPE_BUSINESS:
            try:
                business = Business.objects.filter(pk=int(target_id), is_active=True).first()
            except (TypeError, ValueError):
                business = None
            if business is None:
                return service_err(ErrorCodes.BUSINESS_NOT_FOUND, "Business not found")
            return service_ok(business)
        return self.inventory_service.resolve_item(review_type, target_id)

    @staticmethod
    def _owner_id(target):
        if isinstance(target, Business):
            return target.user_id
        return target.vendor_id

    @BaseService.log_performance
    def submit_review(self, user: User, review_type: str, target_id, rating, comment: str = "") -> ServiceResult[Dict]:
        """
        Create or replace ``user``'s review of a target and refresh its aggregates.

        Args:
            user: Reviewer
            review_type: ``"service"``, ``"product"`` or ``"business"``
            target_id: Primary key of the reviewed row
            rating: Integer 1-5
            comment: Optional text

        Returns:
            ServiceResult with ``{"review", "created", "rating", "review_count"}``

        Example:
            >>> result = review_service.submit_review(user, "business", 3, 5, "Quick and tidy work")
            >>> if result.ok:
            ...     print(result.value["rating"])
        """
        if review_type not in REVIEW_TARGETS:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid review type")

        try:
            rating = int(rating)
        except (TypeError, ValueError):
            return service_err(ErrorCodes.VALIDATION_ERROR, "Rating must be between 1 and 5")
        if not 1 <= rating <= 5:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Rating must be between 1 and 5")

        target_result = self._resolve_target(review_type, target_id)
        if not target_result.ok:
            return target_result
        target = target_result.value

        if self._owner_id(target) == user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You cannot review your own listing")

        model = REVIEW_TARGETS[review_type]
        with transaction.atomic():
            # Lock the target so concurrent reviews recompute in sequence
            model.objects.select_for_update().filter(pk=target.pk).first()

            review, created = Review.objects.update_or_create(
                user=user,
                review_type=review_type,
                item_id=target.pk,
                defaults={"rating": rating, "comment": comment or "", "created_at": timezone.now()},
            )

            aggregate = Review.objects.filter(review_type=review_type, item_id=target.pk).aggregate(
                avg=Avg("rating"), count=Count("id")
            )
            avg_rating = round(aggregate["avg"] or 0, 1)
            model.objects.filter(pk=target.pk).update(rating=avg_rating, review_count=aggregate["count"])

        reviews_submitted_total.labels(review_type=review_type).inc()
        self.logger.info(
            f"Review {'created' if created else 'updated'}: {review_type} #{target.pk} by user {user.pk} "
            f"-> rating={avg_rating} ({aggregate['count']} reviews)"
        )
        return service_ok(
            {"review": review, "created": created, "rating": avg_rating, "review_count": aggregate["count"]}
        )
