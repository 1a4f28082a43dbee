from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(models.Model):
    """A user's rating of a service, product or business.

    One row per (user, review_type, item_id); reviewing again updates it in place.
    """

    TYPE_SERVICE = "service"
    TYPE_PRODUCT = "product"
    TYPE_BUSINESS = "business"

    REVIEW_TYPE_CHOICES = [
        (TYPE_SERVICE, "Service"),
        (TYPE_PRODUCT, "Product"),
        (TYPE_BUSINESS, "Business"),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    review_type = models.CharField(max_length=20, choices=REVIEW_TYPE_CHOICES)
    item_id = models.PositiveBigIntegerField()
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "review_type", "item_id"], name="unique_review_per_user_item"),
        ]
        indexes = [
            models.Index(fields=["review_type", "item_id", "-created_at"], name="review_item_recent_idx"),
        ]
        ordering = ["-created_at"]
        app_label = "marketplace"

    def __str__(self):
        return f"{self.rating}* {self.review_type} #{self.item_id} by {self.user_id}"
