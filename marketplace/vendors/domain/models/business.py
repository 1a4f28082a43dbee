from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models

from authentication.domain.models.user import default_city


class Business(models.Model):
    TYPE_SERVICE = "service"
    TYPE_PRODUCT = "product"
    TYPE_BOTH = "both"

    BUSINESS_TYPE_CHOICES = [
        (TYPE_SERVICE, "Service"),
        (TYPE_PRODUCT, "Product"),
        (TYPE_BOTH, "Service & Product"),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="business")
    business_name = models.CharField(max_length=200)
    business_type = models.CharField(max_length=10, choices=BUSINESS_TYPE_CHOICES)
    description = models.TextField(blank=True, default="")
    logo = models.CharField(max_length=500, blank=True, default="")

    # Location
    address = models.TextField()
    area = models.CharField(max_length=100)
    city = models.CharField(max_length=100, default=default_city)
    pincode = models.CharField(max_length=6, validators=[RegexValidator(r"^\d{6}$", "Pincode must be 6 digits")])

    # Contact
    phone = models.CharField(max_length=20)
    whatsapp = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    gstin = models.CharField(max_length=15, blank=True, default="")

    # Trust
    is_verified = models.BooleanField(default=False)
    rating = models.FloatField(default=0)
    review_count = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_verified", "-rating"]
        app_label = "marketplace"
        verbose_name_plural = "businesses"
        indexes = [
            models.Index(fields=["area", "is_active"], name="business_area_active_idx"),
            models.Index(fields=["business_type", "is_active"], name="business_type_active_idx"),
        ]

    def __str__(self):
        return self.business_name
