from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify


class CategoryBase(models.Model):
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=120, unique=True)
    icon = models.CharField(max_length=50, blank=True, default="")
    description = models.TextField(blank=True, default="")
    image = models.CharField(max_length=500, blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        abstract = True
        ordering = ["name"]

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class ServiceCategory(CategoryBase):
    class Meta(CategoryBase.Meta):
        app_label = "marketplace"
        verbose_name_plural = "service categories"


class ProductCategory(CategoryBase):
    class Meta(CategoryBase.Meta):
        app_label = "marketplace"
        verbose_name_plural = "product categories"


class CatalogItem(models.Model):
    """Fields shared by bookable services and stocked products."""

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, blank=True)
    description = models.TextField(blank=True, default="")

    # Pricing
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])

    # Aggregates maintained by the review service
    rating = models.FloatField(default=0)
    review_count = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class Service(CatalogItem):
    ITEM_TYPE = "service"

    category = models.ForeignKey(ServiceCategory, on_delete=models.PROTECT, related_name="services")
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="services"
    )
    price_unit = models.CharField(max_length=50, default="per service")
    duration_mins = models.PositiveIntegerField(default=60)
    image = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        ordering = ["-review_count", "-rating"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["category", "is_active"], name="service_category_active_idx"),
            models.Index(fields=["vendor", "is_active"], name="service_vendor_active_idx"),
            models.Index(fields=["price"], name="service_price_idx"),
            models.Index(fields=["rating"], name="service_rating_idx"),
        ]


class Product(CatalogItem):
    ITEM_TYPE = "product"

    category = models.ForeignKey(ProductCategory, on_delete=models.PROTECT, related_name="products")
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="products"
    )
    mrp = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    stock = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=30, default="piece")
    image = models.CharField(max_length=500, blank=True, default="")
    is_featured = models.BooleanField(default=False)

    class Meta:
        ordering = ["-is_featured", "-review_count", "-rating"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["category", "is_active"], name="product_category_active_idx"),
            models.Index(fields=["vendor", "is_active"], name="product_vendor_active_idx"),
            models.Index(fields=["price"], name="product_price_idx"),
            models.Index(fields=["is_featured", "is_active"], name="product_featured_active_idx"),
        ]

    @property
    def discount_percent(self) -> Decimal:
        """Percentage off MRP, rounded to 2 places. Zero when MRP is missing or not above price."""
        if not self.mrp or self.mrp <= 0 or self.mrp <= self.price:
            return Decimal("0.00")
        discount = (self.mrp - self.price) / self.mrp * Decimal("100")
        return discount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
