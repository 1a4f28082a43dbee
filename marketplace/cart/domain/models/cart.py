from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


ITEM_TYPE_SERVICE = "service"
ITEM_TYPE_PRODUCT = "product"

ITEM_TYPE_CHOICES = [
    (ITEM_TYPE_SERVICE, "Service"),
    (ITEM_TYPE_PRODUCT, "Product"),
]


class CartItem(models.Model):
    """One cart line per (user, item_type, item_id). Prices are never stored here."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart_items")
    item_type = models.CharField(max_length=10, choices=ITEM_TYPE_CHOICES)
    item_id = models.PositiveBigIntegerField()
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "item_type", "item_id"], name="unique_cart_line"),
        ]
        ordering = ["-created_at", "-id"]
        app_label = "marketplace"

    def __str__(self):
        return f"{self.quantity}x {self.item_type} #{self.item_id} in cart of user {self.user_id}"
