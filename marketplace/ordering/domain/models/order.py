from django.conf import settings
from django.db import models

from authentication.domain.models.user import default_city
from marketplace.cart.domain.models.cart import ITEM_TYPE_CHOICES


class Order(models.Model):
    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_IN_PROGRESS = "in_progress"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_IN_PROGRESS, "In Progress"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    # Forward-only lifecycle; cancellation allowed until a terminal state is reached
    ALLOWED_TRANSITIONS = {
        STATUS_PENDING: {STATUS_CONFIRMED, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_CANCELLED},
        STATUS_CONFIRMED: {STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_CANCELLED},
        STATUS_IN_PROGRESS: {STATUS_COMPLETED, STATUS_CANCELLED},
        STATUS_COMPLETED: set(),
        STATUS_CANCELLED: set(),
    }

    PAYMENT_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("paid", "Paid"),
        ("refunded", "Refunded"),
    ]

    ORDER_TYPE_CHOICES = ITEM_TYPE_CHOICES

    order_number = models.CharField(max_length=32, unique=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders")
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="vendor_orders"
    )
    order_type = models.CharField(max_length=10, choices=ORDER_TYPE_CHOICES)

    # Order Details
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    payment_method = models.CharField(max_length=20, default="cod")
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending")

    # Pricing
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    discount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=10, decimal_places=2)

    # Delivery / visit details
    delivery_address = models.TextField()
    delivery_area = models.CharField(max_length=100, blank=True, default="")
    delivery_city = models.CharField(max_length=100, default=default_city)
    delivery_pincode = models.CharField(max_length=6, blank=True, default="")
    scheduled_date = models.DateField(null=True, blank=True)
    scheduled_time = models.CharField(max_length=20, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["user", "status"], name="order_user_status_idx"),
            models.Index(fields=["vendor", "status"], name="order_vendor_status_idx"),
        ]

    @classmethod
    def is_valid_status(cls, value) -> bool:
        return isinstance(value, str) and value in cls.ALLOWED_TRANSITIONS

    def can_transition_to(self, new_status) -> bool:
        return new_status in self.ALLOWED_TRANSITIONS.get(self.status, set())

    @property
    def is_terminal(self) -> bool:
        return not self.ALLOWED_TRANSITIONS.get(self.status)

    def __str__(self):
        return f"Order {self.order_number}"


class OrderItem(models.Model):
    """Snapshot of a line at order time; later catalog edits do not touch it."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    item_type = models.CharField(max_length=10, choices=ITEM_TYPE_CHOICES)
    item_id = models.PositiveBigIntegerField()
    item_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=10, decimal_places=2)
    total = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["id"]
        app_label = "marketplace"

    def __str__(self):
        return f"{self.quantity}x {self.item_name} ({self.order.order_number})"
