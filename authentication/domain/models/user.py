from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


def default_city():
    return getattr(settings, "TOWN_NAME", "Nellore")


class CustomUser(AbstractUser):
    ROLE_CUSTOMER = "customer"
    ROLE_VENDOR = "vendor"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = [
        (ROLE_CUSTOMER, "Customer"),
        (ROLE_VENDOR, "Vendor"),
        (ROLE_ADMIN, "Admin"),
    ]

    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, unique=True, blank=True, null=True)
    avatar = models.CharField(max_length=500, blank=True, default="")
    address = models.TextField(blank=True, default="")
    city = models.CharField(max_length=100, default=default_city)

    # Role system - simple field
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"

    def is_vendor(self):
        """Vendors and admins may manage catalog items and orders"""
        return self.role == self.ROLE_VENDOR or self.is_admin()

    def is_admin(self):
        """Check if user is an admin"""
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def promote_to_vendor(self):
        if self.role == self.ROLE_CUSTOMER:
            self.role = self.ROLE_VENDOR
            self.save(update_fields=["role", "updated_at"])

    def __str__(self):
        return self.email
