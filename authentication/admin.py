from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from authentication.models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("email", "name", "phone", "role", "city", "is_active", "created_at")
    list_filter = ("role", "is_active", "city")
    search_fields = ("email", "name", "phone")
    ordering = ("-created_at",)
    fieldsets = UserAdmin.fieldsets + (
        ("Marketplace", {"fields": ("name", "phone", "role", "avatar", "address", "city")}),
    )
