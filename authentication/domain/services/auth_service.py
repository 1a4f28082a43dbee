"""
AuthService - Core Authentication Business Logic.

Keeps registration, login and account maintenance out of the views so the
rules (unique email/phone, minimum password length, role assignment) can be
tested without HTTP.
"""

import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction

from authentication.api.serializers.jwt_serializers import issue_token
from authentication.infra.observability.metrics import (
    login_duration,
    login_failed,
    login_total,
    password_changes_total,
    profile_updates_total,
    registration_failed,
    registration_total,
)
from utils.logging_utils import mask_value

from .results import LoginResult, RegisterResult, Result


User = get_user_model()
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
PROFILE_FIELDS = ("name", "phone", "address", "city")


class AuthService:
    """
    Authentication service encapsulating all auth business logic.

    Handles registration, login, profile reads/updates and password changes.
    """

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
        role: Optional[str] = None,
    ) -> RegisterResult:
        """
        Create a customer (or vendor, when explicitly requested) account.

        Business Logic:
        1. Require name, email and a password of at least 6 characters
        2. Reject duplicate email or phone
        3. Only ``vendor`` may be requested; anything else becomes ``customer``
        4. Issue an access token for the new account

        Returns:
            RegisterResult with the user and token, or an error message
        """
        email = (email or "").strip().lower()
        phone = (phone or "").strip() or None
        if not name or not email or not password:
            registration_failed.labels(reason="validation_error").inc()
            return RegisterResult(
                success=False, error="Name, email and password are required", error_code="validation_error"
            )

        try:
            validate_email(email)
        except ValidationError:
            registration_failed.labels(reason="validation_error").inc()
            return RegisterResult(success=False, error="Invalid email address", error_code="validation_error")

        if len(password) < MIN_PASSWORD_LENGTH:
            registration_failed.labels(reason="validation_error").inc()
            return RegisterResult(
                success=False,
                error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                error_code="validation_error",
            )

        if User.objects.filter(email__iexact=email).exists():
            registration_failed.labels(reason="email_exists").inc()
            return RegisterResult(success=False, error="Email already registered", error_code="email_exists")

        if phone and User.objects.filter(phone=phone).exists():
            registration_failed.labels(reason="phone_exists").inc()
            return RegisterResult(success=False, error="Phone number already registered", error_code="phone_exists")

        assigned_role = User.ROLE_VENDOR if role == User.ROLE_VENDOR else User.ROLE_CUSTOMER

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    name=name.strip(),
                    phone=phone,
                    role=assigned_role,
                )
        except IntegrityError:
            # Concurrent registration took the same email or phone
            registration_failed.labels(reason="email_exists").inc()
            return RegisterResult(success=False, error="Email already registered", error_code="email_exists")

        registration_total.labels(status="success", role=assigned_role).inc()
        logger.info(f"Registered {assigned_role} account for {mask_value(email)}")

        return RegisterResult(
            success=True,
            user=user,
            access_token=issue_token(user),
            message="Registration successful",
        )

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate user with email/password.

        Unknown emails and wrong passwords produce the same message so the
        endpoint does not reveal which accounts exist.
        """
        with login_duration.time():
            if not email or not password:
                login_failed.labels(reason="missing_fields").inc()
                login_total.labels(status="failed").inc()
                return LoginResult(success=False, error="Email and password are required")

            user = User.objects.filter(email__iexact=email.strip()).first()
            if user is None or not user.check_password(password):
                login_failed.labels(reason="invalid_credentials").inc()
                login_total.labels(status="failed").inc()
                logger.info(f"Failed login for {mask_value(email)}")
                return LoginResult(success=False, error="Invalid email or password")

            if not user.is_active:
                login_failed.labels(reason="account_disabled").inc()
                login_total.labels(status="failed").inc()
                return LoginResult(success=False, error="Invalid email or password")

            login_total.labels(status="success").inc()
            return LoginResult(success=True, user=user, access_token=issue_token(user), message="Login successful")

    def get_profile(self, user) -> Result:
        """Current user, plus the business profile when the user is a vendor."""
        user.refresh_from_db()
        business = None
        if user.role == User.ROLE_VENDOR:
            business = getattr(user, "business", None)
        return Result(success=True, data={"user": user, "business": business})

    def update_profile(self, user, data: dict) -> Result:
        updates = {field: data[field] for field in PROFILE_FIELDS if field in data and data[field] is not None}
        if not updates:
            return Result(success=False, error="No fields to update", error_code="validation_error")

        if "name" in updates and not str(updates["name"]).strip():
            return Result(success=False, error="Name cannot be empty", error_code="validation_error")

        if "phone" in updates:
            updates["phone"] = str(updates["phone"]).strip() or None
            if updates["phone"] and User.objects.filter(phone=updates["phone"]).exclude(pk=user.pk).exists():
                return Result(success=False, error="Phone number already registered", error_code="phone_exists")

        for field, value in updates.items():
            setattr(user, field, value)
        user.save(update_fields=[*updates.keys(), "updated_at"])
        profile_updates_total.inc()

        return Result(success=True, message="Profile updated", data={"user": user})

    def change_password(self, user, current_password: str, new_password: str) -> Result:
        if not current_password or not new_password:
            return Result(
                success=False, error="Current and new password are required", error_code="validation_error"
            )

        if not user.check_password(current_password):
            password_changes_total.labels(status="failed").inc()
            return Result(success=False, error="Current password is incorrect", error_code="invalid_credentials")

        if len(new_password) < MIN_PASSWORD_LENGTH:
            password_changes_total.labels(status="failed").inc()
            return Result(
                success=False,
                error=f"New password must be at least {MIN_PASSWORD_LENGTH} characters",
                error_code="validation_error",
            )

        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])
        password_changes_total.labels(status="success").inc()
        logger.info(f"Password changed for user {user.pk}")

        return Result(success=True, message="Password updated successfully")
