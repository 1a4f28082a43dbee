from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.test import TestCase

from authentication.domain.services import AuthService
from marketplace.tests.factories import BusinessFactory, UserFactory, VendorFactory


User = get_user_model()


class AuthServiceRegisterTest(TestCase):
    def setUp(self):
        self.service = AuthService()

    def test_register_normalizes_email_and_blank_phone(self):
        result = self.service.register("  Priya ", " Priya@Example.COM ", "secret123", phone="  ")

        self.assertTrue(result.success)
        self.assertEqual(result.user.email, "priya@example.com")
        self.assertEqual(result.user.name, "Priya")
        self.assertIsNone(result.user.phone)
        self.assertTrue(result.user.check_password("secret123"))
        self.assertTrue(result.access_token)

    def test_unknown_role_becomes_customer(self):
        result = self.service.register("Priya", "priya@example.com", "secret123", role="superhero")
        self.assertEqual(result.user.role, User.ROLE_CUSTOMER)

    def test_invalid_email(self):
        result = self.service.register("Priya", "not-an-email", "secret123")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Invalid email address")

    def test_duplicate_email_is_case_insensitive(self):
        UserFactory(email="priya@example.com")
        result = self.service.register("Priya", "PRIYA@example.com", "secret123")

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "email_exists")

    def test_integrity_error_reported_as_duplicate(self):
        with patch.object(User.objects, "create_user", side_effect=IntegrityError):
            result = self.service.register("Priya", "priya@example.com", "secret123")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Email already registered")


class AuthServiceAccountTest(TestCase):
    def setUp(self):
        self.service = AuthService()

    def test_login_missing_fields(self):
        result = self.service.login("", "")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Email and password are required")

    def test_profile_for_vendor_includes_business(self):
        vendor = VendorFactory()
        business = BusinessFactory(user=vendor)

        result = self.service.get_profile(vendor)

        self.assertEqual(result.data["business"], business)

    def test_profile_for_vendor_without_business(self):
        result = self.service.get_profile(VendorFactory())
        self.assertIsNone(result.data["business"])

    def test_update_profile_rejects_blank_name(self):
        user = UserFactory(name="Ravi")
        result = self.service.update_profile(user, {"name": "   "})

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Name cannot be empty")
        user.refresh_from_db()
        self.assertEqual(user.name, "Ravi")

    def test_update_profile_keeps_own_phone(self):
        user = UserFactory(phone="9848011111")
        result = self.service.update_profile(user, {"phone": "9848011111", "city": "Gudur"})

        self.assertTrue(result.success)
        self.assertEqual(result.data["user"].city, "Gudur")

    def test_update_profile_clears_phone(self):
        user = UserFactory(phone="9848011111")
        self.service.update_profile(user, {"phone": ""})

        user.refresh_from_db()
        self.assertIsNone(user.phone)

    def test_change_password_keeps_old_on_failure(self):
        user = UserFactory()
        result = self.service.change_password(user, "defaultpassword", "123")

        self.assertFalse(result.success)
        user.refresh_from_db()
        self.assertTrue(user.check_password("defaultpassword"))
