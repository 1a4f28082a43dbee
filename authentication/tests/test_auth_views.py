from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from marketplace.tests.factories import BusinessFactory, UserFactory, VendorFactory


User = get_user_model()


class RegisterViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("authentication:register")
        self.payload = {"name": "Priya", "email": "Priya@Example.com", "password": "secret123", "phone": "9848012345"}

    def test_register_customer(self):
        response = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["message"], "Registration successful")
        self.assertEqual(response.data["user"]["email"], "priya@example.com")
        self.assertEqual(response.data["user"]["role"], "customer")
        self.assertEqual(response.data["user"]["city"], "Nellore")

        token = AccessToken(response.data["token"])
        self.assertEqual(token["role"], "customer")
        self.assertEqual(token["email"], "priya@example.com")

    def test_register_vendor(self):
        response = self.client.post(self.url, {**self.payload, "role": "vendor"}, format="json")
        self.assertEqual(response.data["user"]["role"], "vendor")

    def test_admin_role_cannot_be_requested(self):
        response = self.client.post(self.url, {**self.payload, "role": "admin"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["role"], "customer")

    def test_duplicate_email(self):
        UserFactory(email="priya@example.com")
        response = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Email already registered")

    def test_duplicate_phone(self):
        UserFactory(phone="9848012345")
        response = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Phone number already registered")

    def test_short_password(self):
        response = self.client.post(self.url, {**self.payload, "password": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Password must be at least 6 characters")
        self.assertFalse(User.objects.filter(email="priya@example.com").exists())

    def test_missing_fields(self):
        response = self.client.post(self.url, {"email": "priya@example.com"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_object_body_rejected(self):
        response = self.client.post(self.url, [self.payload], format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("error", response.data)
        self.assertFalse(User.objects.exists())


class LoginViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("authentication:login")
        self.user = UserFactory(email="ravi@example.com")

    def test_login(self):
        response = self.client.post(self.url, {"email": "RAVI@example.com", "password": "defaultpassword"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], self.user.pk)
        self.assertEqual(str(AccessToken(response.data["token"])["user_id"]), str(self.user.pk))

    def test_wrong_password(self):
        response = self.client.post(self.url, {"email": "ravi@example.com", "password": "nope"})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "Invalid email or password")

    def test_unknown_email_gives_same_message(self):
        response = self.client.post(self.url, {"email": "ghost@example.com", "password": "defaultpassword"})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "Invalid email or password")

    def test_inactive_user(self):
        User.objects.filter(pk=self.user.pk).update(is_active=False)
        response = self.client.post(self.url, {"email": "ravi@example.com", "password": "defaultpassword"})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_non_object_body_rejected(self):
        response = self.client.post(self.url, ["ravi@example.com", "defaultpassword"], format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("error", response.data)

    def test_token_authenticates_requests(self):
        login = self.client.post(self.url, {"email": "ravi@example.com", "password": "defaultpassword"})
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")

        response = self.client.get(reverse("authentication:me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["email"], "ravi@example.com")


class MeViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("authentication:me")

    def test_requires_authentication(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_customer_has_no_business(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data["business"])

    def test_vendor_sees_business(self):
        vendor = VendorFactory()
        business = BusinessFactory(user=vendor, business_name="Ravi Electricals")
        self.client.force_authenticate(user=vendor)

        response = self.client.get(self.url)

        self.assertEqual(response.data["business"]["id"], business.pk)
        self.assertEqual(response.data["business"]["business_name"], "Ravi Electricals")

    def test_update_profile(self):
        user = UserFactory()
        self.client.force_authenticate(user=user)

        response = self.client.put(self.url, {"address": "7 Dargamitta", "city": "Kavali"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Profile updated")
        user.refresh_from_db()
        self.assertEqual(user.address, "7 Dargamitta")
        self.assertEqual(user.city, "Kavali")

    def test_update_without_fields(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.put(self.url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "No fields to update")

    def test_update_phone_taken(self):
        UserFactory(phone="9848099999")
        self.client.force_authenticate(user=UserFactory())

        response = self.client.put(self.url, {"phone": "9848099999"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Phone number already registered")


class PasswordChangeViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("authentication:password")
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_change_password(self):
        response = self.client.put(
            self.url, {"current_password": "defaultpassword", "new_password": "newsecret"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Password updated successfully")
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("newsecret"))

    def test_camel_case_keys(self):
        response = self.client.put(
            self.url, {"currentPassword": "defaultpassword", "newPassword": "newsecret"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("newsecret"))

    def test_wrong_current_password(self):
        response = self.client.put(self.url, {"current_password": "wrong", "new_password": "newsecret"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "Current password is incorrect")

    def test_short_new_password(self):
        response = self.client.put(
            self.url, {"current_password": "defaultpassword", "new_password": "abc"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "New password must be at least 6 characters")

    def test_missing_fields(self):
        response = self.client.put(self.url, {"new_password": "newsecret"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Current and new password are required")

    def test_non_object_body_rejected(self):
        response = self.client.put(self.url, ["defaultpassword", "newsecret"], format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("defaultpassword"))
