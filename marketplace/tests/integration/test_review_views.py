from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Business, Product, Review, Service
from marketplace.tests.factories import (
    BusinessFactory,
    ProductFactory,
    ReviewFactory,
    ServiceFactory,
    UserFactory,
    VendorFactory,
)


class ReviewViewIntegrationTest(TestCase):
    """Reviews on services, products and businesses keep the target's aggregates current."""

    def setUp(self):
        self.client = APIClient()
        self.customer = UserFactory()
        self.vendor = VendorFactory()
        self.product = ProductFactory(vendor=self.vendor)
        self.service = ServiceFactory(vendor=self.vendor)
        self.business = BusinessFactory(user=self.vendor)

        self.product_url = reverse("marketplace:product-review", kwargs={"pk": self.product.pk})
        self.service_url = reverse("marketplace:service-review", kwargs={"pk": self.service.pk})
        self.business_url = reverse("marketplace:business-review", kwargs={"pk": self.business.pk})

    def test_review_requires_authentication(self):
        response = self.client.post(self.product_url, {"rating": 5}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_submit_product_review(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(self.product_url, {"rating": 4, "comment": "Fresh and well packed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Review submitted")
        self.assertEqual(response.data["review"]["comment"], "Fresh and well packed")
        self.assertEqual(response.data["review"]["user_name"], self.customer.name)
        self.assertEqual(response.data["rating"], 4.0)
        self.assertEqual(response.data["review_count"], 1)

        self.product.refresh_from_db()
        self.assertEqual(self.product.rating, 4.0)
        self.assertEqual(self.product.review_count, 1)

    def test_average_is_rounded_to_one_decimal(self):
        ReviewFactory(review_type="service", item_id=self.service.pk, rating=5)
        ReviewFactory(review_type="service", item_id=self.service.pk, rating=4)
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(self.service_url, {"rating": 4}, format="json")

        self.assertEqual(response.data["rating"], 4.3)
        self.assertEqual(response.data["review_count"], 3)
        self.assertEqual(Service.objects.get(pk=self.service.pk).rating, 4.3)

    def test_second_review_replaces_first(self):
        self.client.force_authenticate(user=self.customer)
        self.client.post(self.product_url, {"rating": 2, "comment": "Late"}, format="json")
        response = self.client.post(self.product_url, {"rating": 5, "comment": "Sorted out"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["review_count"], 1)
        self.assertEqual(response.data["rating"], 5.0)

        review = Review.objects.get(user=self.customer, review_type="product", item_id=self.product.pk)
        self.assertEqual(review.comment, "Sorted out")

    def test_vendor_cannot_review_own_listing(self):
        self.client.force_authenticate(user=self.vendor)
        response = self.client.post(self.product_url, {"rating": 5}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "You cannot review your own listing")
        self.assertFalse(Review.objects.exists())

    def test_rating_out_of_range(self):
        self.client.force_authenticate(user=self.customer)

        for rating in (0, 6, "great"):
            response = self.client.post(self.product_url, {"rating": rating}, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn("Rating must be 1-5", response.data["error"])

        self.assertEqual(Product.objects.get(pk=self.product.pk).review_count, 0)

    def test_review_unknown_item(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(
            reverse("marketplace:service-review", kwargs={"pk": 999999}), {"rating": 3}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_review_inactive_item(self):
        Product.objects.filter(pk=self.product.pk).update(is_active=False)
        self.client.force_authenticate(user=self.customer)

        response = self.client.post(self.product_url, {"rating": 3}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_business_review_updates_business_rating(self):
        self.client.force_authenticate(user=self.customer)
        response = self.client.post(self.business_url, {"rating": 5, "comment": "Quick visit"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["review"]["review_type"], "business")

        business = Business.objects.get(pk=self.business.pk)
        self.assertEqual(business.rating, 5.0)
        self.assertEqual(business.review_count, 1)

    def test_owner_cannot_review_own_business(self):
        self.client.force_authenticate(user=self.vendor)
        response = self.client.post(self.business_url, {"rating": 5}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_reviews_appear_on_item_detail(self):
        self.client.force_authenticate(user=self.customer)
        self.client.post(self.product_url, {"rating": 4, "comment": "Good rice"}, format="json")

        response = self.client.get(reverse("marketplace:product-detail", kwargs={"pk": self.product.pk}))

        self.assertEqual(len(response.data["reviews"]), 1)
        self.assertEqual(response.data["reviews"][0]["comment"], "Good rice")
        self.assertEqual(response.data["product"]["review_count"], 1)
