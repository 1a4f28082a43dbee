from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Product, Service
from marketplace.tests.factories import (
    AdminFactory,
    BusinessFactory,
    ProductCategoryFactory,
    ProductFactory,
    ServiceCategoryFactory,
    ServiceFactory,
    UserFactory,
    VendorFactory,
)


class CategoryViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_service_categories_count_active_services(self):
        plumbing = ServiceCategoryFactory(name="Plumbing")
        ServiceFactory.create_batch(2, category=plumbing)
        ServiceFactory(category=plumbing, is_active=False)
        ServiceCategoryFactory(name="Retired", is_active=False)

        response = self.client.get(reverse("marketplace:service-categories"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        categories = response.data["categories"]
        self.assertEqual([c["name"] for c in categories], ["Plumbing"])
        self.assertEqual(categories[0]["service_count"], 2)

    def test_product_categories_are_sorted_by_name(self):
        ProductCategoryFactory(name="Spices")
        ProductCategoryFactory(name="Dairy")

        response = self.client.get(reverse("marketplace:product-categories"))

        self.assertEqual([c["name"] for c in response.data["categories"]], ["Dairy", "Spices"])
        self.assertEqual(response.data["categories"][0]["product_count"], 0)


class ServiceListViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("marketplace:services")
        self.plumbing = ServiceCategoryFactory(name="Plumbing", slug="plumbing")
        self.cleaning = ServiceCategoryFactory(name="Cleaning", slug="cleaning")

        vendor = VendorFactory()
        BusinessFactory(user=vendor, business_name="Nellore Home Services", is_verified=True)

        self.tap = ServiceFactory(
            vendor=vendor, category=self.plumbing, name="Tap Repair", price=Decimal("149.00"), review_count=40
        )
        self.pipe = ServiceFactory(
            vendor=vendor, category=self.plumbing, name="Pipe Leak Fix", price=Decimal("299.00"), review_count=90
        )
        self.sofa = ServiceFactory(
            category=self.cleaning,
            name="Sofa Cleaning",
            description="Deep shampoo for fabric sofas",
            price=Decimal("799.00"),
            rating=4.9,
            review_count=10,
        )
        ServiceFactory(category=self.plumbing, name="Retired Listing", is_active=False)

    def test_list_defaults_to_popularity(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 3)
        self.assertEqual(response.data["limit"], 20)
        self.assertEqual(response.data["offset"], 0)
        names = [s["name"] for s in response.data["services"]]
        self.assertEqual(names, ["Pipe Leak Fix", "Tap Repair", "Sofa Cleaning"])

    def test_list_includes_vendor_display_fields(self):
        response = self.client.get(self.url, {"category": "plumbing"})

        service = response.data["services"][0]
        self.assertEqual(service["category_slug"], "plumbing")
        self.assertEqual(service["vendor_name"], "Nellore Home Services")
        self.assertTrue(service["vendor_verified"])

    def test_filter_by_category(self):
        response = self.client.get(self.url, {"category": "cleaning"})
        self.assertEqual([s["id"] for s in response.data["services"]], [self.sofa.pk])

    def test_search_matches_description(self):
        response = self.client.get(self.url, {"search": "shampoo"})
        self.assertEqual(response.data["total"], 1)

    def test_price_range(self):
        response = self.client.get(self.url, {"min_price": "200", "max_price": "800"})
        self.assertEqual({s["id"] for s in response.data["services"]}, {self.pipe.pk, self.sofa.pk})

    def test_sort_orders(self):
        cases = {
            "price_low": [self.tap.pk, self.pipe.pk, self.sofa.pk],
            "price_high": [self.sofa.pk, self.pipe.pk, self.tap.pk],
            "rating": [self.sofa.pk, self.pipe.pk, self.tap.pk],
        }
        for sort, expected in cases.items():
            response = self.client.get(self.url, {"sort": sort})
            self.assertEqual([s["id"] for s in response.data["services"]], expected, sort)

    def test_unknown_sort_falls_back_to_popularity(self):
        response = self.client.get(self.url, {"sort": "cheapest"})
        self.assertEqual(response.data["services"][0]["id"], self.pipe.pk)

    def test_pagination(self):
        response = self.client.get(self.url, {"limit": 2, "offset": 2})

        self.assertEqual(response.data["total"], 3)
        self.assertEqual(len(response.data["services"]), 1)
        self.assertEqual(response.data["offset"], 2)

    def test_pagination_bounds(self):
        for params in ({"limit": 0}, {"limit": 101}, {"offset": -1}):
            response = self.client.get(self.url, params)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, params)


class ProductListViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("marketplace:products")
        self.rice = ProductFactory(name="Sona Masoori Rice", price=Decimal("60.00"), mrp=Decimal("75.00"))
        self.ghee = ProductFactory(name="Cow Ghee", is_featured=True, rating=4.6)
        self.sold_out = ProductFactory(name="Mango Pickle", stock=0)

    def test_product_fields(self):
        response = self.client.get(self.url, {"search": "Masoori"})

        product = response.data["products"][0]
        self.assertEqual(product["mrp"], "75.00")
        self.assertEqual(Decimal(product["discount_percent"]), Decimal("20.00"))
        self.assertTrue(product["in_stock"])

    def test_featured_filter(self):
        response = self.client.get(self.url, {"featured": "true"})
        self.assertEqual([p["id"] for p in response.data["products"]], [self.ghee.pk])

    def test_in_stock_filter(self):
        response = self.client.get(self.url, {"in_stock": "true"})
        self.assertNotIn(self.sold_out.pk, [p["id"] for p in response.data["products"]])

    def test_featured_endpoint(self):
        ProductFactory(is_featured=True, is_active=False)
        response = self.client.get(reverse("marketplace:featured-products"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["id"] for p in response.data["products"]], [self.ghee.pk])

    def test_featured_endpoint_is_capped(self):
        ProductFactory.create_batch(7, is_featured=True)
        response = self.client.get(reverse("marketplace:featured-products"))
        self.assertEqual(len(response.data["products"]), 6)


class CatalogDetailViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.vendor = VendorFactory()
        self.business = BusinessFactory(user=self.vendor, phone="9876543210", whatsapp="9876543211")
        self.category = ServiceCategoryFactory()
        self.service = ServiceFactory(vendor=self.vendor, category=self.category)
        self.siblings = ServiceFactory.create_batch(5, category=self.category)
        ServiceFactory(category=self.category, is_active=False)

    def test_service_detail(self):
        response = self.client.get(reverse("marketplace:service-detail", kwargs={"pk": self.service.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["service"]["id"], self.service.pk)
        self.assertEqual(response.data["service"]["vendor_phone"], "9876543210")
        self.assertEqual(response.data["service"]["vendor_whatsapp"], "9876543211")
        self.assertEqual(response.data["reviews"], [])

    def test_related_items_share_category(self):
        response = self.client.get(reverse("marketplace:service-detail", kwargs={"pk": self.service.pk}))

        related_ids = [item["id"] for item in response.data["related"]]
        self.assertEqual(len(related_ids), 4)
        self.assertNotIn(self.service.pk, related_ids)
        self.assertTrue(set(related_ids) <= {s.pk for s in self.siblings})

    def test_inactive_item_is_not_found(self):
        Service.objects.filter(pk=self.service.pk).update(is_active=False)
        response = self.client.get(reverse("marketplace:service-detail", kwargs={"pk": self.service.pk}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Service not found")

    def test_unknown_product(self):
        response = self.client.get(reverse("marketplace:product-detail", kwargs={"pk": 999999}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Product not found")


class CatalogWriteViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.vendor = VendorFactory()
        self.service_category = ServiceCategoryFactory()
        self.product_category = ProductCategoryFactory()
        self.services_url = reverse("marketplace:services")
        self.products_url = reverse("marketplace:products")

    def test_create_requires_vendor(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.post(
            self.services_url,
            {"category_id": self.service_category.pk, "name": "AC Service", "price": "499"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_vendor_creates_service(self):
        self.client.force_authenticate(user=self.vendor)
        response = self.client.post(
            self.services_url,
            {
                "category_id": self.service_category.pk,
                "name": "AC Service",
                "price": "499",
                "price_unit": "per unit",
                "duration_mins": 90,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["message"], "Service created")
        self.assertEqual(response.data["service"]["vendor_id"], self.vendor.pk)
        self.assertEqual(response.data["service"]["price"], "499.00")
        self.assertEqual(response.data["service"]["duration_mins"], 90)

    def test_product_mrp_defaults_to_price(self):
        self.client.force_authenticate(user=self.vendor)
        response = self.client.post(
            self.products_url,
            {"category_id": self.product_category.pk, "name": "Groundnut Oil", "price": "210", "stock": 25},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        product = Product.objects.get(pk=response.data["product"]["id"])
        self.assertEqual(product.mrp, Decimal("210.00"))
        self.assertEqual(product.stock, 25)

    def test_create_missing_required_fields(self):
        self.client.force_authenticate(user=self.vendor)
        response = self.client.post(self.services_url, {"name": "AC Service"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Category, name, and price are required")

    def test_create_with_unknown_category(self):
        self.client.force_authenticate(user=self.vendor)
        response = self.client.post(
            self.services_url, {"category_id": 999999, "name": "AC Service", "price": "499"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid category")

    def test_owner_updates_listing(self):
        product = ProductFactory(vendor=self.vendor, price=Decimal("100.00"))
        self.client.force_authenticate(user=self.vendor)

        response = self.client.put(
            reverse("marketplace:product-detail", kwargs={"pk": product.pk}),
            {"price": "90", "stock": 4},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Product updated")
        self.assertEqual(response.data["product"]["price"], "90.00")
        self.assertEqual(response.data["product"]["stock"], 4)

    def test_owner_can_reactivate_listing(self):
        service = ServiceFactory(vendor=self.vendor, is_active=False)
        self.client.force_authenticate(user=self.vendor)

        response = self.client.put(
            reverse("marketplace:service-detail", kwargs={"pk": service.pk}), {"is_active": True}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(Service.objects.get(pk=service.pk).is_active)

    def test_other_vendor_cannot_update(self):
        service = ServiceFactory(vendor=self.vendor, name="Original")
        self.client.force_authenticate(user=VendorFactory())

        response = self.client.put(
            reverse("marketplace:service-detail", kwargs={"pk": service.pk}), {"name": "Hijacked"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Service.objects.get(pk=service.pk).name, "Original")

    def test_admin_can_update_any_listing(self):
        service = ServiceFactory(vendor=self.vendor)
        self.client.force_authenticate(user=AdminFactory())

        response = self.client.put(
            reverse("marketplace:service-detail", kwargs={"pk": service.pk}), {"name": "Moderated"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["service"]["name"], "Moderated")

    def test_update_without_fields(self):
        service = ServiceFactory(vendor=self.vendor)
        self.client.force_authenticate(user=self.vendor)

        response = self.client.put(reverse("marketplace:service-detail", kwargs={"pk": service.pk}), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "No fields to update")

    def test_update_unknown_listing(self):
        self.client.force_authenticate(user=self.vendor)
        response = self.client.put(
            reverse("marketplace:product-detail", kwargs={"pk": 999999}), {"name": "Ghost"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
