import random
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from django.utils.text import slugify

from marketplace.models import (
    Business,
    CartItem,
    Order,
    OrderItem,
    Product,
    ProductCategory,
    Review,
    Service,
    ServiceCategory,
)


User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    name = factory.Faker("name")
    phone = factory.Sequence(lambda n: f"90000{n:05d}")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True
    role = User.ROLE_CUSTOMER


class VendorFactory(UserFactory):
    role = User.ROLE_VENDOR
    username = factory.Sequence(lambda n: f"vendor_{n}")
    email = factory.Sequence(lambda n: f"vendor_{n}@example.com")


class AdminFactory(UserFactory):
    role = User.ROLE_ADMIN
    is_superuser = True
    is_staff = True
    username = factory.Sequence(lambda n: f"admin_{n}")
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")


class ServiceCategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ServiceCategory

    name = factory.Sequence(lambda n: f"Service Category {n}")
    slug = factory.LazyAttribute(lambda o: slugify(o.name))
    description = factory.Faker("sentence", nb_words=8)
    is_active = True


class ProductCategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductCategory

    name = factory.Sequence(lambda n: f"Product Category {n}")
    slug = factory.LazyAttribute(lambda o: slugify(o.name))
    description = factory.Faker("sentence", nb_words=8)
    is_active = True


class ServiceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Service

    name = factory.Sequence(lambda n: f"Service {n}")
    slug = factory.LazyAttribute(lambda o: slugify(o.name))
    description = factory.Faker("sentence", nb_words=12)
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(100, 2000)}.00"))
    price_unit = "per service"
    duration_mins = 60
    rating = 0
    review_count = 0
    is_active = True

    vendor = factory.SubFactory(VendorFactory)
    category = factory.SubFactory(ServiceCategoryFactory)


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    slug = factory.LazyAttribute(lambda o: slugify(o.name))
    description = factory.Faker("sentence", nb_words=12)
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(50, 1500)}.00"))
    mrp = factory.LazyAttribute(lambda o: o.price)
    stock = 10
    unit = "piece"
    rating = 0
    review_count = 0
    is_active = True
    is_featured = False

    vendor = factory.SubFactory(VendorFactory)
    category = factory.SubFactory(ProductCategoryFactory)


class ProductOutOfStockFactory(ProductFactory):
    stock = 0


class BusinessFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Business

    user = factory.SubFactory(VendorFactory)
    business_name = factory.Sequence(lambda n: f"Nellore Business {n}")
    business_type = "both"
    description = factory.Faker("sentence", nb_words=10)
    address = factory.Faker("street_address")
    area = "Stonehousepet"
    pincode = "524002"
    phone = factory.LazyAttribute(lambda o: o.user.phone or "9876500000")
    whatsapp = factory.LazyAttribute(lambda o: o.phone)
    is_verified = False
    is_active = True


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem

    user = factory.SubFactory(UserFactory)
    item_type = "product"
    item_id = factory.LazyFunction(lambda: ProductFactory().pk)
    quantity = 1


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    order_number = factory.Sequence(lambda n: f"NLRTEST{n:05d}")
    user = factory.SubFactory(UserFactory)
    vendor = factory.SubFactory(VendorFactory)
    order_type = "product"
    status = Order.STATUS_PENDING
    subtotal = Decimal("600.00")
    delivery_fee = Decimal("0.00")
    discount = Decimal("0.00")
    total = factory.LazyAttribute(lambda o: o.subtotal + o.delivery_fee - o.discount)
    delivery_address = factory.Faker("street_address")
    delivery_area = "Magunta Layout"
    delivery_pincode = "524003"


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    item_type = "product"
    item_id = 1
    item_name = factory.Sequence(lambda n: f"Snapshot {n}")
    quantity = 1
    price = Decimal("100.00")
    total = factory.LazyAttribute(lambda o: o.price * o.quantity)


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review

    user = factory.SubFactory(UserFactory)
    review_type = "product"
    item_id = 1
    rating = factory.Faker("random_int", min=1, max=5)
    comment = factory.Faker("sentence", nb_words=8)
