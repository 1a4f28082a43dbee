import logging
import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from marketplace.models import (
    Business, CartItem, Order, Product, ProductCategory, Review, Service, ServiceCategory
)


User = get_user_model()
logger = logging.getLogger(__name__)

DEMO_USERS = [
    # (name, email, phone, password, role, address)
    ("Admin", "admin@ilovespsrnellore.com", "9876543210", "admin123", User.ROLE_ADMIN, ""),
    ("Ravi Kumar", "ravi@nelloreservices.com", "9876543211", "vendor123", User.ROLE_VENDOR, "Stonehousepet"),
    ("Priya Sharma", "priya@gmail.com", "9876543212", "customer123", User.ROLE_CUSTOMER, "Magunta Layout"),
]

SERVICE_CATEGORIES = [
    ("Home Services", "home-services", "fa-solid fa-plug-circle-bolt", "Electrician, plumber, AC repair, carpentry"),
    ("Personal Care", "personal-care", "fa-solid fa-spa", "Salon at home, wellness, grooming"),
    ("Business Support", "business-support", "fa-solid fa-briefcase", "Digital marketing, accounting, legal"),
    ("Safety & Security", "safety-security", "fa-solid fa-house-lock", "CCTV, smart locks, fire safety"),
    ("Cleaning", "cleaning", "fa-solid fa-broom", "Home cleaning, deep cleaning, sanitization"),
    ("Pest Control", "pest-control", "fa-solid fa-bug-slash", "Termite, cockroach, mosquito control"),
]

SERVICES = [
    # (category slug, name, slug, description, price, duration_mins)
    ("home-services", "Electrician", "electrician", "Wiring, switches, fan installation, repairs", 199, 60),
    ("home-services", "Plumber", "plumber", "Pipe repair, tap installation, drainage", 149, 45),
    ("home-services", "AC Service", "ac-service", "AC repair, gas refill, installation", 499, 90),
    ("home-services", "Carpenter", "carpenter", "Furniture repair, assembly, custom work", 299, 120),
    ("home-services", "Appliance Repair", "appliance-repair", "Washing machine, refrigerator, TV repair", 349, 60),
    ("personal-care", "Salon at Home - Women", "salon-women", "Haircut, facial, waxing, threading", 599, 90),
    ("personal-care", "Salon at Home - Men", "salon-men", "Haircut, shave, facial, grooming", 299, 45),
    ("personal-care", "Massage Therapy", "massage", "Relaxing massage, pain relief therapy", 799, 60),
    ("business-support", "Digital Marketing", "digital-marketing", "Social media, SEO, ads management", 4999, 0),
    ("business-support", "Accounting Services", "accounting", "GST filing, bookkeeping, tax planning", 1999, 0),
    ("safety-security", "CCTV Installation", "cctv", "2/4/8 camera setup with monitoring", 2999, 180),
    ("safety-security", "Smart Lock Installation", "smart-lock", "Digital door locks with app control", 1499, 60),
    ("cleaning", "Home Deep Cleaning", "deep-cleaning", "2BHK/3BHK complete cleaning", 1499, 240),
    ("cleaning", "Bathroom Cleaning", "bathroom-cleaning", "Scrubbing, sanitization, shine", 399, 60),
    ("pest-control", "General Pest Control", "general-pest", "Cockroach, ant, spider control", 799, 60),
    ("pest-control", "Termite Treatment", "termite", "Complete termite protection", 2499, 180),
]

PRODUCT_CATEGORIES = [
    ("Groceries", "groceries", "fa-solid fa-basket-shopping", "Rice, pulses, oils, daily essentials"),
    ("Fashion", "fashion", "fa-solid fa-shirt", "Clothing, accessories, footwear"),
    ("Electronics", "electronics", "fa-solid fa-mobile-screen", "Mobiles, laptops, accessories"),
    ("Organic", "organic", "fa-solid fa-seedling", "Organic food, natural products"),
    ("Gifts", "gifts", "fa-solid fa-gift", "Gift items, sweets, hampers"),
    ("Home & Kitchen", "home-kitchen", "fa-solid fa-kitchen-set", "Utensils, appliances, decor"),
]

PRODUCTS = [
    # (category slug, name, slug, description, price, mrp, stock, unit, featured)
    ("groceries", "Nellore Masuri Rice", "nellore-masuri-rice",
     "Premium quality Masuri rice, direct from Nellore farms", 399, 450, 100, "5kg", True),
    ("groceries", "Sona Masoori Rice", "sona-masoori-rice",
     "Light weight, aromatic rice perfect for daily cooking", 349, 399, 150, "5kg", False),
    ("groceries", "Coastal Spice Pack", "coastal-spice-pack",
     "Authentic Nellore spice blend for fish curry, biryani and more", 249, 299, 200, "pack", True),
    ("groceries", "Cold Pressed Coconut Oil", "coconut-oil",
     "Pure cold pressed coconut oil from coastal Nellore", 299, 350, 80, "1L", False),
    ("groceries", "Nellore Pickles Combo", "pickles-combo",
     "Mango, lemon and mixed vegetable pickles", 399, 499, 60, "3 jars", True),
    ("fashion", "Handloom Cotton Saree", "handloom-saree",
     "Traditional handloom saree with modern designs, soft cotton", 1499, 1999, 30, "piece", True),
    ("fashion", "Cotton Kurta Set - Men", "kurta-set-men",
     "Comfortable cotton kurta with pajama, perfect for summer", 899, 1199, 50, "set", False),
    ("fashion", "Kids Ethnic Wear", "kids-ethnic",
     "Traditional dress for kids, festivals and occasions", 599, 799, 40, "piece", False),
    ("electronics", "Wireless Earbuds", "wireless-earbuds",
     "Bluetooth 5.0, noise cancellation, 24hr battery", 1299, 1999, 25, "piece", True),
    ("electronics", "Phone Case - Premium", "phone-case",
     "Shockproof case with card holder, multiple colors", 299, 499, 100, "piece", False),
    ("organic", "Organic Honey", "organic-honey",
     "Pure forest honey from Eastern Ghats, no additives", 449, 549, 45, "500g", True),
    ("organic", "Organic Jaggery", "organic-jaggery",
     "Chemical-free jaggery, traditional process", 199, 249, 70, "1kg", False),
    ("gifts", "Nellore Sweet Box", "sweet-box",
     "Assorted traditional sweets from famous Nellore shops", 599, 699, 30, "box", True),
    ("gifts", "Gift Hamper - Premium", "gift-hamper",
     "Dry fruits, sweets and local specialties", 1299, 1599, 20, "hamper", True),
    ("home-kitchen", "Steel Lunch Box Set", "lunch-box",
     "Stainless steel 3-tier lunch box, leak proof", 549, 699, 40, "set", False),
    ("home-kitchen", "Copper Water Bottle", "copper-bottle",
     "Pure copper bottle, 1L capacity", 699, 899, 35, "piece", False),
]


class Command(BaseCommand):
    help = "Seeds demo users, a vendor business and the Nellore catalog."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing marketplace data before seeding",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Random seed for the generated ratings",
        )

    def handle(self, *args, **options):
        rng = random.Random(options["seed"])

        with transaction.atomic():
            if options["flush"]:
                self._flush()

            users = self._seed_users()
            vendor = users["ravi@nelloreservices.com"]
            self._seed_business(vendor)
            services = self._seed_services(vendor, rng)
            products = self._seed_products(vendor, rng)

        self.stdout.write(self.style.SUCCESS("Database seeded successfully"))
        self.stdout.write(f"  Users: {len(users)} (admin, vendor, customer)")
        self.stdout.write(f"  Service categories: {len(SERVICE_CATEGORIES)}, services: {services}")
        self.stdout.write(f"  Product categories: {len(PRODUCT_CATEGORIES)}, products: {products}")
        self.stdout.write("Demo credentials:")
        for name, email, _, password, role, _ in DEMO_USERS:
            self.stdout.write(f"  {role.capitalize()}: {email} / {password}")

    def _flush(self):
        self.stdout.write(self.style.WARNING("Flushing marketplace data..."))
        CartItem.objects.all().delete()
        Order.objects.all().delete()
        Review.objects.all().delete()
        Service.objects.all().delete()
        Product.objects.all().delete()
        Business.objects.all().delete()
        ServiceCategory.objects.all().delete()
        ProductCategory.objects.all().delete()
        User.objects.filter(email__in=[row[1] for row in DEMO_USERS]).delete()

    def _seed_users(self):
        users = {}
        for name, email, phone, password, role, address in DEMO_USERS:
            user, created = User.objects.get_or_create(
                email=email,
                defaults={
                    "username": email,
                    "name": name,
                    "phone": phone,
                    "role": role,
                    "address": address,
                    "is_staff": role == User.ROLE_ADMIN,
                    "is_superuser": role == User.ROLE_ADMIN,
                },
            )
            if created:
                user.set_password(password)
                user.save(update_fields=["password"])
                self.stdout.write(self.style.SUCCESS(f"Created user: {email}"))
            else:
                self.stdout.write(self.style.WARNING(f"User already exists: {email}"))
            users[email] = user
        return users

    def _seed_business(self, vendor):
        Business.objects.get_or_create(
            user=vendor,
            defaults={
                "business_name": "Nellore Home Services",
                "business_type": "both",
                "description": "Your trusted partner for home services and local products in Nellore",
                "address": "123, Main Road",
                "area": "Stonehousepet",
                "pincode": "524002",
                "phone": vendor.phone,
                "whatsapp": vendor.phone,
                "is_verified": True,
                "rating": 4.8,
            },
        )

    def _seed_services(self, vendor, rng):
        categories = {}
        for name, slug, icon, description in SERVICE_CATEGORIES:
            categories[slug], _ = ServiceCategory.objects.get_or_create(
                slug=slug, defaults={"name": name, "icon": icon, "description": description}
            )

        created_count = 0
        for category_slug, name, slug, description, price, duration in SERVICES:
            _, created = Service.objects.get_or_create(
                slug=slug,
                defaults={
                    "category": categories[category_slug],
                    "vendor": vendor,
                    "name": name,
                    "description": description,
                    "price": Decimal(price),
                    "duration_mins": duration,
                    "rating": round(rng.uniform(4, 5), 1),
                    "review_count": rng.randint(20, 219),
                },
            )
            created_count += int(created)
        return created_count

    def _seed_products(self, vendor, rng):
        categories = {}
        for name, slug, icon, description in PRODUCT_CATEGORIES:
            categories[slug], _ = ProductCategory.objects.get_or_create(
                slug=slug, defaults={"name": name, "icon": icon, "description": description}
            )

        created_count = 0
        for category_slug, name, slug, description, price, mrp, stock, unit, featured in PRODUCTS:
            _, created = Product.objects.get_or_create(
                slug=slug,
                defaults={
                    "category": categories[category_slug],
                    "vendor": vendor,
                    "name": name,
                    "description": description,
                    "price": Decimal(price),
                    "mrp": Decimal(mrp),
                    "stock": stock,
                    "unit": unit,
                    "is_featured": featured,
                    "rating": round(rng.uniform(4, 5), 1),
                    "review_count": rng.randint(10, 159),
                },
            )
            created_count += int(created)
        return created_count
