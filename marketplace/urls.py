from django.urls import path

from .api.views import health, marketplace_prometheus_metrics, stats
from .cart.api.views import CartViewSet
from .catalog.api.views import ProductViewSet, ServiceViewSet
from .ordering.api.views import OrderViewSet
from .research.api.views import ResearchViewSet
from .vendors.api.views import BusinessViewSet


app_name = "marketplace"

# Explicit routes: the public API has no trailing slashes
cart = CartViewSet.as_view({"get": "list", "post": "create", "delete": "clear"})
cart_item = CartViewSet.as_view({"put": "update", "delete": "destroy"})

orders = OrderViewSet.as_view({"get": "list", "post": "create"})
order_detail = OrderViewSet.as_view({"get": "retrieve"})
order_status = OrderViewSet.as_view({"put": "set_status"})
vendor_orders = OrderViewSet.as_view({"get": "vendor_orders"})

service_categories = ServiceViewSet.as_view({"get": "categories"})
services = ServiceViewSet.as_view({"get": "list", "post": "create"})
service_detail = ServiceViewSet.as_view({"get": "retrieve", "put": "update"})
service_review = ServiceViewSet.as_view({"post": "review"})

product_categories = ProductViewSet.as_view({"get": "categories"})
featured_products = ProductViewSet.as_view({"get": "featured"})
products = ProductViewSet.as_view({"get": "list", "post": "create"})
product_detail = ProductViewSet.as_view({"get": "retrieve", "put": "update"})
product_review = ProductViewSet.as_view({"post": "review"})

businesses = BusinessViewSet.as_view({"get": "list", "put": "update_mine"})
business_register = BusinessViewSet.as_view({"post": "register"})
business_stats = BusinessViewSet.as_view({"get": "my_stats"})
business_detail = BusinessViewSet.as_view({"get": "retrieve"})
business_review = BusinessViewSet.as_view({"post": "review"})

research_services = ResearchViewSet.as_view({"post": "services"})
research_products = ResearchViewSet.as_view({"post": "products"})
compare_services = ResearchViewSet.as_view({"post": "compare_services"})
compare_products = ResearchViewSet.as_view({"post": "compare_products"})
recommendations = ResearchViewSet.as_view({"get": "recommendations"})
analytics = ResearchViewSet.as_view({"get": "analytics"})

urlpatterns = [
    # Catalog
    path("services/categories", service_categories, name="service-categories"),
    path("services", services, name="services"),
    path("services/<int:pk>", service_detail, name="service-detail"),
    path("services/<int:pk>/review", service_review, name="service-review"),
    path("products/categories", product_categories, name="product-categories"),
    path("products/featured", featured_products, name="featured-products"),
    path("products", products, name="products"),
    path("products/<int:pk>", product_detail, name="product-detail"),
    path("products/<int:pk>/review", product_review, name="product-review"),
    # Cart & orders
    path("orders/cart", cart, name="cart"),
    path("orders/cart/<int:pk>", cart_item, name="cart-item"),
    path("orders/vendor/all", vendor_orders, name="vendor-orders"),
    path("orders", orders, name="orders"),
    path("orders/<int:pk>", order_detail, name="order-detail"),
    path("orders/<int:pk>/status", order_status, name="order-status"),
    # Businesses
    path("businesses", businesses, name="businesses"),
    path("businesses/register", business_register, name="business-register"),
    path("businesses/my/stats", business_stats, name="business-stats"),
    path("businesses/<int:pk>", business_detail, name="business-detail"),
    path("businesses/<int:pk>/review", business_review, name="business-review"),
    # Research
    path("research/services", research_services, name="research-services"),
    path("research/products", research_products, name="research-products"),
    path("research/compare/services", compare_services, name="research-compare-services"),
    path("research/compare/products", compare_products, name="research-compare-products"),
    path("research/recommendations", recommendations, name="research-recommendations"),
    path("research/analytics/<str:item_type>/<int:pk>", analytics, name="research-analytics"),
    # System
    path("health", health, name="health"),
    path("stats", stats, name="stats"),
    path("metrics", marketplace_prometheus_metrics, name="metrics"),
]
