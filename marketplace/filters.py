import django_filters
from django.db.models import Q

from .catalog.domain.models.catalog import Product, Service
from .vendors.domain.models.business import Business


SORT_ORDERINGS = {
    "price_low": ("price", "id"),
    "price_high": ("-price", "id"),
    "rating": ("-rating", "-review_count"),
    "newest": ("-created_at", "-id"),
}


class CatalogFilterMixin(django_filters.FilterSet):
    """
    Filters shared by the service and product listings.

    Unknown ``sort`` values fall back to the model's popularity ordering.
    """

    category = django_filters.CharFilter(field_name="category__slug", lookup_expr="exact")
    search = django_filters.CharFilter(method="filter_search")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    sort = django_filters.CharFilter(method="filter_sort")

    def filter_search(self, queryset, name, value):
        """Search in name and description"""
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_sort(self, queryset, name, value):
        ordering = SORT_ORDERINGS.get(value)
        if ordering is None:
            return queryset
        return queryset.order_by(*ordering)


class ServiceFilter(CatalogFilterMixin):
    class Meta:
        model = Service
        fields = ["category", "search", "min_price", "max_price", "sort"]


class ProductFilter(CatalogFilterMixin):
    featured = django_filters.BooleanFilter(field_name="is_featured")
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")

    class Meta:
        model = Product
        fields = ["category", "search", "featured", "in_stock", "min_price", "max_price", "sort"]

    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.filter(stock__gt=0)
        return queryset.filter(stock=0)


class BusinessFilter(django_filters.FilterSet):
    """Directory filters; ``type`` also matches businesses offering both kinds."""

    type = django_filters.ChoiceFilter(choices=Business.BUSINESS_TYPE_CHOICES, method="filter_type")
    area = django_filters.CharFilter(field_name="area", lookup_expr="icontains")
    search = django_filters.CharFilter(method="filter_search")
    verified = django_filters.BooleanFilter(field_name="is_verified")

    class Meta:
        model = Business
        fields = ["type", "area", "search", "verified"]

    def filter_type(self, queryset, name, value):
        return queryset.filter(business_type__in=[value, Business.TYPE_BOTH])

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(business_name__icontains=value) | Q(description__icontains=value))
