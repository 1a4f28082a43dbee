from rest_framework import serializers

from marketplace.catalog.domain.models.catalog import Product, ProductCategory, Service, ServiceCategory


class ServiceCategorySerializer(serializers.ModelSerializer):
    service_count = serializers.IntegerField(source="item_count", read_only=True, default=0)

    class Meta:
        model = ServiceCategory
        fields = ["id", "name", "slug", "icon", "description", "image", "service_count"]


class ProductCategorySerializer(serializers.ModelSerializer):
    product_count = serializers.IntegerField(source="item_count", read_only=True, default=0)

    class Meta:
        model = ProductCategory
        fields = ["id", "name", "slug", "icon", "description", "image", "product_count"]


class VendorBusinessMixin(serializers.Serializer):
    """Vendor display fields taken from the vendor's business profile."""

    vendor_name = serializers.SerializerMethodField()
    vendor_verified = serializers.SerializerMethodField()

    @staticmethod
    def _business(obj):
        if obj.vendor_id is None:
            return None
        return getattr(obj.vendor, "business", None)

    def get_vendor_name(self, obj):
        business = self._business(obj)
        return business.business_name if business else None

    def get_vendor_verified(self, obj) -> bool:
        business = self._business(obj)
        return bool(business and business.is_verified)


class ServiceSerializer(VendorBusinessMixin, serializers.ModelSerializer):
    category_name = serializers.CharField(source="category.name", read_only=True)
    category_slug = serializers.CharField(source="category.slug", read_only=True)

    class Meta:
        model = Service
        fields = [
            "id",
            "category_id",
            "category_name",
            "category_slug",
            "vendor_id",
            "vendor_name",
            "vendor_verified",
            "name",
            "slug",
            "description",
            "price",
            "price_unit",
            "duration_mins",
            "image",
            "rating",
            "review_count",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


class ProductSerializer(VendorBusinessMixin, serializers.ModelSerializer):
    category_name = serializers.CharField(source="category.name", read_only=True)
    category_slug = serializers.CharField(source="category.slug", read_only=True)
    discount_percent = serializers.DecimalField(max_digits=5, decimal_places=2, read_only=True)
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "category_id",
            "category_name",
            "category_slug",
            "vendor_id",
            "vendor_name",
            "vendor_verified",
            "name",
            "slug",
            "description",
            "price",
            "mrp",
            "discount_percent",
            "stock",
            "in_stock",
            "unit",
            "image",
            "is_featured",
            "rating",
            "review_count",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


class VendorContactMixin(serializers.Serializer):
    vendor_phone = serializers.SerializerMethodField()
    vendor_whatsapp = serializers.SerializerMethodField()

    def get_vendor_phone(self, obj):
        business = VendorBusinessMixin._business(obj)
        return business.phone if business else None

    def get_vendor_whatsapp(self, obj):
        business = VendorBusinessMixin._business(obj)
        return business.whatsapp if business else None


class ServiceDetailSerializer(VendorContactMixin, ServiceSerializer):
    class Meta(ServiceSerializer.Meta):
        fields = ServiceSerializer.Meta.fields + ["vendor_phone", "vendor_whatsapp"]
        read_only_fields = fields


class ProductDetailSerializer(VendorContactMixin, ProductSerializer):
    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ["vendor_phone", "vendor_whatsapp"]
        read_only_fields = fields


class CatalogItemSummarySerializer(serializers.Serializer):
    """Compact card used for related items and business listings."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    mrp = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True, required=False)
    rating = serializers.FloatField()
    review_count = serializers.IntegerField()
    image = serializers.CharField(allow_blank=True)


# ===== Vendor write serializers =====


class ServiceWriteSerializer(serializers.Serializer):
    """Create/update payload; the service layer decides which fields are required."""

    category_id = serializers.IntegerField(required=False, min_value=1)
    name = serializers.CharField(required=False, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(required=False, max_digits=10, decimal_places=2, min_value=0)
    price_unit = serializers.CharField(required=False, max_length=50)
    duration_mins = serializers.IntegerField(required=False, min_value=1)
    image = serializers.CharField(required=False, allow_blank=True, max_length=500)
    is_active = serializers.BooleanField(required=False)


class ProductWriteSerializer(serializers.Serializer):
    category_id = serializers.IntegerField(required=False, min_value=1)
    name = serializers.CharField(required=False, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(required=False, max_digits=10, decimal_places=2, min_value=0)
    mrp = serializers.DecimalField(required=False, max_digits=10, decimal_places=2, min_value=0)
    stock = serializers.IntegerField(required=False, min_value=0)
    unit = serializers.CharField(required=False, max_length=30)
    image = serializers.CharField(required=False, allow_blank=True, max_length=500)
    is_featured = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)
