from django.contrib import admin

from .models import (
    Business, CartItem, Order, OrderItem, Product, ProductCategory, Review,
    Service, ServiceCategory
)


class CategoryAdminBase(admin.ModelAdmin):
    list_display = ('name', 'slug', 'icon', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name', 'description')
    prepopulated_fields = {'slug': ('name',)}


@admin.register(ServiceCategory)
class ServiceCategoryAdmin(CategoryAdminBase):
    pass


@admin.register(ProductCategory)
class ProductCategoryAdmin(CategoryAdminBase):
    pass


class CatalogItemAdminBase(admin.ModelAdmin):
    search_fields = ('name', 'description', 'vendor__email')
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ('rating', 'review_count', 'created_at')
    actions = ['activate_items', 'deactivate_items']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('category', 'vendor')

    def activate_items(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} items activated.')
    activate_items.short_description = "Activate selected items"

    def deactivate_items(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} items deactivated.')
    deactivate_items.short_description = "Deactivate selected items"


@admin.register(Service)
class ServiceAdmin(CatalogItemAdminBase):
    list_display = ('name', 'vendor', 'category', 'price', 'price_unit', 'rating',
                   'review_count', 'is_active')
    list_filter = ('is_active', 'category')

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'description', 'image')
        }),
        ('Vendor & Category', {
            'fields': ('vendor', 'category')
        }),
        ('Pricing', {
            'fields': ('price', 'price_unit', 'duration_mins')
        }),
        ('Status & Ratings', {
            'fields': ('is_active', 'rating', 'review_count', 'created_at')
        })
    )


@admin.register(Product)
class ProductAdmin(CatalogItemAdminBase):
    list_display = ('name', 'vendor', 'category', 'price', 'mrp', 'stock',
                   'is_featured', 'is_active')
    list_filter = ('is_active', 'is_featured', 'category')
    actions = CatalogItemAdminBase.actions + ['make_featured', 'remove_featured']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'description', 'image')
        }),
        ('Vendor & Category', {
            'fields': ('vendor', 'category')
        }),
        ('Pricing & Inventory', {
            'fields': ('price', 'mrp', 'stock', 'unit')
        }),
        ('Status & Ratings', {
            'fields': ('is_active', 'is_featured', 'rating', 'review_count', 'created_at')
        })
    )

    def make_featured(self, request, queryset):
        updated = queryset.update(is_featured=True)
        self.message_user(request, f'{updated} products marked as featured.')
    make_featured.short_description = "Mark selected products as featured"

    def remove_featured(self, request, queryset):
        updated = queryset.update(is_featured=False)
        self.message_user(request, f'{updated} products removed from featured.')
    remove_featured.short_description = "Remove selected products from featured"


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ('business_name', 'user', 'business_type', 'area', 'phone',
                   'is_verified', 'rating', 'is_active')
    list_filter = ('is_verified', 'is_active', 'business_type', 'area')
    search_fields = ('business_name', 'user__email', 'phone', 'gstin')
    readonly_fields = ('rating', 'review_count', 'created_at', 'updated_at')
    actions = ['verify_businesses', 'unverify_businesses']

    def verify_businesses(self, request, queryset):
        updated = queryset.update(is_verified=True)
        self.message_user(request, f'{updated} businesses verified.')
    verify_businesses.short_description = "Mark selected businesses as verified"

    def unverify_businesses(self, request, queryset):
        updated = queryset.update(is_verified=False)
        self.message_user(request, f'{updated} businesses unverified.')
    unverify_businesses.short_description = "Remove verification"


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('review_type', 'item_id', 'user', 'rating', 'created_at')
    list_filter = ('review_type', 'rating', 'created_at')
    search_fields = ('user__email', 'comment')
    readonly_fields = ('created_at',)


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('item_type', 'item_id', 'item_name', 'quantity', 'price', 'total')
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    # status is read-only here; transitions go through OrderService.set_status
    list_display = ('order_number', 'user', 'vendor', 'order_type', 'status',
                   'payment_status', 'total', 'created_at')
    list_filter = ('status', 'payment_status', 'order_type', 'created_at')
    search_fields = ('order_number', 'user__email', 'vendor__email')
    readonly_fields = ('order_number', 'user', 'vendor', 'order_type', 'status', 'subtotal',
                      'delivery_fee', 'discount', 'total', 'created_at', 'updated_at')
    inlines = [OrderItemInline]

    fieldsets = (
        (None, {
            'fields': ('order_number', 'user', 'vendor', 'order_type', 'status')
        }),
        ('Payment', {
            'fields': ('payment_method', 'payment_status', 'subtotal', 'delivery_fee', 'discount', 'total')
        }),
        ('Delivery', {
            'fields': ('delivery_address', 'delivery_area', 'delivery_city', 'delivery_pincode',
                      'scheduled_date', 'scheduled_time', 'notes')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ('user', 'item_type', 'item_id', 'quantity', 'created_at')
    list_filter = ('item_type',)
    search_fields = ('user__email',)
