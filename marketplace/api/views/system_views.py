from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from marketplace.api.serializers import HealthResponseSerializer, StatsResponseSerializer
from marketplace.models import Business, Order, Product, Service


@extend_schema(
    operation_id="system_health",
    summary="Liveness check",
    responses={200: HealthResponseSerializer},
    tags=["System"],
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    return Response(
        {
            "status": "ok",
            "timestamp": timezone.now().isoformat(),
            "version": settings.APP_VERSION,
            "name": settings.APP_NAME,
        }
    )


@extend_schema(
    operation_id="system_stats",
    summary="Marketplace counts",
    description="Active businesses, services and products, and all orders.",
    responses={200: StatsResponseSerializer},
    tags=["System"],
)
@api_view(["GET"])
@permission_classes([AllowAny])
def stats(request):
    return Response(
        {
            "businesses": Business.objects.filter(is_active=True).count(),
            "services": Service.objects.filter(is_active=True).count(),
            "products": Product.objects.filter(is_active=True).count(),
            "orders": Order.objects.count(),
        }
    )
