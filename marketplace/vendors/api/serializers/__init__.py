from .business_serializers import (
    BusinessRegisterSerializer,
    BusinessSerializer,
    BusinessStatsSerializer,
    BusinessUpdateSerializer,
)


__all__ = ["BusinessSerializer", "BusinessRegisterSerializer", "BusinessUpdateSerializer", "BusinessStatsSerializer"]
