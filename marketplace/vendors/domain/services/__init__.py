from .business_service import BusinessService


__all__ = ["BusinessService"]
