"""
Marketplace Service Layer

Shared building blocks for the domain services that live under
``marketplace/<context>/domain/services``:

- ServiceResult / service_ok / service_err: expected failures as values
- BaseService: per-class logger and the ``log_performance`` decorator
- ErrorCodes: error vocabulary mapped to HTTP statuses by the API layer

Usage:
    from marketplace.services import BaseService, ErrorCodes, service_err, service_ok

    result = container.cart_service().get_cart(user)

    if result.ok:
        cart = result.value
    else:
        error = result.error
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error codes
    "ErrorCodes",
]
