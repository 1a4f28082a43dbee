"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type)
and BaseService class for all marketplace services.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Inspired by Rust's Result<T, E> type, this provides a clean way to handle
    service operation outcomes without exceptions for expected failures.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(cart)
        >>> if result.ok:
        ...     return Response(result.value, 200)
        >>> else:
        ...     return error_response(result)

        >>> result = service_err("item_not_found", "Product not found")
        >>> print(result.error)  # "item_not_found"
        >>> print(result.error_detail)  # "Product not found"
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Args:
        value: The success value

    Returns:
        ServiceResult with ok=True and the value

    Example:
        >>> return service_ok({"items": items, "total": total, "count": count})
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "item_not_found", "invalid_quantity")
        error_detail: Human-readable error message

    Returns:
        ServiceResult with ok=False and error information

    Example:
        >>> return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator
    - Error handling utilities

    Usage:
        class CartService(BaseService):
            def __init__(self, inventory_service):
                super().__init__()
                self.inventory_service = inventory_service

            @BaseService.log_performance
            def get_cart(self, user):
                self.logger.info(f"Loading cart for user {user.id}")
                # ... implementation
    """

    def __init__(self):
        """Initialize base service with logger."""
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time and any errors that occur.

        Args:
            func: The service method to wrap

        Returns:
            Wrapped function with performance logging

        Example:
            @BaseService.log_performance
            def expensive_operation(self):
                # ... operation
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                # Log based on result type
                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


# Common error codes for marketplace services
class ErrorCodes:
    """Standard error codes used across marketplace services."""

    # Validation errors (400)
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    INVALID_ITEM_TYPE = "invalid_item_type"
    INVALID_QUANTITY = "invalid_quantity"
    MIXED_VENDOR_ORDER = "mixed_vendor_order"

    # Order lifecycle errors (400)
    INVALID_STATUS = "invalid_status"
    INVALID_TRANSITION = "invalid_transition"

    # Inventory errors (400)
    INSUFFICIENT_STOCK = "insufficient_stock"

    # Lookup errors (404)
    NOT_FOUND = "not_found"
    ITEM_NOT_FOUND = "item_not_found"
    ITEM_NOT_IN_CART = "item_not_in_cart"
    ORDER_NOT_FOUND = "order_not_found"
    BUSINESS_NOT_FOUND = "business_not_found"

    # Permission errors (403)
    PERMISSION_DENIED = "permission_denied"
    NOT_ITEM_OWNER = "not_item_owner"
    NOT_ORDER_VENDOR = "not_order_vendor"

    # Conflict errors (400)
    BUSINESS_EXISTS = "business_exists"

    # Internal errors (500)
    INTERNAL_ERROR = "internal_error"
    DATABASE_ERROR = "database_error"
