"""
Translate ServiceResult failures into HTTP responses.

Views call ``error_response(result)`` instead of repeating per-endpoint
``if result.error == ...`` ladders; the status comes from the error code.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response

from marketplace.services import ErrorCodes
from utils.exception_handler import INTERNAL_ERROR_MESSAGE


logger = logging.getLogger(__name__)

ERROR_STATUS = {
    # ValidationError / ConflictError / InsufficientStock
    ErrorCodes.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_ITEM_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.MIXED_VENDOR_ORDER: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.BUSINESS_EXISTS: status.HTTP_400_BAD_REQUEST,
    # NotFoundError
    ErrorCodes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ITEM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ITEM_NOT_IN_CART: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.BUSINESS_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # ForbiddenError
    ErrorCodes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.NOT_ITEM_OWNER: status.HTTP_403_FORBIDDEN,
    ErrorCodes.NOT_ORDER_VENDOR: status.HTTP_403_FORBIDDEN,
}


def status_for(error_code: str) -> int:
    return ERROR_STATUS.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(result) -> Response:
    """Build ``{"error": message}`` with the status mapped from ``result.error``."""
    http_status = status_for(result.error)

    if http_status >= 500:
        logger.error(f"Service failure '{result.error}': {result.error_detail}")
        message = result.error_detail if settings.DEBUG else INTERNAL_ERROR_MESSAGE
    else:
        message = result.error_detail or result.error

    return Response({"error": message}, status=http_status)
