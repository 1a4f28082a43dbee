"""
DRF exception handling.

Every error leaving the API has the shape ``{"error": "<message>"}``.
Framework errors (authentication, permission, throttling, parse errors)
are reshaped here so clients only ever read one key.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler


logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def first_error_message(detail) -> str:
    """Flatten DRF error details (dict/list/str) into the first readable message."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = first_error_message(value)
            if field in ("non_field_errors", "detail"):
                return message
            return f"{field}: {message}"
        return "Invalid request"
    if isinstance(detail, (list, tuple)):
        return first_error_message(detail[0]) if detail else "Invalid request"
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(f"Unhandled exception in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        message = str(exc) if settings.DEBUG else INTERNAL_ERROR_MESSAGE
        return Response({"error": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response.data = {"error": first_error_message(response.data)}
    return response
