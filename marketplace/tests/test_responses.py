from django.test import SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated

from marketplace.api.responses import error_response
from marketplace.services.base import ErrorCodes, service_err
from utils.exception_handler import INTERNAL_ERROR_MESSAGE, api_exception_handler


class ErrorResponseTests(SimpleTestCase):
    def test_known_code_keeps_message(self):
        response = error_response(service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Order not found"})

    @override_settings(DEBUG=False)
    def test_internal_error_hides_detail(self):
        response = error_response(service_err(ErrorCodes.INTERNAL_ERROR, "duplicate key on orders"))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"error": INTERNAL_ERROR_MESSAGE})

    @override_settings(DEBUG=False)
    def test_unhandled_exception_uses_same_message(self):
        response = api_exception_handler(RuntimeError("boom"), {"view": None})

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"error": INTERNAL_ERROR_MESSAGE})

    def test_framework_errors_are_flattened(self):
        response = api_exception_handler(NotAuthenticated(), {"view": None})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(set(response.data), {"error"})
