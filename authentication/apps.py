import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"

    def ready(self):
        """
        Initialize OpenTelemetry tracing once the app registry is loaded.
        """
        try:
            from django.conf import settings

            from authentication.infra.observability.tracing import setup_tracing

            setup_tracing(
                service_name=getattr(settings, "OTEL_SERVICE_NAME", "nellore-bazaar"),
                enable=getattr(settings, "OTEL_TRACING_ENABLED", False),
            )
        except Exception as e:
            logger.warning(f"Failed to initialize OpenTelemetry tracing: {e}")
