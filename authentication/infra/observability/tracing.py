"""
OpenTelemetry Distributed Tracing

Configures OpenTelemetry for tracing requests and the checkout/research
code paths. Tracing is opt-in through ``OTEL_TRACING_ENABLED``; until it
is enabled the module-level ``tracer`` produces non-recording spans.
"""

import logging

from opentelemetry import trace
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter


logger = logging.getLogger(__name__)

_initialized = False


def setup_tracing(service_name: str = "nellore-bazaar", enable: bool = True, exporter=None) -> None:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        enable: Enable/disable tracing
        exporter: Span exporter to use (defaults to console output)

    Example:
        setup_tracing(service_name="nellore-bazaar", enable=settings.OTEL_TRACING_ENABLED)
    """
    global _initialized

    if _initialized:
        logger.warning("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    try:
        resource = Resource(attributes={SERVICE_NAME: service_name})

        tracer_provider = TracerProvider(resource=resource)
        tracer_provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter()))
        trace.set_tracer_provider(tracer_provider)

        # Auto-instrument Django (traces all HTTP requests)
        DjangoInstrumentor().instrument()
        logger.info("Django auto-instrumentation enabled")

        _initialized = True
        logger.info(f"OpenTelemetry tracing initialized for service: {service_name}")

    except Exception as e:
        logger.error(f"Failed to initialize tracing: {e}")


def get_tracer(name: str = "nellore-bazaar") -> trace.Tracer:
    """
    Get tracer instance for creating custom spans.

    Example:
        tracer = get_tracer(__name__)

        with tracer.start_as_current_span("my_operation"):
            ...
    """
    return trace.get_tracer(name)


# Shared tracer; the OpenTelemetry proxy resolves to the real provider once configured
tracer = get_tracer()
