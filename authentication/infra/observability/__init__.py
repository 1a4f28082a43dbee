"""
Observability Infrastructure

OpenTelemetry tracing and Prometheus metrics for authentication.
"""

from .metrics import (
    login_duration,
    login_failed,
    login_total,
    password_changes_total,
    profile_updates_total,
    registration_failed,
    registration_total,
)
from .tracing import get_tracer, setup_tracing, tracer


__all__ = [
    "setup_tracing",
    "get_tracer",
    "tracer",
    "login_total",
    "login_failed",
    "login_duration",
    "registration_total",
    "registration_failed",
    "password_changes_total",
    "profile_updates_total",
]
