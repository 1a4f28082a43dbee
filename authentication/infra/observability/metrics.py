"""
Prometheus Metrics

Defines all Prometheus metrics for authentication monitoring.
Metrics are exposed at /api/metrics together with the marketplace metrics.
"""

from prometheus_client import Counter, Histogram


# ===== Login Metrics =====

login_total = Counter("auth_login_total", "Total login attempts", ["status"])
"""
Total login attempts counter.
Labels: status (success/failed)

Example:
    login_total.labels(status='success').inc()
"""

login_failed = Counter("auth_login_failed", "Failed login attempts", ["reason"])
"""
Failed login attempts counter.
Labels: reason (missing_fields, invalid_credentials, account_disabled)

Example:
    login_failed.labels(reason='invalid_credentials').inc()
"""

login_duration = Histogram(
    "auth_login_duration_seconds", "Login request duration in seconds", buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0]
)
"""
Login duration histogram.
Tracks time taken for login operations, password hashing included.
"""


# ===== Registration Metrics =====

registration_total = Counter("auth_registration_total", "Total registration attempts", ["status", "role"])
"""
Total registration attempts.
Labels: status (success/failed), role (customer/vendor)
"""

registration_failed = Counter("auth_registration_failed", "Failed registration attempts", ["reason"])
"""
Failed registrations counter.
Labels: reason (email_exists, phone_exists, validation_error)
"""


# ===== Account Metrics =====

password_changes_total = Counter("auth_password_changes_total", "Password change attempts", ["status"])
"""
Password change counter.
Labels: status (success/failed)
"""

profile_updates_total = Counter("auth_profile_updates_total", "Profile updates applied")
