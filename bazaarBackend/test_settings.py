import os
import tempfile

# Mock SECRET_KEY for tests BEFORE importing settings
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403


# Override Database to use a throwaway SQLite file for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.path.join(tempfile.gettempdir(), "nellore_bazaar_test.sqlite3"),
    }
}

# Faster password hashing in tests
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

OTEL_TRACING_ENABLED = False
EVENT_BUS_BACKEND = "memory"
DEBUG = False

# Keep throttling out of the way of test suites that hammer endpoints
RATE_LIMIT_MAX = 100000

# Enable SessionAuthentication for tests to support client.force_login()
REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"].append(  # noqa: F405
    "rest_framework.authentication.SessionAuthentication"
)
