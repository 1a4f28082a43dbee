"""
Django settings for bazaarBackend project.

Runtime configuration is read from the process environment. Business
constants for checkout and research live at the bottom of this module.
"""

import os
import re
from datetime import timedelta
from decimal import Decimal
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_duration(value, default):
    """Parse durations such as ``"7d"``, ``"12h"``, ``"30m"`` or ``"45s"``.

    A bare number is read as seconds. Unparseable values fall back to ``default``.
    """
    match = re.fullmatch(r"\s*(\d+)\s*([smhd]?)\s*", str(value or ""))
    if not match:
        return default
    amount, unit = int(match.group(1)), match.group(2) or "s"
    return {
        "s": timedelta(seconds=amount),
        "m": timedelta(minutes=amount),
        "h": timedelta(hours=amount),
        "d": timedelta(days=amount),
    }[unit]


SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-nellore-bazaar-dev-key")

DEBUG = env_bool("DEBUG", False)

ALLOWED_HOSTS = [h.strip() for h in os.environ.get("ALLOWED_HOSTS", "*").split(",") if h.strip()]

PORT = int(os.environ.get("PORT", "3001"))

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    "django_filters",
    "drf_spectacular",
    "authentication",
    "marketplace",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "bazaarBackend.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "bazaarBackend.wsgi.application"
ASGI_APPLICATION = "bazaarBackend.asgi.application"

# Database
DB_PATH = os.environ.get("DB_PATH", str(BASE_DIR / "nellore.sqlite3"))

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": DB_PATH,
    }
}

AUTH_USER_MODEL = "authentication.CustomUser"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 6}},
]


LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "Asia/Kolkata")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

APPEND_SLASH = False

# CORS
CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "*")
if CORS_ORIGIN == "*":
    CORS_ALLOW_ALL_ORIGINS = True
else:
    CORS_ALLOWED_ORIGINS = [o.strip() for o in CORS_ORIGIN.split(",") if o.strip()]

# Rate limiting
RATE_LIMIT_WINDOW_MS = int(os.environ.get("RATE_LIMIT_WINDOW_MS", str(15 * 60 * 1000)))
RATE_LIMIT_MAX = int(os.environ.get("RATE_LIMIT_MAX", "100"))

# REST framework
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_THROTTLE_CLASSES": [
        "utils.throttling.WindowRateThrottle",
    ],
    "DEFAULT_FILTER_BACKENDS": ["django_filters.rest_framework.DjangoFilterBackend"],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "utils.exception_handler.api_exception_handler",
    "UNAUTHENTICATED_USER": "django.contrib.auth.models.AnonymousUser",
}

JWT_SECRET = os.environ.get("JWT_SECRET", SECRET_KEY)
JWT_EXPIRES_IN = os.environ.get("JWT_EXPIRES_IN", "7d")

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": parse_duration(JWT_EXPIRES_IN, timedelta(days=7)),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=30),
    "ALGORITHM": "HS256",
    "SIGNING_KEY": JWT_SECRET,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "id",
    "USER_ID_CLAIM": "user_id",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Nellore Bazaar API",
    "DESCRIPTION": "Local services and shopping marketplace for Nellore",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": r"/api/",
}

# Cache (request throttling counters)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "nellore-bazaar",
    }
}

# Domain events
EVENT_BUS_BACKEND = os.environ.get("EVENT_BUS_BACKEND", "memory")
EVENT_BUS_REDIS_URL = os.environ.get("EVENT_BUS_REDIS_URL", "redis://localhost:6379/0")

# Observability
OTEL_TRACING_ENABLED = env_bool("OTEL_TRACING_ENABLED", False)
OTEL_SERVICE_NAME = os.environ.get("OTEL_SERVICE_NAME", "nellore-bazaar")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "authentication": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "marketplace": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "infrastructure": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "utils": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

# Marketplace
APP_NAME = "Nellore Bazaar"
APP_VERSION = "1.0.0"
TOWN_NAME = os.environ.get("TOWN_NAME", "Nellore")

DELIVERY_FEE = Decimal("39")
FREE_DELIVERY_THRESHOLD = Decimal("500")
ORDER_NUMBER_PREFIX = "NLR"
ORDER_NUMBER_MAX_ATTEMPTS = 5

SERVICE_STOCK_SENTINEL = 999

RESEARCH_SERVICE_LIMIT = 10
RESEARCH_PRODUCT_LIMIT = 20
RESEARCH_COMPARE_MIN = 2
RESEARCH_COMPARE_MAX = 5
RESEARCH_TOP_RATED_MIN = 4.5
RESEARCH_BEST_DEAL_MIN_DISCOUNT = 10
RESEARCH_TRENDING_MIN_REVIEWS = 5
RESEARCH_ANALYTICS_REVIEW_WINDOW = 100
RESEARCH_SERVICE_WEIGHTS = {"rating": 0.4, "vendor_rating": 0.3, "review_count": 0.01, "verified": 10}
RESEARCH_PRODUCT_WEIGHTS = {"rating": 0.4, "review_count": 0.01, "verified": 10, "featured": 5}
