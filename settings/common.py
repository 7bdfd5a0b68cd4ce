"""Django settings for freightdesk project."""
import json
import os
import re
import sys
from os.path import abspath
from os.path import dirname
from os.path import join
from pathlib import Path

import dj_database_url

from common.util import is_truthy

# Name of the deployment environment (dev/staging/production)
ENV = os.environ.get("ENV", "dev")

# -- Paths

# Name of the project
PROJECT_NAME = "freightdesk"

# Absolute path of project Django directory
BASE_DIR = dirname(dirname(abspath(__file__)))

# Directory to collect static files into
STATIC_ROOT = join(BASE_DIR, "run", "static")

# -- Application

DJANGO_CORE_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

THIRD_PARTY_APPS = [
    "django_extensions",
    "rest_framework",
]

DOMAIN_APPS = [
    "common",
    "ports.apps.PortsConfig",
    "carriers.apps.CarriersConfig",
    "quotations.apps.QuotationsConfig",
]

INSTALLED_APPS = [
    *DJANGO_CORE_APPS,
    *THIRD_PARTY_APPS,
    *DOMAIN_APPS,
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

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

# -- Security
SECRET_KEY = os.environ.get("SECRET_KEY", "k3#y!v0b&7r2q@_freightdesk-dev-only")

ALLOWED_HOSTS = re.split(r"\s|,", os.environ.get("ALLOWED_HOSTS", ""))

# Sets the X-Content-Type-Options: nosniff header
SECURE_CONTENT_TYPE_NOSNIFF = True

# Secure the CSRF cookie
CSRF_COOKIE_SECURE = True
CSRF_COOKIE_HTTPONLY = True

# Secure the session cookie
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SECURE = True

# Check specified header for whether connection is via HTTPS
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# -- Running Django

# Path to WSGI application
WSGI_APPLICATION = "wsgi.application"

# Path to root URL configuration
ROOT_URLCONF = "urls"

# URL path where static files are served
STATIC_URL = "/assets/"

# -- Debug

# Activates debugging
DEBUG = is_truthy(os.environ.get("DEBUG", False))

# -- Database

DB_URL = os.environ.get("DATABASE_URL", "postgres://localhost:5432/freightdesk")

DATABASES = {
    "default": dj_database_url.parse(DB_URL),
}

SQLITE = DB_URL.startswith("sqlite")

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

# Wrap each request in a transaction
DATABASES["default"]["ATOMIC_REQUESTS"] = True

# -- Internationalization

# Enable Django translation system
USE_I18N = False

# Language code - ignored unless USE_I18N is True
LANGUAGE_CODE = "en-gb"

# Make Django use timezone-aware datetimes internally
USE_TZ = True

# Time zone
TIME_ZONE = "Europe/Brussels"

# -- Logging
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s %(name)s %(levelname)s %(message)s"},
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "common": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "DEBUG"),
            "propagate": False,
        },
        "ports": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "DEBUG"),
            "propagate": False,
        },
        "carriers": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "DEBUG"),
            "propagate": False,
        },
        "quotations": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "DEBUG"),
            "propagate": False,
        },
    },
}

# -- Sentry error tracking

SENTRY_ENABLED = is_truthy(os.environ.get("SENTRY_DSN", "False"))

if SENTRY_ENABLED:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_kwargs = {
        "dsn": os.environ["SENTRY_DSN"],
        "environment": ENV,
        "integrations": [DjangoIntegration()],
    }
    if "shell" in sys.argv or "shell_plus" in sys.argv:
        sentry_kwargs["before_send"] = lambda event, hint: None

    if os.getenv("GIT_COMMIT"):
        sentry_kwargs["release"] = os.getenv("GIT_COMMIT")

    sentry_sdk.init(**sentry_kwargs)

# -- REST Framework
REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ],
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 20,
}

# -- Carrier rules

# Categories that need a tractor unit to be moved on and off the vessel.
TOWABLE_VEHICLE_CATEGORIES = ["trailer"]

# Categories that count as a tractor unit when present alongside a trailer.
TRACTOR_VEHICLE_CATEGORIES = ["truck", "truckhead"]

# Surcharge event codes that bill for towing.
TOWING_EVENT_CODES = ["TOWING", "TOWING_WAF"]

# Carrier category group codes mapped onto the purchase rate sheet columns.
# Exact matches are tried first, then substrings.
PDF_CATEGORY_GROUP_CODES = {
    "exact": {
        "CARS": "CAR",
        "SMALL_VANS": "SVAN",
        "BIG_VANS": "BVAN",
        "LM_CARGO": "LM",
    },
    "contains": {
        "LM": "LM",
    },
}

# Vehicle categories mapped onto the purchase rate sheet columns when a
# mapping carries no category group.
PDF_CATEGORY_VEHICLE_CATEGORIES = {
    "CAR": ["car"],
    "SVAN": ["small_van", "smallvan"],
    "BVAN": ["big_van", "bigvan"],
    "LM": ["truck", "truckhead", "trailer", "lm", "roro"],
}

PDF_CATEGORY_ORDER = ["CAR", "SVAN", "BVAN", "LM"]

# Country names (lower case) to ISO 3166-1 alpha-2 codes, used when a port
# has no usable UN/LOCODE.
PATH_COUNTRY_CODES = Path(BASE_DIR, "ports", "data", "country_codes.json")

with open(PATH_COUNTRY_CODES, encoding="utf-8") as country_codes_file:
    COUNTRY_NAME_CODES = json.load(country_codes_file)
