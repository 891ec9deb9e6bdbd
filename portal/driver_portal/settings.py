"""
Django settings for the driver_portal project.

Configuration is read from environment variables so the same settings serve
development, tests and deployment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "driver-portal-insecure-development-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.sessions",
    "rest_framework",
    "common",
    "accounts",
    "driver_logs",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "accounts.middleware.DriverSessionMiddleware",
]

ROOT_URLCONF = "driver_portal.urls"

WSGI_APPLICATION = "driver_portal.wsgi.application"

# Drafts and credentials live on the HOS backend and in the browser session;
# the portal keeps no database of its own.
DATABASES = {}

SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SECURE = not DEBUG
SESSION_EXPIRE_AT_BROWSER_CLOSE = True

# Served by the front end, which may live on another origin.
LOGIN_URL = os.environ.get("DRIVER_PORTAL_LOGIN_URL", "/login/")

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("DJANGO_TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# HOS backend
HOS_API = {
    "BASE_URL": os.environ.get("HOS_API_BASE_URL", "http://localhost:8000/api"),
    "TIMEOUT": int(os.environ.get("HOS_API_TIMEOUT", "10")),
}

REST_FRAMEWORK = {
    "COERCE_DECIMAL_TO_STRING": False,
    "DATE_FORMAT": "%Y-%m-%d",
    "TIME_FORMAT": "%H:%M",
    "UNAUTHENTICATED_USER": None,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
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
        "accounts": {
            "handlers": ["console"],
            "level": os.environ.get("DRIVER_PORTAL_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "driver_logs": {
            "handlers": ["console"],
            "level": os.environ.get("DRIVER_PORTAL_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "common": {
            "handlers": ["console"],
            "level": os.environ.get("DRIVER_PORTAL_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
