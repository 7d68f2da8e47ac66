"""
Development settings for cvback project.
"""

import os
import sys

import environ

from .base import *

env = environ.Env()

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

# Development-specific allowed hosts
ALLOWED_HOSTS.extend(["localhost", "127.0.0.1", "0.0.0.0"])

# Add Django Debug Toolbar in development (not in testing)
# Check for testing conditions to prevent debug toolbar issues
IS_TESTING = (
    "test" in sys.argv
    or "pytest" in sys.modules
    or os.environ.get("DJANGO_SETTINGS_MODULE", "").endswith("testing")
)

if not IS_TESTING:
    THIRD_PARTY_APPS.extend(
        [
            "debug_toolbar",
            "django_extensions",
        ]
    )

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# Browsable API is handy while building the dashboard
REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = [
    "rest_framework.renderers.JSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
]

# Django Debug Toolbar configuration (not in testing)
if not IS_TESTING:
    MIDDLEWARE.insert(0, "debug_toolbar.middleware.DebugToolbarMiddleware")
    INTERNAL_IPS: list[str] = ["127.0.0.1", "localhost"]

    DEBUG_TOOLBAR_CONFIG: dict = {
        "SHOW_TOOLBAR_CALLBACK": lambda request: DEBUG and not IS_TESTING,
        "IS_RUNNING_TESTS": IS_TESTING,
    }

# Development-specific logging
LOGGING["handlers"]["console"]["level"] = "DEBUG"
LOGGING["loggers"]["citizenvote"]["level"] = "DEBUG"

# Disable HTTPS redirects in development
SECURE_SSL_REDIRECT = False
SECURE_HSTS_SECONDS = 0
SECURE_HSTS_INCLUDE_SUBDOMAINS = False
SECURE_HSTS_PRELOAD = False
