"""
Development settings – extends base settings with debug-friendly overrides.
"""
from decouple import config

from .base import *  # noqa: F401, F403

DEBUG = config("DEBUG", default=True, cast=bool)

if DEBUG:
    ALLOWED_HOSTS = ["*"]

SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# Optional SQLite database so the admin page can be tried without PostgreSQL.
if config("USE_SQLITE", default=False, cast=bool):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        }
    }

# Short-lived resource-type cache while editing the entity registry by hand.
RESOURCE_TYPE_CACHE_TIMEOUT = config("RESOURCE_TYPE_CACHE_TIMEOUT", default=30, cast=int)

LOGGING["root"]["level"] = "DEBUG"  # noqa: F405

REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = [  # noqa: F405
    "rest_framework.renderers.JSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
]
