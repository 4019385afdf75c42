from .settings import *  # noqa: F401,F403
from .settings import REST_FRAMEWORK

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

PORTFOLIO_IDENTITY_PROVIDER = "portfolio.identity.InMemoryIdentityProvider"

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
CONTACT_EMAIL = "owner@example.com"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {"contact": "1000/min"},
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
