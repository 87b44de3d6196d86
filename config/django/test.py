from .base import *  # noqa

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

IDENTIFIERS_DID_PREFIX = "did:example"
IDENTIFIERS_HIDE_FORBIDDEN = True
