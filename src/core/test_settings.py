"""Settings used by the test suite: in-memory SQLite and cheap bcrypt."""

from .settings import *  # noqa: F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

BCRYPT_ROUNDS = 4
LOGGING["root"]["level"] = "CRITICAL"  # noqa: F405
