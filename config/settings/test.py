# config/settings/test.py
from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-secret-key"

# SQLite by default; set DB_ENGINE=postgresql to exercise row-level locking.
if os.getenv("DB_ENGINE", "sqlite").lower().startswith("postgres"):  # noqa: F405
    DATABASES["default"]["ENGINE"] = "django.db.backends.postgresql"  # noqa: F405
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "test.sqlite3",  # noqa: F405
        }
    }

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Tests exercise the in-memory store unless a test opts into the DB path.
COMMON_IDEMPOTENCY_USE_DB = False

LAB_PATIENT_ID_FALLBACK = "LP01"

# Let pytest's caplog see application log records.
LOGGING["loggers"]["lab_core"]["propagate"] = True  # noqa: F405
