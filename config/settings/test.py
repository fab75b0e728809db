"""Test settings.

Fast password hashing, plain static storage and quiet logs. The database
comes from the same DB_* variables as base; set DB_ENGINE to
django.db.backends.postgresql to exercise the exclusion constraint.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES["staticfiles"]["BACKEND"] = 'django.contrib.staticfiles.storage.StaticFilesStorage'  # noqa: F405

LOGGING["handlers"]["console"]["level"] = os.environ.get('LOG_LEVEL', 'WARNING')  # noqa: F405

BOOKINGS = {  # noqa: F405
    'INITIAL_STATUS': 'pending',
    'CURRENCY': 'USD',
}
