"""Development settings for the hotel booking project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and rendering
logs for a terminal. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Human readable logs in the terminal
LOGGING["handlers"]["console"]["formatter"] = os.environ.get('LOG_FORMAT', 'console')  # noqa: F405

STORAGES["staticfiles"]["BACKEND"] = 'django.contrib.staticfiles.storage.StaticFilesStorage'  # noqa: F405
