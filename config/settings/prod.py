"""Production settings for the Student Rentals project.

This module extends the base settings with production specific
configuration. Ensure that sensitive values are provided via
environment variables; logs are emitted as JSON lines.
"""

import os

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',')
