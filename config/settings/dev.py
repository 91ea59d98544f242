"""Development settings for the Student Rentals project.

This module extends the base settings with development specific
configuration, such as enabling debug and rendering logs for humans
instead of as JSON. Do not use these settings in production!
"""

import structlog

from .base import *  # noqa: F401,F403
from .base import LOG_LEVEL, build_logging

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Readable console logs
LOG_RENDERER = structlog.dev.ConsoleRenderer(colors=False)
LOGGING = build_logging(LOG_RENDERER, LOG_LEVEL)
