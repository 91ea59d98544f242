"""Base settings for all environments.

This configuration file defines the common settings used in both development
and production environments. The booking core keeps all state in memory, so
no database is configured; Django provides settings, time zone handling and
the management command entry point. Environment-specific settings can be
overridden in `dev.py` or `prod.py`.
"""

import os
from pathlib import Path

import structlog

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'replace-me-in-production')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = False

ALLOWED_HOSTS: list[str] = os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',')

# Application definition

INSTALLED_APPS = [
    # Domain apps
    'apps.users',
    'apps.properties',
    'apps.bookings',
]

# All booking state lives in memory
DATABASES: dict = {}

# Internationalization
# https://docs.djangoproject.com/en/5.0/topics/i18n/

LANGUAGE_CODE = 'en-gb'

TIME_ZONE = os.environ.get('TIME_ZONE', 'Europe/London')

USE_I18N = True

USE_TZ = True

# Booking core
# 'counter' hands out 1, 2, 3, ...; 'uuid' hands out random UUID4 ids
RENTALS_ID_ALLOCATOR = os.environ.get('RENTALS_ID_ALLOCATOR', 'counter')
RENTALS_ID_START = int(os.environ.get('RENTALS_ID_START', '1'))

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
LOG_RENDERER = structlog.processors.JSONRenderer()

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def build_logging(renderer, level):
    """LOGGING dict routing the project loggers through structlog's formatter."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": "structlog.stdlib.ProcessorFormatter",
                "processor": renderer,
                "foreign_pre_chain": [
                    structlog.processors.TimeStamper(fmt="iso"),
                    structlog.stdlib.add_log_level,
                    structlog.stdlib.add_logger_name,
                ],
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "structlog",
                "level": "DEBUG",
            }
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
        "loggers": {
            "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
            "apps": {"handlers": ["console"], "level": level, "propagate": False},
            "shared": {"handlers": ["console"], "level": level, "propagate": False},
        },
    }


LOGGING = build_logging(LOG_RENDERER, LOG_LEVEL)
