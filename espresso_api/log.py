"""
Structured logging setup.

Every log line emitted by the service carries a ``label`` that names the
category of the event, so failures can be grouped without parsing messages.
"""

import logging
from enum import Enum

import structlog

from .config import Settings


class LogLabel(str, Enum):
    """Categorical labels attached to log events."""

    MIDDLEWARE_FALLBACK = "MIDDLEWARE_FALLBACK"
    SERVICE_FALLBACK = "SERVICE_FALLBACK"
    UTILITY_ENV_VARS = "UTILITY_ENV_VARS"
    FIREBASE_CONNECTION = "FIREBASE_CONNECTION"
    FIREBASE_OPERATIONS = "FIREBASE_OPERATIONS"
    GCP_BUCKET = "GCP_BUCKET"
    SERVER_STARTUP = "SERVER_STARTUP"


def configure_logging(settings: Settings) -> None:
    """Configure structlog rendering and level filtering from settings."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if settings.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
