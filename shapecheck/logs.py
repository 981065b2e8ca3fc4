"""Structured logging setup.

shapecheck only ever calls structlog.get_logger(); nothing is configured at
import time. Applications that want shapecheck's own formatting call
configure_logging() once at startup.
"""

import logging

import structlog

from shapecheck.config import get_settings


def configure_logging() -> None:
    """Configure structlog from the current settings."""
    settings = get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.LOG_LEVEL!r}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
