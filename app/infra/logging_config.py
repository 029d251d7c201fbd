"""Process-wide logging setup shared by the API and the Celery workers."""

from __future__ import annotations

import logging
import sys

from app.config import get_settings

LOGGER_NAMESPACE = "harvest_assistant"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggingConfig:
    """Configure the root handler once; level comes from LOG_LEVEL."""

    _configured = False

    def __init__(self, level: str | None = None) -> None:
        if LoggingConfig._configured:
            return
        level_name = (level or get_settings().log_level or "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, level_name, logging.INFO),
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler(sys.stdout)],
        )
        # SQLAlchemy echoes every statement at INFO
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        LoggingConfig._configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the service namespace (e.g. harvest_assistant.matcher)."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
