"""Logging setup shared by the API process and the test suite."""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict

from groove.core.context import get_request_id, get_user_id

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | req=%(request_id)s user=%(user_id)s | %(message)s"

_configured = False


class RequestContextFilter(logging.Filter):
    """Stamp every record with the ids bound to the current request ("-" outside one)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.user_id = get_user_id() or "-"
        return True


def build_logging_config(log_level: str, *, sql_echo: bool = False) -> Dict[str, Any]:
    level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"groove": {"format": LOG_FORMAT}},
        "filters": {"request_context": {"()": RequestContextFilter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "groove",
                "filters": ["request_context"],
                "level": level,
            }
        },
        "loggers": {
            "groove": {"level": level},
            # SQL statements only when debugging queries.
            "sqlalchemy.engine": {"level": "INFO" if sql_echo else "WARNING"},
        },
        "root": {"handlers": ["console"], "level": level},
    }


def configure_logging(*, log_level: str = "INFO", sql_echo: bool = False) -> None:
    """Install the console handler once; later calls are ignored."""
    global _configured
    if _configured:
        return

    dictConfig(build_logging_config(log_level, sql_echo=sql_echo))
    _configured = True
    logging.getLogger(__name__).debug("Logging configured at %s", log_level)
