# backend/wealthvault/utils/logging.py
"""
Logging setup for WealthVault.

One stdout handler on the root logger, stamped with the request's
correlation ID, rendered either as a pipe-separated text line for local
runs or as one JSON object per line for log shipping (LOG_FORMAT=json).

What gets logged where:
    DEBUG   - solver iterations, records skipped by calculators
    INFO    - ledger writes, backup restores, one line per HTTP request
    WARNING - XIRR non-convergence, rejected oversells and backups
    ERROR   - database outages, unexpected service failures
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from wealthvault.config import settings
from wealthvault.utils.context import get_correlation_id

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_CORRELATION_ID = "no-correlation-id"

# Libraries that log every SQL statement or connection at INFO/DEBUG
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "httpx",
    "httpcore",
    "asyncio",
)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Attributes every LogRecord has; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "correlation_id",
    "taskName",
}


class CorrelationIdFilter(logging.Filter):
    """Sets record.correlation_id so formatters can always reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class JsonFormatter(logging.Formatter):
    """
    Renders a record as a single JSON line:

        {"timestamp": "...", "level": "INFO", "logger": "wealthvault.services.ledger",
         "correlation_id": "...", "message": "...", "extra": {"asset_id": 7}}

    Fields passed through `extra=` that json cannot encode (Decimal, date)
    are stringified.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        suppress_noisy_loggers: bool = True,
) -> None:
    """
    (Re)configure the root logger. Safe to call more than once: the previous
    handlers are replaced, never stacked.

    Args:
        level: Level name, defaults to settings.log_level.
        log_format: 'text' or 'json', defaults to settings.log_format.
        suppress_noisy_loggers: Raise QUIET_LOGGERS to WARNING.
    """
    level_name = level or settings.log_level
    format_name = log_format or settings.log_format

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(_build_formatter(format_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_get_log_level(level_name))

    if suppress_noisy_loggers:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging ready (level={level_name}, format={format_name})"
    )


def _get_log_level(level_str: str) -> int:
    """Map a level name such as 'info' or ' WARN ' to its logging constant."""
    key = level_str.strip().upper()
    try:
        return _LEVELS[key]
    except KeyError:
        raise ValueError(
            f"Invalid log level: '{key}'. Expected one of {', '.join(_LEVELS)}"
        ) from None
