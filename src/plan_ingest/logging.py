"""Structured logging for plan-ingest.

Thin layer over the standard logging module:

- JSONFormatter / HumanFormatter for machine or terminal output
- StructuredLogger, which accepts keyword fields on every call
- configure_logging() to install a handler on the package logger
- get_logger() to obtain a namespaced StructuredLogger

Example:
    >>> from plan_ingest.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", format="json")
    >>> logger = get_logger("parser")
    >>> logger.debug("grammar_declined", grammar="json")
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from plan_ingest.errors import ConfigurationError

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]

ROOT_LOGGER_NAME = "plan_ingest"

LOG_LEVEL_ENV = "PLAN_INGEST_LOG_LEVEL"
LOG_FORMAT_ENV = "PLAN_INGEST_LOG_FORMAT"

# Attributes present on every LogRecord; anything else came in via `extra`.
_RESERVED_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


# =============================================================================
# Formatters
# =============================================================================


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data.update(_extra_fields(record))

        if record.levelno >= logging.ERROR:
            data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, default=str)


class HumanFormatter(logging.Formatter):
    """Render records as `time LEVEL logger: message key=value ...`."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{timestamp} {record.levelname:<7} {record.name}: {record.getMessage()}"

        fields = _extra_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# =============================================================================
# StructuredLogger
# =============================================================================


class StructuredLogger:
    """Logger accepting structured keyword fields.

    Keyword arguments are passed through as `extra`, so the formatters above
    render them as separate fields.
    """

    def __init__(self, name: str):
        self.name = name
        self._logger = logging.getLogger(name)

    def _log(self, level: int, msg: str, exc_info: bool = False, **fields: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, msg, exc_info=exc_info, extra=fields or None)

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, **fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log(logging.ERROR, msg, **fields)

    def exception(self, msg: str, **fields: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=True, **fields)

    def child(self, suffix: str) -> StructuredLogger:
        """Create a logger nested under this one."""
        return StructuredLogger(f"{self.name}.{suffix}")


def get_logger(name: str) -> StructuredLogger:
    """Get a StructuredLogger under the plan_ingest namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return StructuredLogger(name)


# =============================================================================
# Configuration
# =============================================================================

_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "human": HumanFormatter,
    "json": JSONFormatter,
}


def configure_logging(level: str | int | None = None, format: str | None = None) -> None:
    """Install a stderr handler on the plan_ingest logger.

    Args:
        level: Log level name or number. Defaults to $PLAN_INGEST_LOG_LEVEL,
            then WARNING.
        format: "human" or "json". Defaults to $PLAN_INGEST_LOG_FORMAT, then
            "human".

    Raises:
        ConfigurationError: If the format or level is not recognised.
    """
    level = level if level is not None else os.environ.get(LOG_LEVEL_ENV, "WARNING")
    format = (format or os.environ.get(LOG_FORMAT_ENV, "human")).lower()

    formatter_cls = _FORMATTERS.get(format)
    if formatter_cls is None:
        raise ConfigurationError(
            f"Unknown log format: {format!r}",
            config_key=LOG_FORMAT_ENV,
            hint="Use 'human' or 'json'.",
        )

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ConfigurationError(f"Unknown log level: {level!r}", config_key=LOG_LEVEL_ENV)
        level = resolved

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_plan_ingest_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter_cls())
    handler._plan_ingest_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
