"""Logging setup for Glowline.

Text output for interactive use, JSON lines for machine consumption.
Library modules never configure logging themselves; they only call
``logging.getLogger(__name__)``. Entry points (CLI, session hosts) call
:func:`configure_logging` once.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# LogRecord attributes that are not user-supplied context
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)


class StructuredJSONFormatter(logging.Formatter):
    """Render each record as one JSON object.

    Shape::

        {
            "level": "INFO",
            "message": "...",
            "timestamp": "2026-01-29T12:00:00+00:00",
            "context": {"logger_name": "...", "module": "...", "line": 42, ...}
        }

    Any ``extra=`` fields (or LoggerAdapter context) end up in ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            context["error_type"] = exc_type.__name__ if exc_type else None
            context["error_message"] = str(exc_value) if exc_value else None
            context["stack_trace"] = record.exc_text or self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                context[key] = value

        entry = {
            "level": record.levelname,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "context": context,
        }
        return json.dumps(entry, default=str)


def _quiet_transport_loggers() -> None:
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Configure root logging for the process.

    Safe to call repeatedly; later calls replace earlier handlers.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case.
        format_string: Text format. Ignored when ``structured`` is True.
        filename: Log to this file instead of stdout.
        structured: Emit JSON lines via :class:`StructuredJSONFormatter`.

    Raises:
        ValueError: If ``level`` is not a known level name.

    Examples:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(level="INFO", structured=True, filename="glowline.jsonl")
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    handler: logging.Handler
    if filename:
        handler = logging.FileHandler(filename)
    else:
        handler = logging.StreamHandler(sys.stdout)

    formatter: logging.Formatter
    if structured:
        formatter = StructuredJSONFormatter()
    else:
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handler.setFormatter(formatter)

    logging.basicConfig(level=numeric_level, handlers=[handler], force=True)
    _quiet_transport_loggers()


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Return a logger, wrapped in a LoggerAdapter when context is given.

    Args:
        name: Logger name, normally ``__name__``.
        **context: Fields attached to every record (e.g. ``design_id``).
    """
    logger = logging.getLogger(name)
    if context:
        return logging.LoggerAdapter(logger, context)
    return logger
