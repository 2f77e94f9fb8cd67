"""Stdout logging configuration for services emitting WidError records.

Error fields, whether passed through ``log_error`` or bound with
``error_context``, are grouped under a single ``error`` object in JSON
output so indexers see one stable shape per record. An exception that
carries a record contributes that record's fields when none were bound.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from . import fields
from .context import bind_context, get_context
from .records import error_fields

if TYPE_CHECKING:
    from packages.widerror.config import LoggingSettings


class ContextFilter(logging.Filter):
    """Attach bound context and per-call error fields to each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_context()
        extra = getattr(record, "error_fields", None)
        if isinstance(extra, dict):
            context.update(extra)
        record.context = context
        return True


def split_error_fields(context: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate ``error_*`` keys, prefix stripped, from the rest of ``context``."""
    general: dict[str, Any] = {}
    error: dict[str, Any] = {}
    for key, value in context.items():
        if key.startswith(fields.ERROR_PREFIX):
            error[key[len(fields.ERROR_PREFIX):]] = value
        else:
            general[key] = value
    return general, error


def _carried_error_fields(record: logging.LogRecord) -> dict[str, Any]:
    # Imported late: the errors package logs through this one.
    from packages.widerror.errors.exceptions import WidErrorException

    if not record.exc_info or not isinstance(record.exc_info[1], WidErrorException):
        return {}
    _, error = split_error_fields(error_fields(record.exc_info[1].record))
    return error


def _context_of(record: logging.LogRecord) -> tuple[dict[str, Any], dict[str, Any]]:
    context = getattr(record, "context", None)
    general, error = split_error_fields(context if isinstance(context, dict) else {})
    return general, error or _carried_error_fields(record)


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per line with error fields nested under ``error``."""

    def format(self, record: logging.LogRecord) -> str:
        general, error = _context_of(record)
        payload: dict[str, Any] = {
            fields.TIMESTAMP: datetime.now(UTC).isoformat(),
            fields.LEVEL: record.levelname,
            fields.LOGGER: record.name,
            fields.MESSAGE: record.getMessage(),
            **general,
        }
        if error:
            payload[fields.ERROR] = error
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Human-readable line: context as ``key=value``, then ``error[...]``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        parts = [super().format(record)]
        general, error = _context_of(record)
        parts.extend(f"{key}={value}" for key, value in sorted(general.items()))
        if error:
            rendered = " ".join(f"{key}={value}" for key, value in error.items())
            parts.append(f"{fields.ERROR}[{rendered}]")
        return " ".join(parts)


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
    environment: str | None = None,
) -> logging.Handler:
    """Install a stdout handler on the root logger and return it.

    A handler installed by an earlier call is replaced; handlers owned by
    the host application are left alone.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if any(isinstance(item, ContextFilter) for item in existing.filters):
            root.removeHandler(existing)
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level.upper())
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())
    root.addHandler(handler)

    bind_context(**{fields.SERVICE: service, fields.ENVIRONMENT: environment})
    return handler


def configure_from_settings(settings: "LoggingSettings") -> logging.Handler:
    """Apply a ``LoggingSettings`` subtree."""
    return configure_logging(
        level=settings.level,
        json_output=settings.json_output,
        service=settings.service,
        environment=settings.environment,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)
