"""Public logging API for services emitting WidError records.

Wraps Python's ``logging`` module with stdout defaults and per-task error
context propagation.
"""

from .config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    configure_from_settings,
    configure_logging,
    get_logger,
    split_error_fields,
)
from .context import bind_context, error_context, get_context, reset_context
from .records import error_fields, log_error

__all__ = [
    "bind_context",
    "configure_from_settings",
    "configure_logging",
    "ContextFilter",
    "error_context",
    "error_fields",
    "get_context",
    "get_logger",
    "JsonFormatter",
    "log_error",
    "PlainFormatter",
    "reset_context",
    "split_error_fields",
]
