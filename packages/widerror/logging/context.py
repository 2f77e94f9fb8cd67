"""Per-task error context for structured logging.

While a record is being handled, its flattened fields can be bound here so
every log line emitted inside the block carries the same error
classification and chain root code. Built on ``contextvars``, so threaded
and asyncio callers each see their own context.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Iterator

from . import fields
from .records import error_fields

if TYPE_CHECKING:
    from packages.widerror.errors import WidError

_ERROR_CONTEXT: ContextVar[tuple[tuple[str, Any], ...]] = ContextVar(
    "widerror_error_context", default=()
)


def get_context() -> dict[str, Any]:
    """Return the currently bound fields as a new dict."""
    return dict(_ERROR_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind scalar fields into the current context. ``None`` is skipped."""
    current = get_context()
    current.update({key: value for key, value in values.items() if value is not None})
    _ERROR_CONTEXT.set(tuple(current.items()))


def reset_context() -> None:
    _ERROR_CONTEXT.set(())


@contextmanager
def error_context(record: "WidError") -> Iterator[dict[str, Any]]:
    """Tag every log line in the block with the fields of ``record``.

    Fields of an outer ``error_context`` are replaced for the duration of the
    block and restored on exit. Yields the bound fields.
    """
    bound = error_fields(record)
    kept = [
        (key, value)
        for key, value in _ERROR_CONTEXT.get()
        if not key.startswith(fields.ERROR_PREFIX)
    ]
    token = _ERROR_CONTEXT.set((*kept, *bound.items()))
    try:
        yield bound
    finally:
        _ERROR_CONTEXT.reset(token)
