"""Exception normalization into WidError records.

The mapping is conservative and generic. Services can layer domain-specific
normalization before falling back to ``exception_to_error``.
"""

from __future__ import annotations

from .enums import Kind
from .exceptions import WidErrorException
from .factories import (
    deadline_exceeded,
    internal,
    invalid_argument,
    not_found,
    permission_denied,
    unavailable,
)
from .record import WidError


def exception_to_error(exc: BaseException, *, code: int = 0) -> WidError:
    """Normalize ``exc`` and its ``__cause__`` chain into a record chain.

    A ``WidErrorException`` contributes its carried record unchanged, cause
    included. Other exceptions are classified by type and named after their
    class.
    """
    chain: list[BaseException] = []
    seen: set[int] = set()
    cursor: BaseException | None = exc
    while cursor is not None and id(cursor) not in seen:
        seen.add(id(cursor))
        chain.append(cursor)
        if isinstance(cursor, WidErrorException):
            break
        cursor = cursor.__cause__

    innermost, *outer = reversed(chain)
    record = _single_exception_to_error(innermost, code=code)
    for item in outer:
        record = _single_exception_to_error(item, code=code).with_source(record)
    return record


def _single_exception_to_error(exc: BaseException, *, code: int) -> WidError:
    if isinstance(exc, WidErrorException):
        return exc.record

    name = type(exc).__name__
    text = str(exc)

    if isinstance(exc, ValueError):
        return invalid_argument(code, text or "invalid argument", name=name)

    if isinstance(exc, KeyError):
        return not_found(code, text or "resource not found", name=name)

    if isinstance(exc, PermissionError):
        return permission_denied(code, text or "permission denied", name=name)

    if isinstance(exc, TimeoutError):
        return deadline_exceeded(code, text or "deadline exceeded", name=name)

    if isinstance(exc, ConnectionError):
        return unavailable(code, text or "dependency unavailable", name=name)

    if isinstance(exc, NotImplementedError):
        return internal(code, text or "not implemented", name=name).with_kind(
            Kind.UNIMPLEMENTED
        )

    return internal(code, text or "unexpected exception", name=name)
