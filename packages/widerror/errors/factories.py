"""Factory helpers for creating consistently classified records."""

from __future__ import annotations

from .enums import Kind, PassThroughMode, RetryMode, Scope
from .message import Message, as_message
from .record import WidError


def invalid_argument(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.CLIENTSIDE,
    retry_mode: RetryMode = RetryMode.DENIED,
) -> WidError:
    """Create an invalid-argument record."""
    return _build(Kind.INVALID_ARGUMENT, code, message, name=name, scope=scope, retry_mode=retry_mode)


def not_found(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.CLIENTSIDE,
    retry_mode: RetryMode = RetryMode.DENIED,
) -> WidError:
    """Create a not-found record."""
    return _build(Kind.NOT_FOUND, code, message, name=name, scope=scope, retry_mode=retry_mode)


def already_exists(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.CLIENTSIDE,
    retry_mode: RetryMode = RetryMode.DENIED,
) -> WidError:
    """Create an already-exists record."""
    return _build(Kind.ALREADY_EXISTS, code, message, name=name, scope=scope, retry_mode=retry_mode)


def permission_denied(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.CLIENTSIDE,
    retry_mode: RetryMode = RetryMode.DENIED,
) -> WidError:
    """Create a permission-denied record."""
    return _build(Kind.PERMISSION_DENIED, code, message, name=name, scope=scope, retry_mode=retry_mode)


def unauthenticated(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.CLIENTSIDE,
    retry_mode: RetryMode = RetryMode.DENIED,
) -> WidError:
    """Create an unauthenticated record."""
    return _build(Kind.UNAUTHENTICATED, code, message, name=name, scope=scope, retry_mode=retry_mode)


def failed_precondition(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.CLIENTSIDE,
    retry_mode: RetryMode = RetryMode.DENIED,
) -> WidError:
    """Create a failed-precondition record."""
    return _build(Kind.FAILED_PRECONDITION, code, message, name=name, scope=scope, retry_mode=retry_mode)


def resource_exhausted(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.SERVERSIDE,
    retry_mode: RetryMode = RetryMode.ALLOWED,
) -> WidError:
    """Create a resource-exhausted record."""
    return _build(Kind.RESOURCE_EXHAUSTED, code, message, name=name, scope=scope, retry_mode=retry_mode)


def unavailable(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.SERVERSIDE,
    retry_mode: RetryMode = RetryMode.ALLOWED,
) -> WidError:
    """Create an unavailable record."""
    return _build(Kind.UNAVAILABLE, code, message, name=name, scope=scope, retry_mode=retry_mode)


def deadline_exceeded(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.SERVERSIDE,
    retry_mode: RetryMode = RetryMode.ALLOWED,
) -> WidError:
    """Create a deadline-exceeded record."""
    return _build(Kind.DEADLINE_EXCEEDED, code, message, name=name, scope=scope, retry_mode=retry_mode)


def internal(
    code: int,
    message: Message | str,
    *,
    name: str = "",
    scope: Scope = Scope.INTERNAL,
    retry_mode: RetryMode = RetryMode.DENIED,
) -> WidError:
    """Create an internal record that is never passed through verbatim."""
    return _build(
        Kind.INTERNAL,
        code,
        message,
        name=name,
        scope=scope,
        retry_mode=retry_mode,
        pass_through_mode=PassThroughMode.NEVER,
    )


def _build(
    kind: Kind,
    code: int,
    message: Message | str,
    *,
    name: str,
    scope: Scope,
    retry_mode: RetryMode,
    pass_through_mode: PassThroughMode = PassThroughMode.AUTO,
) -> WidError:
    return WidError(
        code=code,
        message=as_message(message),
        name=name,
        kind=kind,
        scope=scope,
        retry_mode=retry_mode,
        pass_through_mode=pass_through_mode,
    )
