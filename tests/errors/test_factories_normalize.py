"""Tests for classification factories and exception normalization."""

from __future__ import annotations

import pytest

from packages.widerror.errors import (
    Kind,
    Message,
    PassThroughMode,
    RetryMode,
    Scope,
    WidError,
    already_exists,
    deadline_exceeded,
    exception_to_error,
    failed_precondition,
    internal,
    invalid_argument,
    not_found,
    permission_denied,
    resource_exhausted,
    unauthenticated,
    unavailable,
)


@pytest.mark.parametrize(
    ("factory", "kind", "scope", "retry_mode"),
    [
        (invalid_argument, Kind.INVALID_ARGUMENT, Scope.CLIENTSIDE, RetryMode.DENIED),
        (not_found, Kind.NOT_FOUND, Scope.CLIENTSIDE, RetryMode.DENIED),
        (already_exists, Kind.ALREADY_EXISTS, Scope.CLIENTSIDE, RetryMode.DENIED),
        (permission_denied, Kind.PERMISSION_DENIED, Scope.CLIENTSIDE, RetryMode.DENIED),
        (unauthenticated, Kind.UNAUTHENTICATED, Scope.CLIENTSIDE, RetryMode.DENIED),
        (failed_precondition, Kind.FAILED_PRECONDITION, Scope.CLIENTSIDE, RetryMode.DENIED),
        (resource_exhausted, Kind.RESOURCE_EXHAUSTED, Scope.SERVERSIDE, RetryMode.ALLOWED),
        (unavailable, Kind.UNAVAILABLE, Scope.SERVERSIDE, RetryMode.ALLOWED),
        (deadline_exceeded, Kind.DEADLINE_EXCEEDED, Scope.SERVERSIDE, RetryMode.ALLOWED),
        (internal, Kind.INTERNAL, Scope.INTERNAL, RetryMode.DENIED),
    ],
)
def test_factories_preset_classification(factory, kind: Kind, scope: Scope, retry_mode: RetryMode) -> None:
    """Each factory should preset kind, scope, and retry mode."""
    record = factory(100010001, "failure", name="FAILURE")

    assert record.code == 100010001
    assert record.message == Message.default("failure")
    assert record.name == "FAILURE"
    assert record.kind is kind
    assert record.scope is scope
    assert record.retry_mode is retry_mode


def test_factory_overrides_are_applied() -> None:
    """Keyword overrides should replace presets."""
    record = unavailable(1, "down", retry_mode=RetryMode.DENIED, scope=Scope.INTERNAL)

    assert record.retry_mode is RetryMode.DENIED
    assert record.scope is Scope.INTERNAL


def test_internal_errors_are_never_passed_through() -> None:
    """Internal records should not be forwarded verbatim."""
    assert internal(1, "oops").pass_through_mode is PassThroughMode.NEVER


@pytest.mark.parametrize(
    ("exc", "kind", "retry_mode"),
    [
        (ValueError("bad"), Kind.INVALID_ARGUMENT, RetryMode.DENIED),
        (KeyError("missing"), Kind.NOT_FOUND, RetryMode.DENIED),
        (PermissionError("nope"), Kind.PERMISSION_DENIED, RetryMode.DENIED),
        (TimeoutError("slow"), Kind.DEADLINE_EXCEEDED, RetryMode.ALLOWED),
        (ConnectionError("down"), Kind.UNAVAILABLE, RetryMode.ALLOWED),
        (NotImplementedError("later"), Kind.UNIMPLEMENTED, RetryMode.DENIED),
        (RuntimeError("boom"), Kind.INTERNAL, RetryMode.DENIED),
    ],
)
def test_exception_to_error_classifies_by_type(
    exc: BaseException, kind: Kind, retry_mode: RetryMode
) -> None:
    """Common exception types map onto canonical kinds."""
    record = exception_to_error(exc, code=100020003)

    assert record.kind is kind
    assert record.retry_mode is retry_mode
    assert record.code == 100020003
    assert record.name == type(exc).__name__
    assert record.source_error is None


def test_exception_to_error_uses_fallback_text_for_empty_messages() -> None:
    """Exceptions without text still produce a readable message."""
    assert exception_to_error(TimeoutError()).message.text == "deadline exceeded"


def test_exception_cause_chain_becomes_record_chain() -> None:
    """__cause__ links should become source_error links."""
    try:
        try:
            raise ConnectionError("db down")
        except ConnectionError as exc:
            raise ValueError("bad lookup") from exc
    except ValueError as exc:
        record = exception_to_error(exc)

    assert record.kind is Kind.INVALID_ARGUMENT
    assert record.depth == 1
    assert record.source_error is not None
    assert record.source_error.kind is Kind.UNAVAILABLE
    assert record.source_error.message.text == "db down"


def test_carried_records_are_returned_unchanged() -> None:
    """A WidErrorException contributes its own record and cause chain."""
    record = not_found(1, "gone").with_source(unavailable(2, "down"))

    assert exception_to_error(record.to_exception()) == record


def test_foreign_exception_wrapping_a_record_keeps_the_record_as_cause() -> None:
    """A plain exception raised from a carried record wraps that record."""
    inner = unavailable(2, "down")
    try:
        raise RuntimeError("handler failed") from inner.to_exception()
    except RuntimeError as exc:
        record = exception_to_error(exc, code=3)

    assert record.kind is Kind.INTERNAL
    assert record.source_error == inner


def test_cyclic_exception_causes_terminate() -> None:
    """A cycle in __cause__ links is cut instead of looping forever."""
    first = ValueError("first")
    second = KeyError("second")
    first.__cause__ = second
    second.__cause__ = first

    record = exception_to_error(first)

    assert isinstance(record, WidError)
    assert record.depth == 1
