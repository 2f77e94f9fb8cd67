"""Tests for structured logging of WidError records."""

from __future__ import annotations

import json
import logging
import sys
from typing import Iterator

import pytest

from packages.widerror.config import LoggingSettings
from packages.widerror.errors import Kind, RetryMode, WidError, internal, not_found, unavailable
from packages.widerror.logging import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    bind_context,
    configure_from_settings,
    error_context,
    error_fields,
    get_context,
    log_error,
    reset_context,
)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging and reset context."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if any(isinstance(item, ContextFilter) for item in handler.filters):
            root.removeHandler(handler)
    root.setLevel(level)
    reset_context()


def _record() -> WidError:
    """Return a two-level record chain."""
    return not_found(100010002, "missing user", name="USER_NOT_FOUND").with_source(
        unavailable(100020001, "db down").with_mapping_code(503)
    )


def _log_record(message: str = "hello", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("widerror.test", logging.ERROR, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_error_fields_flattens_classification_as_integers() -> None:
    """Record classification should be logged as wire integers."""
    output = error_fields(_record())

    assert output == {
        "error_code": 100010002,
        "error_name": "USER_NOT_FOUND",
        "error_namespace": 10001,
        "error_kind": int(Kind.NOT_FOUND),
        "error_scope": 1,
        "error_level": 0,
        "error_retry_mode": int(RetryMode.DENIED),
        "error_pass_through_mode": 0,
        "error_chain_depth": 1,
        "error_root_code": 100020001,
    }


def test_error_fields_includes_mapping_code_when_present() -> None:
    """mapping_code appears only when set."""
    assert error_fields(WidError.new(1).with_mapping_code(-7))["error_mapping_code"] == -7
    assert "error_mapping_code" not in error_fields(WidError.new(1))


def test_log_error_emits_rendered_record_with_fields(caplog: pytest.LogCaptureFixture) -> None:
    """log_error should log the rendering and attach structured fields."""
    logger = logging.getLogger("widerror.test.emit")
    record = _record()

    with caplog.at_level(logging.ERROR, logger="widerror.test.emit"):
        log_error(logger, record)

    assert len(caplog.records) == 1
    emitted = caplog.records[0]
    assert emitted.getMessage() == str(record)
    assert emitted.error_fields["error_code"] == 100010002
    assert emitted.error_fields["event"] == "widerror"


def test_json_formatter_nests_error_fields_under_error() -> None:
    """JSON lines keep service context at the top and error fields nested."""
    bind_context(service="billing", request_id=None)
    log_record = _log_record(error_fields={"event": "widerror", **error_fields(_record())})

    ContextFilter().filter(log_record)
    payload = json.loads(JsonFormatter().format(log_record))

    assert payload["service"] == "billing"
    assert payload["event"] == "widerror"
    assert payload["message"] == "hello"
    assert payload["level"] == "ERROR"
    assert payload["error"]["code"] == 100010002
    assert payload["error"]["root_code"] == 100020001
    assert "error_code" not in payload
    assert "request_id" not in payload


def test_json_formatter_renders_record_carried_by_exception() -> None:
    """An exception carrying a record contributes its fields when none are bound."""
    try:
        raise internal(100030004, "boom").to_exception()
    except Exception:
        log_record = _log_record()
        log_record.exc_info = sys.exc_info()

    ContextFilter().filter(log_record)
    payload = json.loads(JsonFormatter().format(log_record))

    assert payload["error"]["code"] == 100030004
    assert payload["error"]["kind"] == int(Kind.INTERNAL)
    assert "exception" in payload


def test_json_formatter_omits_error_for_plain_lines() -> None:
    """Lines with no bound record carry no error object."""
    log_record = _log_record()

    ContextFilter().filter(log_record)
    payload = json.loads(JsonFormatter().format(log_record))

    assert "error" not in payload


def test_plain_formatter_appends_context_then_error_group() -> None:
    """Plain lines append sorted context followed by an error[...] group."""
    bind_context(service="billing")
    with error_context(WidError.new(9, "nine")):
        log_record = _log_record()
        ContextFilter().filter(log_record)
        line = PlainFormatter().format(log_record)

    assert "hello service=billing error[code=9 name= namespace=0 " in line
    assert line.endswith("chain_depth=0]")


def test_error_context_tags_lines_and_restores_on_exit(caplog: pytest.LogCaptureFixture) -> None:
    """Lines inside error_context carry the record's fields, including the root code."""
    logger = logging.getLogger("widerror.test.context")
    bind_context(service="billing")

    with caplog.at_level(logging.INFO, logger="widerror.test.context"):
        with error_context(_record()) as bound:
            logger.info("retrying")
            assert get_context()["error_root_code"] == 100020001
        logger.info("done")

    assert bound["error_code"] == 100010002
    assert get_context() == {"service": "billing"}
    assert len(caplog.records) == 2


def test_nested_error_context_replaces_outer_fields() -> None:
    """An inner record's fields replace the outer record's, stale keys included."""
    with error_context(_record()):
        with error_context(WidError.new(7)):
            inner = get_context()
        outer = get_context()

    assert inner["error_code"] == 7
    assert "error_root_code" not in inner
    assert outer["error_root_code"] == 100020001


def test_reset_context_drops_everything() -> None:
    """reset_context should clear all bound fields."""
    bind_context(a=1, b=2)
    reset_context()

    assert get_context() == {}


def test_configure_from_settings_installs_stdout_handler(capsys: pytest.CaptureFixture[str]) -> None:
    """Settings-driven setup should emit JSON lines with seeded context."""
    configure_from_settings(LoggingSettings(level="INFO", service="billing", environment="test"))

    log_error(logging.getLogger("widerror.test.stdout"), WidError.new(9, "nine"))

    line = capsys.readouterr().out.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["service"] == "billing"
    assert payload["environment"] == "test"
    assert payload["error"]["code"] == 9
    assert payload["event"] == "widerror"


def test_configure_logging_replaces_only_its_own_handler() -> None:
    """Repeated setup keeps one installed handler and leaves host handlers alone."""
    root = logging.getLogger()
    host = logging.NullHandler()
    root.addHandler(host)
    try:
        first = configure_from_settings(LoggingSettings(level="INFO"))
        second = configure_from_settings(LoggingSettings(level="INFO"))

        assert host in root.handlers
        assert second in root.handlers
        assert first not in root.handlers
    finally:
        root.removeHandler(host)
