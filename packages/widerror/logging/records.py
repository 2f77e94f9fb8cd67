"""Structured log fields for WidError records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from . import fields

if TYPE_CHECKING:
    from packages.widerror.errors import WidError


def error_fields(record: "WidError") -> dict[str, Any]:
    """Flatten a record into stable structured log fields.

    Enum values are logged as their integer discriminants, matching the wire.
    """
    output: dict[str, Any] = {
        fields.ERROR_CODE: record.code,
        fields.ERROR_NAME: record.name,
        fields.ERROR_NAMESPACE: record.code_namespace,
        fields.ERROR_KIND: int(record.kind),
        fields.ERROR_SCOPE: int(record.scope),
        fields.ERROR_LEVEL: record.level,
        fields.ERROR_RETRY_MODE: int(record.retry_mode),
        fields.ERROR_PASS_THROUGH_MODE: int(record.pass_through_mode),
        fields.ERROR_CHAIN_DEPTH: record.depth,
    }
    if record.mapping_code is not None:
        output[fields.ERROR_MAPPING_CODE] = record.mapping_code
    if record.source_error is not None:
        output[fields.ERROR_ROOT_CODE] = record.root_cause().code
    return output


def log_error(
    logger: logging.Logger,
    record: "WidError",
    *,
    level: int = logging.ERROR,
    event: str = fields.ERROR_EVENT,
) -> None:
    """Emit one log line describing ``record``.

    The line message is the rendered record; the flattened fields travel in
    ``extra`` so ``ContextFilter`` merges them into structured output.
    """
    logger.log(
        level,
        "%s",
        record,
        extra={"error_fields": {fields.EVENT: event, **error_fields(record)}},
    )
