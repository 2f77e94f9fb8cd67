"""Structured encoding and decoding of WidError records.

Wire shape: every field is present, enums are integers, ``message`` is a
single-key tagged object and an absent cause is an explicit ``null``.
Decoding rejects enum integers outside their closed sets unless the caller
opts into ``"degrade"``, which substitutes the closest safe variant.
"""

from __future__ import annotations

import json
from enum import IntEnum
from typing import Any, Mapping

from pydantic import ValidationError

from packages.widerror.config import CodecSettings, UnknownDiscriminantPolicy
from packages.widerror.logging import fields, get_logger

from .enums import SAFE_FALLBACKS, Kind, PassThroughMode, RetryMode, Scope
from .exceptions import (
    MalformedRecordError,
    UnknownEnumDiscriminantError,
    WidErrorDecodeError,
)
from .record import WidError

_LOGGER = get_logger(__name__)

ENUM_FIELDS: dict[str, type[IntEnum]] = {
    "kind": Kind,
    "scope": Scope,
    "retry_mode": RetryMode,
    "pass_through_mode": PassThroughMode,
}
SOURCE_FIELD = "source_error"


def to_dict(record: WidError) -> dict[str, Any]:
    """Encode ``record`` into its JSON-compatible wire form."""
    return record.to_dict()


def to_json(
    record: WidError,
    *,
    indent: int | None = None,
    settings: CodecSettings | None = None,
) -> str:
    """Encode ``record`` as JSON text."""
    if indent is None and settings is not None:
        indent = settings.indent
    return record.to_json(indent=indent)


def from_dict(
    data: object,
    *,
    unknown_discriminants: UnknownDiscriminantPolicy | None = None,
    max_chain_depth: int | None = None,
    settings: CodecSettings | None = None,
) -> WidError:
    """Decode a wire mapping into a record.

    Raises ``UnknownEnumDiscriminantError`` for an out-of-set enum integer
    under the ``"reject"`` policy and ``MalformedRecordError`` for anything
    else that does not describe a valid record.
    """
    resolved = settings or CodecSettings()
    policy = unknown_discriminants or resolved.unknown_discriminants
    depth_limit = max_chain_depth if max_chain_depth is not None else resolved.max_chain_depth

    try:
        if not isinstance(data, Mapping):
            raise MalformedRecordError(
                f"record must be a mapping, got {type(data).__name__}"
            )
        if depth_limit is not None:
            _check_depth(data, limit=depth_limit)
        if policy == "degrade":
            data = _degrade_discriminants(data, path=())
        try:
            return WidError.model_validate(data)
        except ValidationError as exc:
            raise _decode_error(exc) from exc
    except WidErrorDecodeError as exc:
        _log_decode_failure(exc)
        raise


def from_json(
    text: str | bytes,
    *,
    unknown_discriminants: UnknownDiscriminantPolicy | None = None,
    max_chain_depth: int | None = None,
    settings: CodecSettings | None = None,
) -> WidError:
    """Decode JSON text into a record. See ``from_dict`` for error semantics."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        error = MalformedRecordError(f"invalid JSON: {exc}")
        _log_decode_failure(error)
        raise error from exc
    return from_dict(
        data,
        unknown_discriminants=unknown_discriminants,
        max_chain_depth=max_chain_depth,
        settings=settings,
    )


def _log_decode_failure(error: WidErrorDecodeError) -> None:
    _LOGGER.debug(
        "record decode failed: %s",
        error,
        extra={"error_fields": {fields.EVENT: fields.DECODE_FAILURE_EVENT}},
    )


def _check_depth(data: Mapping[str, Any], *, limit: int) -> None:
    depth = 0
    cursor = data.get(SOURCE_FIELD)
    while isinstance(cursor, Mapping):
        depth += 1
        if depth > limit:
            raise MalformedRecordError(f"cause chain deeper than {limit}")
        cursor = cursor.get(SOURCE_FIELD)


def _degrade_discriminants(
    data: Mapping[str, Any], *, path: tuple[str, ...]
) -> dict[str, Any]:
    """Return a copy with unknown enum integers replaced along the chain."""
    output = dict(data)
    for name, enum_type in ENUM_FIELDS.items():
        value = output.get(name)
        if not _is_unknown_discriminant(value, enum_type):
            continue
        fallback = SAFE_FALLBACKS[enum_type]
        field_path = ".".join((*path, name))
        _LOGGER.warning(
            "unknown %s discriminant %s at %s degraded to %s",
            enum_type.__name__,
            value,
            field_path,
            int(fallback),
            extra={"error_fields": {fields.EVENT: fields.DISCRIMINANT_DEGRADED_EVENT}},
        )
        output[name] = int(fallback)

    source = output.get(SOURCE_FIELD)
    if isinstance(source, Mapping):
        output[SOURCE_FIELD] = _degrade_discriminants(source, path=(*path, SOURCE_FIELD))
    return output


def _is_unknown_discriminant(value: object, enum_type: type[IntEnum]) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return value not in {member.value for member in enum_type}


def _decode_error(error: ValidationError) -> WidErrorDecodeError:
    """Map a pydantic validation failure onto the codec's error types."""
    details = error.errors()
    for detail in details:
        location = tuple(str(part) for part in detail.get("loc", ()))
        if not location or location[-1] not in ENUM_FIELDS:
            continue
        value = detail.get("input")
        enum_type = ENUM_FIELDS[location[-1]]
        if _is_unknown_discriminant(value, enum_type):
            field_path = ".".join(location)
            return UnknownEnumDiscriminantError(
                message=f"{field_path}: {value} is not a known {enum_type.__name__}",
                field=field_path,
                value=value,
            )

    first = details[0] if details else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    reason = str(first.get("msg", "invalid record"))
    return MalformedRecordError(f"{location}: {reason}" if location else reason)
