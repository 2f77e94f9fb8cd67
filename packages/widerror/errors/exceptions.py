"""Exception types for the WidError package.

``WidErrorException`` bridges records into Python's native exception chain.
The decode errors describe failures of the codec itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .record import WidError


class WidErrorException(Exception):
    """Raisable carrier for one ``WidError``.

    ``__cause__`` holds the exception built from the record's cause, so
    ``traceback`` and logging middleware walk the chain without knowing the
    record type.
    """

    def __init__(self, record: "WidError") -> None:
        super().__init__(_summary(record))
        self.record = record

    @property
    def code(self) -> int:
        return self.record.code


@dataclass(eq=False)
class WidErrorDecodeError(ValueError):
    """Base error for structured input that does not decode to a record."""

    message: str

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class MalformedRecordError(WidErrorDecodeError):
    """Input is not a well-formed record."""


@dataclass(eq=False)
class UnknownEnumDiscriminantError(WidErrorDecodeError):
    """An enum field holds an integer outside its closed set."""

    field: str = ""
    value: object = None


def _summary(record: "WidError") -> str:
    label = record.name or "WidError"
    return f"[{record.code}] {label}: {record.message.text}"
