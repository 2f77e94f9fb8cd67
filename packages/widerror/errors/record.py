"""The WidError record: one failure occurrence, self-contained and serializable.

Records are frozen. Every builder call returns a new record, and a cause can
only be attached by building a new outer record around it, so a cause chain is
always a finite tree-shaped list with no path back to an ancestor.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Any, Iterator, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)

from . import codes
from .enums import Kind, PassThroughMode, RetryMode, Scope
from .exceptions import WidErrorException
from .message import Message, as_message

_DISCRIMINANT_FIELDS: dict[str, type[IntEnum]] = {
    "kind": Kind,
    "scope": Scope,
    "retry_mode": RetryMode,
    "pass_through_mode": PassThroughMode,
}


class WidError(BaseModel):
    """Structured description of one failure.

    ``code`` is the stored identifier. ``namespace`` is ``0`` until declared;
    once declared it must equal ``code // 10000``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: Message = Field(default_factory=Message)
    code: StrictInt = Field(default=0, ge=0, le=codes.U32_MAX)
    name: str = ""
    namespace: StrictInt = Field(default=0, ge=0, le=codes.U32_MAX)
    kind: Kind = Kind.OK
    scope: Scope = Scope.INTERNAL
    level: StrictInt = Field(default=0, ge=0, le=codes.U8_MAX)
    retry_mode: RetryMode = RetryMode.UNKNOWN
    pass_through_mode: PassThroughMode = PassThroughMode.AUTO
    mapping_code: Annotated[StrictInt, Field(ge=codes.I64_MIN, le=codes.I64_MAX)] | None = None
    source_error: WidError | None = None

    @classmethod
    def new(cls, code: int, message: Message | str | None = None) -> "WidError":
        """Build a record with ``code`` and ``message`` and defaults elsewhere."""
        if message is None:
            return cls(code=code)
        return cls(code=code, message=as_message(message))

    @classmethod
    def from_parts(
        cls,
        namespace: int,
        sub_code: int,
        message: Message | str | None = None,
        *,
        name: str = "",
    ) -> "WidError":
        """Build a record from a namespace and sub-code.

        Both parts are range-checked; ``ValueError`` is raised outside the
        conventional ranges.
        """
        code = codes.compose_code(namespace, sub_code)
        return cls(
            code=code,
            namespace=namespace,
            name=name,
            message=as_message(message) if message is not None else Message(),
        )

    @field_validator("message", mode="before")
    @classmethod
    def _parse_tagged_message(cls, value: object) -> object:
        if isinstance(value, Mapping):
            return Message.from_wire(value)
        return value

    @field_validator("kind", "scope", "retry_mode", "pass_through_mode", mode="before")
    @classmethod
    def _require_integer_discriminant(cls, value: object, info: ValidationInfo) -> object:
        enum_type = _DISCRIMINANT_FIELDS[info.field_name]
        if isinstance(value, IntEnum) and type(value) is not enum_type:
            raise ValueError(f"expected {enum_type.__name__}, got {type(value).__name__}")
        if not isinstance(value, IntEnum) and type(value) is not int:
            raise ValueError(f"discriminant must be an integer, got {type(value).__name__}")
        return value

    @field_serializer("message")
    def _serialize_message(self, message: Message) -> dict[str, str]:
        return message.to_wire()

    @model_validator(mode="after")
    def _check_namespace(self) -> "WidError":
        if self.namespace and self.namespace != codes.namespace_of(self.code):
            raise ValueError(
                f"namespace {self.namespace} does not own code {self.code}"
            )
        return self

    # Builders

    def with_source(self, cause: "WidError") -> "WidError":
        """Return a copy of this record caused by ``cause``."""
        return self._replace(source_error=cause)

    def with_name(self, name: str) -> "WidError":
        """Return a copy with a new symbolic name."""
        return self._replace(name=name)

    def with_message(self, message: Message | str) -> "WidError":
        """Return a copy with a new message; plain text becomes ``Default``."""
        return self._replace(message=as_message(message))

    def with_kind(self, kind: Kind) -> "WidError":
        """Return a copy classified as ``kind``."""
        return self._replace(kind=kind)

    def with_scope(self, scope: Scope) -> "WidError":
        """Return a copy originating from ``scope``."""
        return self._replace(scope=scope)

    def with_level(self, level: int) -> "WidError":
        """Return a copy with severity ``level`` (0-255)."""
        return self._replace(level=level)

    def with_retry_mode(self, retry_mode: RetryMode) -> "WidError":
        """Return a copy with a new retry advice."""
        return self._replace(retry_mode=retry_mode)

    def with_pass_through_mode(self, pass_through_mode: PassThroughMode) -> "WidError":
        """Return a copy with a new forwarding policy."""
        return self._replace(pass_through_mode=pass_through_mode)

    def with_mapping_code(self, mapping_code: int | None) -> "WidError":
        """Return a copy mapped to an external code, or unmapped with ``None``."""
        return self._replace(mapping_code=mapping_code)

    def _replace(self, **changes: Any) -> "WidError":
        """Re-validate a copy with ``changes`` applied."""
        values = dict(self)
        values.update(changes)
        return type(self)(**values)

    # Accessors

    @property
    def source(self) -> "WidError | None":
        """Return the direct cause, if any."""
        return self.source_error

    @property
    def sub_code(self) -> int:
        """Four-digit suffix of ``code``."""
        return codes.sub_code_of(self.code)

    @property
    def code_namespace(self) -> int:
        """Namespace recovered from ``code``, declared or not."""
        return codes.namespace_of(self.code)

    @property
    def depth(self) -> int:
        """Number of causes below this record."""
        return sum(1 for _ in self.chain()) - 1

    def chain(self) -> Iterator["WidError"]:
        """Yield this record, then each cause from outermost to root."""
        cursor: WidError | None = self
        while cursor is not None:
            yield cursor
            cursor = cursor.source_error

    def root_cause(self) -> "WidError":
        """Return the innermost record of the chain."""
        record = self
        for record in self.chain():
            pass
        return record

    def to_exception(self) -> WidErrorException:
        """Build a raisable exception whose ``__cause__`` mirrors the chain."""
        exc = WidErrorException(self)
        if self.source_error is not None:
            exc.__cause__ = self.source_error.to_exception()
        return exc

    # Rendering and encoding

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible wire form."""
        return self.model_dump(mode="json")

    def to_json(self, *, indent: int | None = None) -> str:
        """Return the wire form as JSON text."""
        return self.model_dump_json(indent=indent)

    def __str__(self) -> str:
        source = str(self.source_error) if self.source_error is not None else ""
        return (
            f"code={self.code}, name={self.name}, namespace={self.namespace}, "
            f"scope={int(self.scope)}, kind={int(self.kind)}, level={self.level}, "
            f"message={self.message}, retry_mode={int(self.retry_mode)}, "
            f"pass_through_mode={int(self.pass_through_mode)}, "
            f"mapping_code={self.mapping_code}, source_error=({source})"
        )


WidError.model_rebuild()
