"""Public WidError API shared by every service.

The record model, its classification enums, the numeric code convention,
the structured codec and the bridge into Python's exception chain.
"""

from . import codes
from .codec import from_dict, from_json, to_dict, to_json
from .enums import Kind, PassThroughMode, RetryMode, Scope
from .exceptions import (
    MalformedRecordError,
    UnknownEnumDiscriminantError,
    WidErrorDecodeError,
    WidErrorException,
)
from .factories import (
    already_exists,
    deadline_exceeded,
    failed_precondition,
    internal,
    invalid_argument,
    not_found,
    permission_denied,
    resource_exhausted,
    unauthenticated,
    unavailable,
)
from .message import Message, MessageVariant
from .normalize import exception_to_error
from .record import WidError

__all__ = [
    "Kind",
    "MalformedRecordError",
    "Message",
    "MessageVariant",
    "PassThroughMode",
    "RetryMode",
    "Scope",
    "UnknownEnumDiscriminantError",
    "WidError",
    "WidErrorDecodeError",
    "WidErrorException",
    "already_exists",
    "codes",
    "deadline_exceeded",
    "exception_to_error",
    "failed_precondition",
    "from_dict",
    "from_json",
    "internal",
    "invalid_argument",
    "not_found",
    "permission_denied",
    "resource_exhausted",
    "to_dict",
    "to_json",
    "unauthenticated",
    "unavailable",
]
