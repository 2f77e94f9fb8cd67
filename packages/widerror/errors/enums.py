"""Classification enums shared by every WidError producer and consumer.

Values are a wire contract. Each member is bound to an explicit integer, so
reordering members in source never changes what goes over the wire. ``Kind``
follows the gRPC canonical status codes
(https://github.com/googleapis/googleapis/blob/master/google/rpc/code.proto).
"""

from __future__ import annotations

from enum import IntEnum


class Kind(IntEnum):
    """Canonical failure category.

    When several kinds apply, prefer the most specific one: ``OUT_OF_RANGE``
    over ``FAILED_PRECONDITION``, ``NOT_FOUND`` or ``ALREADY_EXISTS`` over
    ``FAILED_PRECONDITION``.
    """

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    @classmethod
    def default(cls) -> "Kind":
        return cls.OK

    @property
    def http_status(self) -> int:
        """Return the HTTP status conventionally paired with this kind."""
        return _KIND_HTTP_STATUS[self]


class Scope(IntEnum):
    """Where along the request path the error originated."""

    INTERNAL = 0
    CLIENTSIDE = 1
    SERVERSIDE = 2

    @classmethod
    def default(cls) -> "Scope":
        return cls.INTERNAL


class RetryMode(IntEnum):
    """Whether retrying the triggering operation is safe."""

    UNKNOWN = 0
    ALLOWED = 1
    DENIED = 2

    @classmethod
    def default(cls) -> "RetryMode":
        return cls.UNKNOWN


class PassThroughMode(IntEnum):
    """Whether error details may be forwarded verbatim to an upstream caller.

    ``AUTO`` leaves the decision to the forwarding layer, ``SHOULD`` forwards
    verbatim and ``NEVER`` replaces the error with a generic one.
    """

    AUTO = 0
    SHOULD = 1
    NEVER = 2

    @classmethod
    def default(cls) -> "PassThroughMode":
        return cls.AUTO


_KIND_HTTP_STATUS: dict[Kind, int] = {
    Kind.OK: 200,
    Kind.CANCELLED: 499,
    Kind.UNKNOWN: 500,
    Kind.INVALID_ARGUMENT: 400,
    Kind.DEADLINE_EXCEEDED: 504,
    Kind.NOT_FOUND: 404,
    Kind.ALREADY_EXISTS: 409,
    Kind.PERMISSION_DENIED: 403,
    Kind.UNAUTHENTICATED: 401,
    Kind.RESOURCE_EXHAUSTED: 429,
    Kind.FAILED_PRECONDITION: 400,
    Kind.ABORTED: 409,
    Kind.OUT_OF_RANGE: 400,
    Kind.UNIMPLEMENTED: 501,
    Kind.INTERNAL: 500,
    Kind.UNAVAILABLE: 503,
    Kind.DATA_LOSS: 500,
}

# Closest safe variant used when a decoder is told to degrade unknown values.
SAFE_FALLBACKS: dict[type[IntEnum], IntEnum] = {
    Kind: Kind.UNKNOWN,
    Scope: Scope.INTERNAL,
    RetryMode: RetryMode.DENIED,
    PassThroughMode: PassThroughMode.NEVER,
}
