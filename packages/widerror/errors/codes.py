"""Numeric error-code convention.

A conventional code has nine digits: a five-digit namespace identifying the
owning component followed by a four-digit sub-code local to that namespace,
``code = namespace * 10000 + sub_code``. The namespace is always recoverable
from the code by integer division. Uniqueness of codes within a namespace is
the owner's responsibility and is not checked here.
"""

from __future__ import annotations

NAMESPACE_FACTOR = 10000

NAMESPACE_MIN = 10000
NAMESPACE_MAX = 99999
SUB_CODE_MIN = 0
SUB_CODE_MAX = 9999
CODE_MIN = NAMESPACE_MIN * NAMESPACE_FACTOR
CODE_MAX = NAMESPACE_MAX * NAMESPACE_FACTOR + SUB_CODE_MAX

# Storage widths of the wire fields.
U8_MAX = 2**8 - 1
U32_MAX = 2**32 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


def compose_code(namespace: int, sub_code: int) -> int:
    """Combine a namespace and sub-code into one nine-digit code.

    Raises ``ValueError`` when either part is outside its conventional range.
    """
    if not NAMESPACE_MIN <= namespace <= NAMESPACE_MAX:
        raise ValueError(
            f"namespace must be in [{NAMESPACE_MIN}, {NAMESPACE_MAX}], got {namespace}"
        )
    if not SUB_CODE_MIN <= sub_code <= SUB_CODE_MAX:
        raise ValueError(
            f"sub_code must be in [{SUB_CODE_MIN}, {SUB_CODE_MAX}], got {sub_code}"
        )
    return namespace * NAMESPACE_FACTOR + sub_code


def namespace_of(code: int) -> int:
    return code // NAMESPACE_FACTOR


def sub_code_of(code: int) -> int:
    return code % NAMESPACE_FACTOR


def split_code(code: int) -> tuple[int, int]:
    """Return ``(namespace, sub_code)`` for a code."""
    return namespace_of(code), sub_code_of(code)


def is_conventional_code(code: int) -> bool:
    """Return ``True`` when ``code`` falls in the nine-digit range."""
    return CODE_MIN <= code <= CODE_MAX
