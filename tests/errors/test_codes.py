"""Tests for the nine-digit numeric code convention."""

from __future__ import annotations

import pytest

from packages.widerror.errors import codes


def test_compose_and_split_are_inverse() -> None:
    """Namespace and sub-code should be recoverable from a composed code."""
    code = codes.compose_code(12345, 6789)

    assert code == 123456789
    assert codes.split_code(code) == (12345, 6789)
    assert codes.namespace_of(code) == 12345
    assert codes.sub_code_of(code) == 6789


def test_compose_range_bounds() -> None:
    """The smallest and largest conventional codes compose cleanly."""
    assert codes.compose_code(codes.NAMESPACE_MIN, codes.SUB_CODE_MIN) == codes.CODE_MIN == 100000000
    assert codes.compose_code(codes.NAMESPACE_MAX, codes.SUB_CODE_MAX) == codes.CODE_MAX == 999999999


@pytest.mark.parametrize(("namespace", "sub_code"), [(9999, 0), (100000, 0), (10000, 10000)])
def test_compose_rejects_out_of_range_parts(namespace: int, sub_code: int) -> None:
    """Parts outside their ranges should raise ValueError."""
    with pytest.raises(ValueError):
        codes.compose_code(namespace, sub_code)


def test_is_conventional_code() -> None:
    """Only nine-digit codes are conventional."""
    assert codes.is_conventional_code(123456789)
    assert not codes.is_conventional_code(99999999)
    assert not codes.is_conventional_code(1000000000)
