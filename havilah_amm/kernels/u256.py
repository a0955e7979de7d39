"""
Checked unsigned 256-bit arithmetic.

Python ints never wrap, so the 256-bit boundary is enforced explicitly: every
result outside ``[0, U256_MAX]`` raises ``AmmError`` (``Overflow`` or
``Underflow``) instead of being reduced modulo 2**256.
"""

from __future__ import annotations

import math

from ..errors import AmmError, ErrorKind


U256_MAX = (1 << 256) - 1


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u256(name: str, value: int) -> int:
    """Validate that ``value`` is an int in the u256 range and return it."""
    _require_int(name, value)
    if value < 0:
        raise AmmError(ErrorKind.UNDERFLOW, f"{name} is negative: {value}")
    if value > U256_MAX:
        raise AmmError(ErrorKind.OVERFLOW, f"{name} exceeds u256")
    return value


def checked_add(a: int, b: int) -> int:
    out = a + b
    if out > U256_MAX:
        raise AmmError(ErrorKind.OVERFLOW, "u256 addition overflow")
    return out


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise AmmError(ErrorKind.UNDERFLOW, f"u256 subtraction underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    out = a * b
    if out > U256_MAX:
        raise AmmError(ErrorKind.OVERFLOW, "u256 multiplication overflow")
    return out


def floor_div(numerator: int, denominator: int) -> int:
    """Truncating division of non-negative operands."""
    if denominator == 0:
        raise AmmError(ErrorKind.DIVISION_BY_ZERO)
    return numerator // denominator


def isqrt(value: int) -> int:
    """floor(sqrt(value)); exact for arbitrarily large ints, unlike float sqrt."""
    return math.isqrt(value)
