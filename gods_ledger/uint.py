"""
Checked uint256 arithmetic.

Values never wrap: a result outside [0, 2**256 - 1] raises Overflow or
Underflow instead.
"""

from __future__ import annotations

from typing import Any

from .errors import InvalidAmount, Overflow, Underflow

UINT256_MAX = 2**256 - 1


def require_uint(value: Any, what: str = "amount") -> int:
    # bool is an int subclass; True is not a token amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{what} must be an integer, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise InvalidAmount(f"{what} out of uint256 range: {value}")
    return value


def u256_add(a: int, b: int) -> int:
    out = a + b
    if out > UINT256_MAX:
        raise Overflow(f"{a} + {b} exceeds uint256")
    return out


def u256_sub(a: int, b: int) -> int:
    if b > a:
        raise Underflow(f"{a} - {b} is negative")
    return a - b


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator), computed without an intermediate bound."""
    return (a * b) // denominator
