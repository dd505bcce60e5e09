"""Checked integer wrapper for token amount arithmetic.

Token balances and supplies are u64 on the ledger, while products of two
balances need a wider intermediate (u128 in the on-chain program). Python
integers are unbounded, so the wide intermediate is free; what matters is
that every narrowing back to u64 is checked and that division fails loudly
instead of silently producing garbage.

Usage pattern:
    from ido_pool.safe_int import S

    def share(balance: int, vault: int, supply: int) -> int:
        product = S(balance) * vault   # wide intermediate
        return (product // supply).to_u64()  # raises on zero / overflow
"""

from __future__ import annotations

U64_MAX = 2**64 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class U64Overflow(SafeIntError):
    """Value does not fit in a u64."""

    pass


class SafeInt:
    """Integer with checked arithmetic.

    - Division by zero raises DivisionByZero
    - Values outside [0, 2**64 - 1] raise U64Overflow on to_u64()

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def checked_add_u64(self, other: SafeInt | int) -> SafeInt:
        """Add, requiring the result to stay within u64.

        Raises:
            U64Overflow: If the sum exceeds 2**64 - 1
        """
        result = SafeInt(self._value + _extract_value(other))
        result.to_u64()
        return result

    def to_u64(self) -> int:
        """Convert to int, validating u64 bounds.

        Raises:
            U64Overflow: If value is negative or exceeds 2**64 - 1
        """
        if self._value < 0:
            raise U64Overflow(f"Negative value cannot be u64: {self._value}")
        if self._value > U64_MAX:
            raise U64Overflow(f"Value exceeds u64 max: {self._value}")
        return self._value


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
