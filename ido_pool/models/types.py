"""Shared type definitions for pool, ledger and API models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from ido_pool.safe_int import U64_MAX

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


def _coerce_int(value: Any, kind: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{kind} must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as err:
            raise ValueError(f"{kind} must be a decimal integer string: '{value}'") from err
    raise ValueError(f"{kind} must be string or int, got {type(value).__name__}")


def validate_u64(value: Any) -> int:
    """Validate that a value is a u64 (int or decimal string).

    Returns:
        The value as int

    Raises:
        ValueError: If value is not an integer within [0, 2**64 - 1]
    """
    int_value = _coerce_int(value, "U64")
    if int_value < 0:
        raise ValueError(f"U64 cannot be negative: {value}")
    if int_value > U64_MAX:
        raise ValueError(f"U64 overflow: {value} > 2^64-1")
    return int_value


def validate_i64(value: Any) -> int:
    """Validate that a value is an i64 unix timestamp."""
    int_value = _coerce_int(value, "I64")
    if not I64_MIN <= int_value <= I64_MAX:
        raise ValueError(f"I64 out of range: {value}")
    return int_value


# Account / mint identifier. Derived program addresses are 64 hex chars.
Pubkey = Annotated[str, Field(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.:-]+$")]

# 64-bit unsigned token amount
U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer (int or decimal string)"),
]

# 64-bit signed unix timestamp
I64 = Annotated[int, BeforeValidator(validate_i64)]

# Signer derivation bump
U8 = Annotated[int, Field(ge=0, le=255)]
