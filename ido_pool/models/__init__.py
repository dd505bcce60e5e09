"""Pydantic models for pool records, instruction accounts and the API."""

from ido_pool.models.instructions import (
    ExchangeDepositAccounts,
    ExchangeRedeemableAccounts,
    InitializePoolAccounts,
    WithdrawAccounts,
)
from ido_pool.models.pool import PoolAccount
from ido_pool.models.types import I64, U8, U64, Pubkey

__all__ = [
    "PoolAccount",
    "InitializePoolAccounts",
    "ExchangeDepositAccounts",
    "ExchangeRedeemableAccounts",
    "WithdrawAccounts",
    "Pubkey",
    "U64",
    "I64",
    "U8",
]
