"""Account sets passed to each pool instruction.

Callers name every account an instruction touches; the program checks them
against the pool record and the ledger before doing anything.
"""

from pydantic import BaseModel, ConfigDict

from ido_pool.models.types import Pubkey


class _Accounts(BaseModel):
    model_config = ConfigDict(frozen=True)


class InitializePoolAccounts(_Accounts):
    redeemable_mint: Pubkey
    deposit_token_mint: Pubkey
    native_mint: Pubkey
    # Pool-owned vaults, opened by the caller for the pool signer beforehand
    pool_native: Pubkey
    pool_deposit_token: Pubkey
    # Creator's native token account, debited by total_native_tokens
    creator_native: Pubkey


class ExchangeDepositAccounts(_Accounts):
    redeemable_mint: Pubkey
    pool_deposit_token: Pubkey
    depositor_deposit_token: Pubkey
    depositor_redeemable: Pubkey


class ExchangeRedeemableAccounts(_Accounts):
    redeemable_mint: Pubkey
    pool_native: Pubkey
    depositor_native: Pubkey
    depositor_redeemable: Pubkey


class WithdrawAccounts(_Accounts):
    pool_deposit_token: Pubkey
    creator_deposit_token: Pubkey
