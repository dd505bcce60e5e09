"""Persistent pool record."""

from pydantic import BaseModel, ConfigDict, Field

from ido_pool.models.types import I64, U8, U64, Pubkey


class PoolAccount(BaseModel):
    """State of one IDO pool.

    Immutable after creation. Balances of the two vaults and the claim-token
    supply live on the ledger, not here.
    """

    model_config = ConfigDict(frozen=True)

    # Authority of the pool (the organizer that created it)
    pool_authority: Pubkey
    # Mint of redeemable claim tokens, minted 1:1 against deposits
    redeemable_mint: Pubkey
    # Mint of the tokens being distributed
    native_mint: Pubkey
    deposit_token_mint: Pubkey
    # Pool-owned vaults
    pool_native: Pubkey
    pool_deposit_token: Pubkey

    total_native_tokens: U64 = Field(gt=0)

    start_ido_ts: I64
    end_ido_ts: I64
    withdraw_deposit_token_ts: I64

    bump: U8
