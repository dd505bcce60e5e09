"""Request and response bodies for the HTTP API."""

from pydantic import BaseModel, Field

from ido_pool.models.instructions import (
    ExchangeDepositAccounts,
    ExchangeRedeemableAccounts,
    InitializePoolAccounts,
    WithdrawAccounts,
)
from ido_pool.models.pool import PoolAccount
from ido_pool.models.types import I64, U8, U64, Pubkey

# =============================================================================
# Ledger
# =============================================================================


class CreateMintRequest(BaseModel):
    address: Pubkey
    decimals: int | None = Field(default=None, ge=0, le=255)
    mint_authority: Pubkey | None = None


class MintResponse(BaseModel):
    address: str
    decimals: int
    mint_authority: str | None
    supply: int


class CreateAccountRequest(BaseModel):
    address: Pubkey
    mint: Pubkey
    owner: Pubkey


class TokenAccountResponse(BaseModel):
    address: str
    mint: str
    owner: str
    amount: int


class MintToRequest(BaseModel):
    destination: Pubkey
    amount: U64
    authority: Pubkey


class SignerResponse(BaseModel):
    address: str
    bump: int


# =============================================================================
# Pool instructions
# =============================================================================


class InitializePoolRequest(BaseModel):
    """Create a pool. `authority` is the already-authenticated creator."""

    authority: Pubkey
    accounts: InitializePoolAccounts
    total_native_tokens: U64
    start_ido_ts: I64
    end_ido_ts: I64
    withdraw_deposit_token_ts: I64
    bump: U8


class ExchangeDepositRequest(BaseModel):
    authority: Pubkey
    accounts: ExchangeDepositAccounts
    amount: U64


class ExchangeRedeemableRequest(BaseModel):
    authority: Pubkey
    accounts: ExchangeRedeemableAccounts


class WithdrawRequest(BaseModel):
    payer: Pubkey
    accounts: WithdrawAccounts


class DepositResponse(BaseModel):
    deposited: int
    redeemable_minted: int


class RedeemResponse(BaseModel):
    redeemable_burned: int
    native_paid: int


class WithdrawResponse(BaseModel):
    withdrawn: int


class PoolStateResponse(BaseModel):
    """Pool record plus live values derived from the clock and ledger."""

    address: str
    pool: PoolAccount
    signer: str
    phase: str | None
    now: int
    pool_native_balance: int
    pool_deposit_token_balance: int
    redeemable_supply: int


class ErrorResponse(BaseModel):
    error: str
    message: str
    code: int | None = None
