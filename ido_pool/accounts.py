"""Account constraint checks for pool instructions.

These run before any phase or amount check and reject mismatched accounts
with ConstraintViolation. They cover what the ledger boundary guarantees:
ownership of vaults by the pool signer, ownership of depositor accounts by
the caller, mint agreement, and the claim mint starting at zero supply.
"""

from __future__ import annotations

from ido_pool.errors import AccountNotFound, ConstraintViolation, MintNotFound
from ido_pool.ledger import Mint, TokenAccount, TokenLedger
from ido_pool.models.instructions import (
    ExchangeDepositAccounts,
    ExchangeRedeemableAccounts,
    InitializePoolAccounts,
    WithdrawAccounts,
)
from ido_pool.models.pool import PoolAccount


def _require(condition: bool, constraint: str) -> None:
    if not condition:
        raise ConstraintViolation(constraint)


def _load_mint(ledger: TokenLedger, address: str, name: str) -> Mint:
    try:
        return ledger.get_mint(address)
    except MintNotFound as err:
        raise ConstraintViolation(f"{name} is not a mint: {address}") from err


def _load_account(ledger: TokenLedger, address: str, name: str) -> TokenAccount:
    try:
        return ledger.get_account(address)
    except AccountNotFound as err:
        raise ConstraintViolation(f"{name} is not a token account: {address}") from err


def check_initialize(
    ledger: TokenLedger,
    accounts: InitializePoolAccounts,
    authority: str,
    pool_signer: str,
) -> None:
    redeemable_mint = _load_mint(ledger, accounts.redeemable_mint, "redeemable_mint")
    deposit_mint = _load_mint(ledger, accounts.deposit_token_mint, "deposit_token_mint")
    _load_mint(ledger, accounts.native_mint, "native_mint")
    pool_native = _load_account(ledger, accounts.pool_native, "pool_native")
    pool_deposit = _load_account(ledger, accounts.pool_deposit_token, "pool_deposit_token")
    creator_native = _load_account(ledger, accounts.creator_native, "creator_native")

    _require(
        redeemable_mint.mint_authority == pool_signer,
        "redeemable_mint.mint_authority == pool_signer",
    )
    _require(redeemable_mint.supply == 0, "redeemable_mint.supply == 0")
    _require(
        deposit_mint.decimals == redeemable_mint.decimals,
        "deposit_token_mint.decimals == redeemable_mint.decimals",
    )
    _require(pool_native.mint == accounts.native_mint, "native_mint == pool_native.mint")
    _require(pool_native.owner == pool_signer, "pool_native.owner == pool_signer")
    _require(
        pool_deposit.mint == accounts.deposit_token_mint,
        "deposit_token_mint == pool_deposit_token.mint",
    )
    _require(pool_deposit.owner == pool_signer, "pool_deposit_token.owner == pool_signer")
    _require(creator_native.owner == authority, "creator_native.owner == authority")
    _require(creator_native.mint == accounts.native_mint, "creator_native.mint == native_mint")


def check_exchange_deposit(
    ledger: TokenLedger,
    pool: PoolAccount,
    accounts: ExchangeDepositAccounts,
    authority: str,
    pool_signer: str,
) -> TokenAccount:
    """Returns the depositor's deposit-token account."""
    _require(accounts.redeemable_mint == pool.redeemable_mint, "has_one redeemable_mint")
    _require(accounts.pool_deposit_token == pool.pool_deposit_token, "has_one pool_deposit_token")
    redeemable_mint = _load_mint(ledger, accounts.redeemable_mint, "redeemable_mint")
    pool_deposit = _load_account(ledger, accounts.pool_deposit_token, "pool_deposit_token")
    depositor_deposit = _load_account(
        ledger, accounts.depositor_deposit_token, "depositor_deposit_token"
    )
    depositor_redeemable = _load_account(
        ledger, accounts.depositor_redeemable, "depositor_redeemable"
    )

    _require(
        redeemable_mint.mint_authority == pool_signer,
        "redeemable_mint.mint_authority == pool_signer",
    )
    _require(pool_deposit.owner == pool_signer, "pool_deposit_token.owner == pool_signer")
    _require(
        depositor_deposit.owner == authority, "depositor_deposit_token.owner == authority"
    )
    _require(
        depositor_deposit.mint == pool.deposit_token_mint,
        "depositor_deposit_token.mint == deposit_token_mint",
    )
    _require(depositor_redeemable.owner == authority, "depositor_redeemable.owner == authority")
    _require(
        depositor_redeemable.mint == pool.redeemable_mint,
        "depositor_redeemable.mint == redeemable_mint",
    )
    return depositor_deposit


def check_exchange_redeemable(
    ledger: TokenLedger,
    pool: PoolAccount,
    accounts: ExchangeRedeemableAccounts,
    authority: str,
    pool_signer: str,
) -> None:
    _require(accounts.redeemable_mint == pool.redeemable_mint, "has_one redeemable_mint")
    _require(accounts.pool_native == pool.pool_native, "has_one pool_native")
    redeemable_mint = _load_mint(ledger, accounts.redeemable_mint, "redeemable_mint")
    pool_native = _load_account(ledger, accounts.pool_native, "pool_native")
    depositor_native = _load_account(ledger, accounts.depositor_native, "depositor_native")
    depositor_redeemable = _load_account(
        ledger, accounts.depositor_redeemable, "depositor_redeemable"
    )

    _require(
        redeemable_mint.mint_authority == pool_signer,
        "redeemable_mint.mint_authority == pool_signer",
    )
    _require(pool_native.owner == pool_signer, "pool_native.owner == pool_signer")
    _require(depositor_native.owner == authority, "depositor_native.owner == authority")
    _require(
        depositor_native.mint == pool.native_mint, "depositor_native.mint == native_mint"
    )
    _require(depositor_redeemable.owner == authority, "depositor_redeemable.owner == authority")
    _require(
        depositor_redeemable.mint == pool.redeemable_mint,
        "depositor_redeemable.mint == redeemable_mint",
    )


def check_withdraw(
    ledger: TokenLedger,
    pool: PoolAccount,
    accounts: WithdrawAccounts,
    pool_signer: str,
) -> None:
    _require(accounts.pool_deposit_token == pool.pool_deposit_token, "has_one pool_deposit_token")
    pool_deposit = _load_account(ledger, accounts.pool_deposit_token, "pool_deposit_token")
    creator_deposit = _load_account(
        ledger, accounts.creator_deposit_token, "creator_deposit_token"
    )

    _require(pool_deposit.owner == pool_signer, "pool_deposit_token.owner == pool_signer")
    _require(
        creator_deposit.mint == pool.deposit_token_mint,
        "creator_deposit_token.mint == deposit_token_mint",
    )
