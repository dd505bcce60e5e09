"""The IDO pool program.

IdoProgram is the pool state machine. It owns no balances itself: pool records
live in a PoolStore, balances on a TokenLedger, and time comes from a trusted
Clock. Every instruction follows the same order:

1. Check the accounts the caller passed (ConstraintViolation)
2. Check the phase gate against the clock, read once at entry
3. Validate parameters and balances
4. Apply all balance moves

All four steps run inside one ledger transaction, so the checks see the same
balances the moves act on and any failure rolls everything back.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from ido_pool.accounts import (
    check_exchange_deposit,
    check_exchange_redeemable,
    check_initialize,
    check_withdraw,
)
from ido_pool.clock import Clock, SystemClock
from ido_pool.config import DEFAULT_PROGRAM_CONFIG, ProgramConfig
from ido_pool.errors import (
    InvalidParameter,
    LowDepositToken,
    NonSequentialTimestamps,
    PoolAlreadyExists,
)
from ido_pool.ledger import TokenLedger
from ido_pool.models.instructions import (
    ExchangeDepositAccounts,
    ExchangeRedeemableAccounts,
    InitializePoolAccounts,
    WithdrawAccounts,
)
from ido_pool.models.pool import PoolAccount
from ido_pool.phase import (
    Phase,
    can_withdraw_deposit_token,
    current_phase,
    ido_over,
    pre_ido_phase,
    unrestricted_phase,
)
from ido_pool.settlement import redeemable_to_native
from ido_pool.signer import pool_signer_address
from ido_pool.store import PoolStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class DepositResult:
    """Outcome of exchanging deposit tokens for redeemable tokens."""

    deposited: int
    redeemable_minted: int


@dataclass(frozen=True)
class RedeemResult:
    """Outcome of exchanging redeemable tokens for native tokens."""

    redeemable_burned: int
    native_paid: int


@dataclass(frozen=True)
class WithdrawResult:
    withdrawn: int


class IdoProgram:
    """Phase-gated token exchange pool.

    Args:
        ledger: Token ledger holding every balance the pool touches
        store: Pool record storage
        clock: Trusted time source. Defaults to SystemClock.
        config: Program settings (program id for signer derivation)
    """

    def __init__(
        self,
        ledger: TokenLedger | None = None,
        store: PoolStore | None = None,
        clock: Clock | None = None,
        config: ProgramConfig = DEFAULT_PROGRAM_CONFIG,
    ) -> None:
        self.ledger = ledger if ledger is not None else TokenLedger()
        self.store = store if store is not None else PoolStore()
        self.clock = clock if clock is not None else SystemClock()
        self.config = config

    @property
    def program_id(self) -> str:
        return self.config.program_id

    def pool_signer(self, pool: PoolAccount) -> str:
        """Address that owns the pool's vaults and claim mint."""
        return pool_signer_address(pool.native_mint, pool.bump, self.program_id)

    def get_pool(self, pool_address: str) -> PoolAccount:
        return self.store.get(pool_address)

    def phase(self, pool_address: str) -> Phase | None:
        return current_phase(self.store.get(pool_address), self.clock.now())

    # =========================================================================
    # Instructions
    # =========================================================================

    def initialize_pool(
        self,
        pool_address: str,
        authority: str,
        accounts: InitializePoolAccounts,
        total_native_tokens: int,
        start_ido_ts: int,
        end_ido_ts: int,
        withdraw_deposit_token_ts: int,
        bump: int,
    ) -> PoolAccount:
        """Create a pool and fund its native vault from the creator.

        Raises:
            PoolAlreadyExists: If a pool record already exists at pool_address
            ConstraintViolation: If the passed accounts do not fit the pool
            IdoFuture: If called at or after start_ido_ts
            NonSequentialTimestamps: Unless start < end < withdraw
            InvalidParameter: If total_native_tokens is zero
            LedgerError: If the creator cannot fund the vault
        """
        signer = pool_signer_address(accounts.native_mint, bump, self.program_id)

        with self.ledger.transaction() as ledger:
            if pool_address in self.store:
                raise PoolAlreadyExists(f"Pool already initialized: {pool_address}")
            check_initialize(ledger, accounts, authority, signer)

            pre_ido_phase(start_ido_ts, self.clock.now())

            if not (start_ido_ts < end_ido_ts and end_ido_ts < withdraw_deposit_token_ts):
                raise NonSequentialTimestamps(
                    f"start={start_ido_ts} end={end_ido_ts} withdraw={withdraw_deposit_token_ts}"
                )
            if total_native_tokens == 0:
                raise InvalidParameter("total_native_tokens must be non-zero")

            pool = PoolAccount(
                pool_authority=authority,
                redeemable_mint=accounts.redeemable_mint,
                native_mint=accounts.native_mint,
                deposit_token_mint=accounts.deposit_token_mint,
                pool_native=accounts.pool_native,
                pool_deposit_token=accounts.pool_deposit_token,
                total_native_tokens=total_native_tokens,
                start_ido_ts=start_ido_ts,
                end_ido_ts=end_ido_ts,
                withdraw_deposit_token_ts=withdraw_deposit_token_ts,
                bump=bump,
            )

            ledger.transfer(
                accounts.creator_native,
                accounts.pool_native,
                total_native_tokens,
                authority=authority,
            )
            self.store.create(pool_address, pool)

        logger.info(
            "pool_initialized",
            pool=pool_address,
            authority=authority,
            total_native_tokens=total_native_tokens,
            start_ido_ts=start_ido_ts,
            end_ido_ts=end_ido_ts,
            withdraw_deposit_token_ts=withdraw_deposit_token_ts,
        )
        return pool

    def exchange_deposit_token_for_redeemable(
        self,
        pool_address: str,
        authority: str,
        accounts: ExchangeDepositAccounts,
        amount: int,
    ) -> DepositResult:
        """Deposit `amount` and receive the same amount of redeemable tokens.

        Raises:
            WrongInvestingTime: Outside start < now < end
            InvalidParameter: If amount is zero
            LowDepositToken: If the depositor holds less than amount
        """
        pool = self.store.get(pool_address)
        signer = self.pool_signer(pool)

        with self.ledger.transaction() as ledger:
            depositor_deposit = check_exchange_deposit(ledger, pool, accounts, authority, signer)

            unrestricted_phase(pool, self.clock.now())

            if amount == 0:
                raise InvalidParameter("amount must be non-zero")
            # The ledger would reject this too; fail early with a specific error
            if depositor_deposit.amount < amount:
                raise LowDepositToken(f"balance={depositor_deposit.amount} amount={amount}")

            ledger.transfer(
                accounts.depositor_deposit_token,
                accounts.pool_deposit_token,
                amount,
                authority=authority,
            )
            ledger.mint_to(
                accounts.redeemable_mint,
                accounts.depositor_redeemable,
                amount,
                authority=signer,
            )

        logger.info("deposit_exchanged", pool=pool_address, depositor=authority, amount=amount)
        return DepositResult(deposited=amount, redeemable_minted=amount)

    def exchange_redeemable_for_native(
        self,
        pool_address: str,
        authority: str,
        accounts: ExchangeRedeemableAccounts,
    ) -> RedeemResult:
        """Burn the caller's whole redeemable balance for its share of the native vault.

        Raises:
            IdoNotOver: Unless end < now
            NothingToRedeem: If the redeemable supply is zero
        """
        pool = self.store.get(pool_address)
        signer = self.pool_signer(pool)

        with self.ledger.transaction() as ledger:
            check_exchange_redeemable(ledger, pool, accounts, authority, signer)

            ido_over(pool, self.clock.now())

            redeemable = ledger.balance(accounts.depositor_redeemable)
            native_amount = redeemable_to_native(
                redeemable,
                ledger.balance(accounts.pool_native),
                ledger.supply(accounts.redeemable_mint),
            )
            ledger.burn(accounts.depositor_redeemable, redeemable, authority=authority)
            ledger.transfer(
                accounts.pool_native,
                accounts.depositor_native,
                native_amount,
                authority=signer,
            )

        logger.info(
            "redeemable_exchanged",
            pool=pool_address,
            depositor=authority,
            redeemable_burned=redeemable,
            native_paid=native_amount,
        )
        return RedeemResult(redeemable_burned=redeemable, native_paid=native_amount)

    def withdraw_pool_deposit_token(
        self,
        pool_address: str,
        payer: str,
        accounts: WithdrawAccounts,
    ) -> WithdrawResult:
        """Move the pool's entire deposit vault to the creator's account.

        Repeating this after the vault is empty is a zero-amount transfer.

        Raises:
            CannotWithdrawYet: Unless withdraw_deposit_token_ts < now
        """
        pool = self.store.get(pool_address)
        signer = self.pool_signer(pool)

        with self.ledger.transaction() as ledger:
            check_withdraw(ledger, pool, accounts, signer)

            can_withdraw_deposit_token(pool, self.clock.now())

            amount = ledger.balance(accounts.pool_deposit_token)
            ledger.transfer(
                accounts.pool_deposit_token,
                accounts.creator_deposit_token,
                amount,
                authority=signer,
            )

        logger.info("deposit_withdrawn", pool=pool_address, payer=payer, amount=amount)
        return WithdrawResult(withdrawn=amount)
