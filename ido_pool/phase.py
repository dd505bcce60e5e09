"""Phase gate for pool operations.

The phase is never stored. It is derived by comparing the pool's three
timestamps with the trusted clock, using strict inequalities on both sides.
Each gate checks only its own boundary: Closed and Withdrawable overlap, so
redemption stays legal after the withdrawal timestamp.
"""

from __future__ import annotations

from enum import Enum

from ido_pool.errors import CannotWithdrawYet, IdoFuture, IdoNotOver, WrongInvestingTime
from ido_pool.models.pool import PoolAccount


class Phase(str, Enum):
    """Pool lifecycle phase, in time order."""

    SETUP = "setup"
    OPEN = "open"
    CLOSED = "closed"
    WITHDRAWABLE = "withdrawable"


def current_phase(pool: PoolAccount, now: int) -> Phase | None:
    """Report the latest phase whose condition holds at `now`.

    Returns None on an exact boundary timestamp (e.g. now == start_ido_ts),
    where no operation is legal.
    """
    if pool.withdraw_deposit_token_ts < now:
        return Phase.WITHDRAWABLE
    if pool.end_ido_ts < now:
        return Phase.CLOSED
    if pool.start_ido_ts < now < pool.end_ido_ts:
        return Phase.OPEN
    if now < pool.start_ido_ts:
        return Phase.SETUP
    return None


def pre_ido_phase(start_ido_ts: int, now: int) -> None:
    """Initialize is only legal strictly before the start timestamp."""
    if not now < start_ido_ts:
        raise IdoFuture(f"now={now} start={start_ido_ts}")


def unrestricted_phase(pool: PoolAccount, now: int) -> None:
    """Deposits are only legal strictly inside (start, end)."""
    if not (pool.start_ido_ts < now and pool.end_ido_ts > now):
        raise WrongInvestingTime(
            f"now={now} start={pool.start_ido_ts} end={pool.end_ido_ts}"
        )


def ido_over(pool: PoolAccount, now: int) -> None:
    if not pool.end_ido_ts < now:
        raise IdoNotOver(f"now={now} end={pool.end_ido_ts}")


def can_withdraw_deposit_token(pool: PoolAccount, now: int) -> None:
    if not pool.withdraw_deposit_token_ts < now:
        raise CannotWithdrawYet(f"now={now} withdraw={pool.withdraw_deposit_token_ts}")
