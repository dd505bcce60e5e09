"""Test helpers module for shared test utilities.

- constants: Account names, mints and the standard pool schedule
- factories: Program, pool and depositor builders
"""

from tests.helpers.constants import (
    CLOSED_TS,
    CREATOR_DEPOSIT,
    CREATOR_NATIVE,
    DEPOSIT_MINT,
    END_TS,
    MINT_AUTHORITY,
    NATIVE_MINT,
    OPEN_TS,
    ORGANIZER,
    POOL,
    POOL_DEPOSIT,
    POOL_NATIVE,
    PROGRAM_ID,
    REDEEMABLE_MINT,
    SETUP_TS,
    START_TS,
    WITHDRAW_TS,
    WITHDRAWABLE_TS,
)
from tests.helpers.factories import (
    Depositor,
    PoolSetup,
    add_depositor,
    initialize,
    make_pool_setup,
    make_program,
)

__all__ = [
    # Constants
    "NATIVE_MINT",
    "DEPOSIT_MINT",
    "REDEEMABLE_MINT",
    "MINT_AUTHORITY",
    "POOL",
    "ORGANIZER",
    "POOL_NATIVE",
    "POOL_DEPOSIT",
    "CREATOR_NATIVE",
    "CREATOR_DEPOSIT",
    "PROGRAM_ID",
    "SETUP_TS",
    "START_TS",
    "END_TS",
    "WITHDRAW_TS",
    "OPEN_TS",
    "CLOSED_TS",
    "WITHDRAWABLE_TS",
    # Factories
    "Depositor",
    "PoolSetup",
    "make_program",
    "make_pool_setup",
    "initialize",
    "add_depositor",
]
