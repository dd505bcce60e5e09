"""Pytest configuration and fixtures."""

import pytest

from ido_pool.clock import FixedClock
from ido_pool.program import IdoProgram
from tests.helpers import (
    Depositor,
    PoolSetup,
    add_depositor,
    initialize,
    make_pool_setup,
    make_program,
)


@pytest.fixture
def program_and_clock() -> tuple[IdoProgram, FixedClock]:
    """A program over an empty ledger, clock in the setup phase."""
    return make_program()


@pytest.fixture
def program(program_and_clock: tuple[IdoProgram, FixedClock]) -> IdoProgram:
    return program_and_clock[0]


@pytest.fixture
def clock(program_and_clock: tuple[IdoProgram, FixedClock]) -> FixedClock:
    return program_and_clock[1]


@pytest.fixture
def setup(program: IdoProgram) -> PoolSetup:
    """Mints and vaults for a pool funded with 1000 native tokens."""
    return make_pool_setup(program, native_amount=1000)


@pytest.fixture
def initialized(program: IdoProgram, setup: PoolSetup) -> PoolSetup:
    """A pool initialized with 1000 native tokens over 100 / 200 / 300."""
    initialize(program, setup, total_native_tokens=1000)
    return setup


@pytest.fixture
def alice(program: IdoProgram, setup: PoolSetup) -> Depositor:
    return add_depositor(program, "alice", deposit_balance=10_000)


@pytest.fixture
def bob(program: IdoProgram, setup: PoolSetup) -> Depositor:
    return add_depositor(program, "bob", deposit_balance=10_000)
