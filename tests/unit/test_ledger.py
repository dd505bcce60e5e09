"""Tests for the in-memory token ledger."""

import copy

import pytest

from ido_pool.errors import (
    AccountAlreadyExists,
    AccountNotFound,
    AmountOverflow,
    InsufficientFunds,
    MintAuthorityMismatch,
    MintMismatch,
    MintNotFound,
    OwnerMismatch,
)
from ido_pool.ledger import TokenLedger
from ido_pool.safe_int import U64_MAX


@pytest.fixture
def ledger() -> TokenLedger:
    ledger = TokenLedger()
    ledger.create_mint("usdc", 6, "issuer")
    ledger.create_mint("other", 6, "issuer")
    ledger.create_account("alice-usdc", "usdc", "alice")
    ledger.create_account("bob-usdc", "usdc", "bob")
    ledger.create_account("alice-other", "other", "alice")
    ledger.mint_to("usdc", "alice-usdc", 100, "issuer")
    return ledger


class TestSetup:
    def test_duplicate_address(self, ledger):
        with pytest.raises(AccountAlreadyExists):
            ledger.create_account("alice-usdc", "usdc", "alice")
        with pytest.raises(AccountAlreadyExists):
            ledger.create_mint("alice-usdc", 6, None)

    def test_account_for_unknown_mint(self, ledger):
        with pytest.raises(MintNotFound):
            ledger.create_account("x", "missing", "alice")

    def test_unknown_account(self, ledger):
        with pytest.raises(AccountNotFound):
            ledger.balance("missing")

    def test_reads_are_copies(self, ledger):
        account = ledger.get_account("alice-usdc")
        account.amount = 999
        assert ledger.balance("alice-usdc") == 100


class TestTransfer:
    def test_moves_balance(self, ledger):
        ledger.transfer("alice-usdc", "bob-usdc", 40, authority="alice")
        assert ledger.balance("alice-usdc") == 60
        assert ledger.balance("bob-usdc") == 40

    def test_insufficient_funds(self, ledger):
        with pytest.raises(InsufficientFunds):
            ledger.transfer("alice-usdc", "bob-usdc", 101, authority="alice")
        assert ledger.balance("alice-usdc") == 100

    def test_wrong_owner(self, ledger):
        with pytest.raises(OwnerMismatch):
            ledger.transfer("alice-usdc", "bob-usdc", 1, authority="bob")

    def test_mint_mismatch(self, ledger):
        with pytest.raises(MintMismatch):
            ledger.transfer("alice-usdc", "alice-other", 1, authority="alice")

    def test_zero_amount_is_allowed(self, ledger):
        ledger.transfer("bob-usdc", "alice-usdc", 0, authority="bob")
        assert ledger.balance("bob-usdc") == 0

    def test_balance_can_reach_u64_max(self, ledger):
        ledger.mint_to("usdc", "bob-usdc", U64_MAX - 100, "issuer")
        ledger.transfer("alice-usdc", "bob-usdc", 100, authority="alice")
        assert ledger.balance("bob-usdc") == U64_MAX


class TestMintAndBurn:
    def test_mint_updates_supply(self, ledger):
        ledger.mint_to("usdc", "bob-usdc", 5, "issuer")
        assert ledger.supply("usdc") == 105

    def test_mint_requires_authority(self, ledger):
        with pytest.raises(MintAuthorityMismatch):
            ledger.mint_to("usdc", "bob-usdc", 5, "alice")

    def test_fixed_supply_mint_cannot_mint(self, ledger):
        ledger.create_mint("fixed", 0, None)
        ledger.create_account("alice-fixed", "fixed", "alice")
        with pytest.raises(MintAuthorityMismatch):
            ledger.mint_to("fixed", "alice-fixed", 1, "issuer")

    def test_mint_to_wrong_mint_account(self, ledger):
        with pytest.raises(MintMismatch):
            ledger.mint_to("usdc", "alice-other", 1, "issuer")

    def test_supply_overflow(self, ledger):
        with pytest.raises(AmountOverflow):
            ledger.mint_to("usdc", "bob-usdc", U64_MAX, "issuer")

    def test_burn_reduces_supply(self, ledger):
        ledger.burn("alice-usdc", 30, authority="alice")
        assert ledger.balance("alice-usdc") == 70
        assert ledger.supply("usdc") == 70

    def test_burn_insufficient(self, ledger):
        with pytest.raises(InsufficientFunds):
            ledger.burn("alice-usdc", 101, authority="alice")

    def test_burn_wrong_owner(self, ledger):
        with pytest.raises(OwnerMismatch):
            ledger.burn("alice-usdc", 1, authority="bob")


class TestTransaction:
    def test_commit(self, ledger):
        with ledger.transaction() as tx:
            tx.transfer("alice-usdc", "bob-usdc", 10, authority="alice")
            tx.burn("bob-usdc", 5, authority="bob")
        assert ledger.balance("alice-usdc") == 90
        assert ledger.balance("bob-usdc") == 5
        assert ledger.supply("usdc") == 95

    def test_rollback_on_failure(self, ledger):
        """A failing second step undoes the first."""
        with pytest.raises(InsufficientFunds):
            with ledger.transaction() as tx:
                tx.transfer("alice-usdc", "bob-usdc", 60, authority="alice")
                tx.transfer("alice-usdc", "bob-usdc", 60, authority="alice")
        assert ledger.balance("alice-usdc") == 100
        assert ledger.balance("bob-usdc") == 0

    def test_rollback_on_foreign_exception(self, ledger):
        with pytest.raises(RuntimeError):
            with ledger.transaction() as tx:
                tx.mint_to("usdc", "bob-usdc", 50, "issuer")
                raise RuntimeError("abort")
        assert ledger.supply("usdc") == 100
        assert ledger.balance("bob-usdc") == 0

    def test_rollback_removes_created_accounts(self, ledger):
        with pytest.raises(RuntimeError):
            with ledger.transaction() as tx:
                tx.create_account("carol-usdc", "usdc", "carol")
                tx.mint_to("usdc", "carol-usdc", 5, "issuer")
                raise RuntimeError("abort")
        assert not ledger.is_taken("carol-usdc")
        assert ledger.supply("usdc") == 100

    def test_nested_rollback_keeps_outer_changes(self, ledger):
        with ledger.transaction() as tx:
            tx.transfer("alice-usdc", "bob-usdc", 10, authority="alice")
            with pytest.raises(InsufficientFunds):
                with tx.transaction() as inner:
                    inner.burn("bob-usdc", 5, authority="bob")
                    inner.burn("bob-usdc", 50, authority="bob")
        assert ledger.balance("alice-usdc") == 90
        assert ledger.balance("bob-usdc") == 10
        assert ledger.supply("usdc") == 100

    def test_does_not_copy_ledger_state(self, ledger, monkeypatch):
        """Opening a transaction costs nothing proportional to the ledger size."""
        for i in range(50):
            ledger.create_account(f"holder-{i}", "usdc", f"holder-{i}")

        def fail(*args, **kwargs):
            raise AssertionError("ledger state was copied")

        monkeypatch.setattr(copy, "deepcopy", fail)
        with pytest.raises(InsufficientFunds):
            with ledger.transaction() as tx:
                tx.transfer("alice-usdc", "holder-0", 40, authority="alice")
                tx.transfer("alice-usdc", "holder-1", 70, authority="alice")
        assert ledger.balance("alice-usdc") == 100
        assert ledger.balance("holder-0") == 0
