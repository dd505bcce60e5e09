"""In-memory fungible-token ledger.

This is the collaborator the pool program moves balances through. It owns
mints and token accounts and exposes three primitives (transfer, mint_to,
burn), each individually atomic and each checking the signing authority:

- transfer/burn: authority must own the source account
- mint_to: authority must be the mint authority

`transaction()` groups several primitives into one unit of work. While it is
open, every change records its prior value in an undo journal. If anything
raises, only the touched objects are restored, so a program instruction
either applies completely or not at all at a cost bounded by what it
changed. The same re-entrant lock serializes instructions that touch shared
vaults and supplies.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial

import structlog

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
from ido_pool.safe_int import U64_MAX, S, U64Overflow

logger = structlog.get_logger()


@dataclass
class Mint:
    """A token type."""

    address: str
    decimals: int
    mint_authority: str | None
    supply: int = 0


@dataclass
class TokenAccount:
    """A balance of one mint held by one owner."""

    address: str
    mint: str
    owner: str
    amount: int = 0


class TokenLedger:
    """Registry of mints and token accounts with checked balance moves."""

    def __init__(self) -> None:
        self._mints: dict[str, Mint] = {}
        self._accounts: dict[str, TokenAccount] = {}
        self._lock = threading.RLock()
        # Undo actions of the open transaction, None outside one
        self._journal: list[Callable[[], None]] | None = None

    # --- Setup ---

    def create_mint(self, address: str, decimals: int, mint_authority: str | None) -> Mint:
        """Register a new mint with zero supply.

        Raises:
            AccountAlreadyExists: If address is already used
            ValueError: If decimals is out of range
        """
        if not 0 <= decimals <= 255:
            raise ValueError(f"Mint decimals must be in [0, 255], got {decimals}")
        with self._lock:
            self._ensure_free(address)
            mint = Mint(address=address, decimals=decimals, mint_authority=mint_authority)
            self._mints[address] = mint
            self._record(partial(self._mints.pop, address))
        logger.debug("mint_created", mint=address, decimals=decimals, authority=mint_authority)
        return copy.copy(mint)

    def create_account(self, address: str, mint: str, owner: str) -> TokenAccount:
        """Open an empty token account for owner.

        Raises:
            AccountAlreadyExists: If address is already used
            MintNotFound: If mint is unknown
        """
        with self._lock:
            self._ensure_free(address)
            self._mint(mint)
            account = TokenAccount(address=address, mint=mint, owner=owner)
            self._accounts[address] = account
            self._record(partial(self._accounts.pop, address))
        logger.debug("token_account_created", account=address, mint=mint, owner=owner)
        return copy.copy(account)

    def is_taken(self, address: str) -> bool:
        """True if a mint or account already exists at address."""
        return address in self._mints or address in self._accounts

    # --- Reads (copies, never live state) ---

    def get_mint(self, address: str) -> Mint:
        with self._lock:
            return copy.copy(self._mint(address))

    def get_account(self, address: str) -> TokenAccount:
        with self._lock:
            return copy.copy(self._account(address))

    def balance(self, address: str) -> int:
        with self._lock:
            return self._account(address).amount

    def supply(self, mint: str) -> int:
        with self._lock:
            return self._mint(mint).supply

    # --- Primitives ---

    def transfer(self, source: str, destination: str, amount: int, authority: str) -> None:
        """Move amount from source to destination.

        Raises:
            OwnerMismatch: If authority does not own source
            MintMismatch: If the accounts hold different mints
            InsufficientFunds: If source balance < amount
        """
        _check_amount(amount)
        with self._lock:
            src = self._account(source)
            dst = self._account(destination)
            if src.owner != authority:
                raise OwnerMismatch(f"{authority} does not own {source}")
            if src.mint != dst.mint:
                raise MintMismatch(f"{source} holds {src.mint}, {destination} holds {dst.mint}")
            if src.amount < amount:
                raise InsufficientFunds(f"{source} has {src.amount}, needs {amount}")
            if source != destination:
                new_dst = _add_u64(dst.amount, amount, f"{destination} balance")
                self._save(src, dst)
                src.amount -= amount
                dst.amount = new_dst
        logger.debug(
            "transfer", source=source, destination=destination, amount=amount, authority=authority
        )

    def mint_to(self, mint: str, destination: str, amount: int, authority: str) -> None:
        """Create amount new tokens in destination.

        Raises:
            MintAuthorityMismatch: If authority is not the mint authority
            MintMismatch: If destination does not hold mint
            AmountOverflow: If supply or balance would exceed u64
        """
        _check_amount(amount)
        with self._lock:
            mint_state = self._mint(mint)
            dst = self._account(destination)
            if mint_state.mint_authority is None or mint_state.mint_authority != authority:
                raise MintAuthorityMismatch(f"{authority} cannot mint {mint}")
            if dst.mint != mint:
                raise MintMismatch(f"{destination} holds {dst.mint}, not {mint}")
            new_supply = _add_u64(mint_state.supply, amount, f"{mint} supply")
            new_dst = _add_u64(dst.amount, amount, f"{destination} balance")
            self._save(mint_state, dst)
            mint_state.supply = new_supply
            dst.amount = new_dst
        logger.debug("mint_to", mint=mint, destination=destination, amount=amount)

    def burn(self, source: str, amount: int, authority: str) -> None:
        """Destroy amount tokens from source, reducing the mint supply.

        Raises:
            OwnerMismatch: If authority does not own source
            InsufficientFunds: If source balance < amount
        """
        _check_amount(amount)
        with self._lock:
            src = self._account(source)
            mint_state = self._mint(src.mint)
            if src.owner != authority:
                raise OwnerMismatch(f"{authority} does not own {source}")
            if src.amount < amount:
                raise InsufficientFunds(f"{source} has {src.amount}, needs {amount}")
            self._save(src, mint_state)
            src.amount -= amount
            mint_state.supply -= amount
        logger.debug("burn", source=source, amount=amount, authority=authority)

    # --- Unit of work ---

    @contextmanager
    def transaction(self) -> Iterator[TokenLedger]:
        """Apply everything inside the block atomically.

        On any exception the changes made inside the block are undone and the
        exception propagates. Nested blocks roll back to their own entry point.
        """
        with self._lock:
            outermost = self._journal is None
            if outermost:
                self._journal = []
            savepoint = len(self._journal)
            try:
                yield self
            except BaseException:
                undo = self._journal[savepoint:]
                del self._journal[savepoint:]
                for restore in reversed(undo):
                    restore()
                logger.debug("transaction_rolled_back", undone=len(undo))
                raise
            finally:
                if outermost:
                    self._journal = None

    # --- Internals ---

    def _record(self, restore: Callable[[], None]) -> None:
        if self._journal is not None:
            self._journal.append(restore)

    def _save(self, *states: Mint | TokenAccount) -> None:
        """Journal the current balance or supply of each state object."""
        for state in states:
            field = "supply" if isinstance(state, Mint) else "amount"
            self._record(partial(setattr, state, field, getattr(state, field)))

    def _ensure_free(self, address: str) -> None:
        if self.is_taken(address):
            raise AccountAlreadyExists(f"Address already in use: {address}")

    def _mint(self, address: str) -> Mint:
        mint = self._mints.get(address)
        if mint is None:
            raise MintNotFound(f"Unknown mint: {address}")
        return mint

    def _account(self, address: str) -> TokenAccount:
        account = self._accounts.get(address)
        if account is None:
            raise AccountNotFound(f"Unknown token account: {address}")
        return account


def _check_amount(amount: int) -> None:
    if amount < 0 or amount > U64_MAX:
        raise ValueError(f"Amount must be a u64, got {amount}")


def _add_u64(balance: int, amount: int, what: str) -> int:
    try:
        return S(balance).checked_add_u64(amount).value
    except U64Overflow as err:
        raise AmountOverflow(f"{what} would exceed u64") from err
