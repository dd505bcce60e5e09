"""Error classes for the IDO pool program and its collaborators.

Program errors carry a stable numeric code (custom program errors start at
6000) and a short message. Every error is raised before any state is
mutated, or from inside a ledger unit of work that rolls back.
"""


class ProgramError(Exception):
    """Base error for pool program rejections."""

    code: int = 6000
    message: str = "Program error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        text = self.message if detail is None else f"{self.message}: {detail}"
        super().__init__(text)

    @property
    def name(self) -> str:
        return type(self).__name__


class NonSequentialTimestamps(ProgramError):
    """start < end < withdraw does not hold."""

    code = 6000
    message = "Timestamps are not Sequential"


class InvalidParameter(ProgramError):
    """A zero amount was supplied."""

    code = 6001
    message = "Invalid Parameter"


class IdoFuture(ProgramError):
    """Initialize attempted at or after the start timestamp."""

    code = 6002
    message = "IDO has not begun yet"


class WrongInvestingTime(ProgramError):
    """Deposit attempted outside the open window."""

    code = 6003
    message = "Not the correct time to invest"


class LowDepositToken(ProgramError):
    """Depositor holds fewer deposit tokens than requested."""

    code = 6004
    message = "Insufficient deposit_token Tokens"


class IdoNotOver(ProgramError):
    """Redemption attempted before the end timestamp."""

    code = 6005
    message = "IDO has not ended yet"


class CannotWithdrawYet(ProgramError):
    """Withdrawal attempted before the withdrawal timestamp."""

    code = 6006
    message = "Cannot withdraw deposit_token yet"


class NothingToRedeem(ProgramError):
    """Redemption attempted against a zero claim-token supply."""

    code = 6007
    message = "Nothing to redeem"


class ConstraintViolation(ProgramError):
    """An account passed to an instruction failed a constraint."""

    code = 2000
    message = "A constraint was violated"


# =============================================================================
# Ledger collaborator errors
# =============================================================================


class LedgerError(Exception):
    """Base error for token ledger operations."""

    pass


class AccountNotFound(LedgerError):
    """No token account at the given address."""

    pass


class MintNotFound(LedgerError):
    """No mint at the given address."""

    pass


class AccountAlreadyExists(LedgerError):
    """An account or mint already occupies the address."""

    pass


class InsufficientFunds(LedgerError):
    """Source balance is lower than the amount."""

    pass


class OwnerMismatch(LedgerError):
    """The signing authority does not own the source account."""

    pass


class MintAuthorityMismatch(LedgerError):
    """The signing authority is not the mint authority."""

    pass


class MintMismatch(LedgerError):
    """Accounts or mint involved in an operation disagree on the mint."""

    pass


class AmountOverflow(LedgerError):
    """A balance or supply would exceed the u64 range."""

    pass


# =============================================================================
# Record storage errors
# =============================================================================


class StoreError(Exception):
    """Base error for pool record storage."""

    pass


class PoolAlreadyExists(StoreError):
    """A pool record already exists at the address."""

    pass


class PoolNotFound(StoreError):
    """No pool record at the address."""

    pass
