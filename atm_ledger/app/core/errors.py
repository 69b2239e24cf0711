class LedgerError(Exception):
    """Base class for every error raised by the account ledger."""


class InvalidArgumentError(LedgerError, ValueError):
    """Raised for malformed input to a ledger operation."""


class DuplicateAccountError(InvalidArgumentError):
    """Raised when a (card, pin) pair is registered twice."""


class InvalidAmountError(InvalidArgumentError):
    """Raised when a deposit/withdrawal amount is not a positive number."""


class AccountNotFoundError(InvalidArgumentError):
    """Raised when a (card, pin) pair is missing from the store."""


class InsufficientFundsError(LedgerError, RuntimeError):
    """Raised when a withdrawal would drop balance below zero."""
