"""Ledger specific exceptions."""

from balance_server.core.errors import ConflictError, ErrorKind, InvariantViolation
from balance_server.core.money import InvalidAmountError


class InsufficientFundsError(ConflictError):
    """Raised when a withdrawal exceeds the current balance."""

    kind = ErrorKind.INSUFFICIENT_FUNDS
    default_message = "Insufficient balance"


class LedgerInconsistencyError(InvariantViolation):
    """Raised when the balance moved but the ledger entry could not be appended."""


__all__ = ["InvalidAmountError", "InsufficientFundsError", "LedgerInconsistencyError"]
