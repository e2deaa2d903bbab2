"""Balance ledger engine and models."""

from .exceptions import InsufficientFundsError, InvalidAmountError, LedgerInconsistencyError
from .models import (
    AccountState,
    BalanceChange,
    HistoryPage,
    LedgerEntry,
    TransactionStatus,
    TransactionType,
)
from .service import LedgerService

__all__ = [
    "AccountState",
    "BalanceChange",
    "HistoryPage",
    "LedgerEntry",
    "LedgerService",
    "TransactionStatus",
    "TransactionType",
    "InsufficientFundsError",
    "InvalidAmountError",
    "LedgerInconsistencyError",
]
