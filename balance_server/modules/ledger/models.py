"""Domain models for ledger entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from balance_server.core.pagination import page_count


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class LedgerEntry:
    id: str
    user_id: str
    type: TransactionType
    amount_cents: int
    balance_before_cents: int
    balance_after_cents: int
    description: str
    status: TransactionStatus
    created_at: datetime


@dataclass(slots=True, frozen=True)
class BalanceChange:
    """Result of an atomic balance update."""

    balance_before_cents: int
    balance_after_cents: int


@dataclass(slots=True)
class AccountState:
    exists: bool
    is_active: bool = False
    balance_cents: Optional[int] = None


@dataclass(slots=True)
class HistoryPage:
    entries: list[LedgerEntry]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return page_count(self.total, self.limit)
