"""Repository protocol for the balance ledger."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import AccountState, BalanceChange, LedgerEntry, TransactionStatus, TransactionType


class LedgerRepository(Protocol):
    async def apply_delta(self, user_id: str, delta_cents: int) -> BalanceChange | None:
        """Atomically add ``delta_cents`` to an active user's balance.

        Negative deltas only apply when the balance covers them; positive
        deltas only when the result stays within ``MAX_BALANCE_CENTS``.
        Returns ``None`` when no row matched.
        """
        ...

    async def get_account_state(self, user_id: str) -> AccountState:
        ...

    async def add_entry(
        self,
        *,
        user_id: str,
        type: TransactionType,
        amount_cents: int,
        balance_before_cents: int,
        balance_after_cents: int,
        description: str,
        status: TransactionStatus,
    ) -> LedgerEntry:
        ...

    async def list_entries(self, user_id: str, offset: int, limit: int) -> tuple[Sequence[LedgerEntry], int]:
        ...
