"""Balance ledger engine.

Every deposit or withdrawal is a single atomic balance update followed by
the append of an immutable ledger entry recording the balance on both
sides of the change. Both writes run in the caller's database transaction,
so the pair commits or rolls back together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import NoReturn

from balance_server.core.config import LedgerSettings
from balance_server.core.errors import StoreUnavailableError, ValidationError
from balance_server.core.money import MAX_BALANCE_CENTS, InvalidAmountError, format_cents, positive_cents
from balance_server.core.pagination import normalize_page, page_offset
from balance_server.modules.users.exceptions import UserInactiveError, UserNotFoundError

from .exceptions import InsufficientFundsError, LedgerInconsistencyError
from .models import BalanceChange, HistoryPage, LedgerEntry, TransactionStatus, TransactionType
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LedgerService:
    repository: LedgerRepository
    settings: LedgerSettings = field(default_factory=LedgerSettings)

    async def deposit(self, user_id: str, amount: Decimal | int | str, description: str) -> LedgerEntry:
        return await self._mutate(user_id, TransactionType.DEPOSIT, amount, description)

    async def withdraw(self, user_id: str, amount: Decimal | int | str, description: str) -> LedgerEntry:
        return await self._mutate(user_id, TransactionType.WITHDRAWAL, amount, description)

    async def get_history(self, user_id: str, page: object = 1, page_size: object = None) -> HistoryPage:
        page_number, limit = normalize_page(page, page_size, default_limit=self.settings.default_page_size)
        entries, total = await self.repository.list_entries(user_id, page_offset(page_number, limit), limit)
        return HistoryPage(entries=list(entries), page=page_number, limit=limit, total=total)

    async def _mutate(
        self,
        user_id: str,
        tx_type: TransactionType,
        amount: Decimal | int | str,
        description: str,
    ) -> LedgerEntry:
        amount_cents = positive_cents(amount)
        description = (description or "").strip()
        if not description:
            raise ValidationError("Description is required")

        delta = amount_cents if tx_type is TransactionType.DEPOSIT else -amount_cents
        change = await self.repository.apply_delta(user_id, delta)
        if change is None:
            await self._raise_rejection(user_id, tx_type, amount_cents)
        return await self._append(user_id, tx_type, amount_cents, change, description)

    async def _raise_rejection(self, user_id: str, tx_type: TransactionType, amount_cents: int) -> NoReturn:
        state = await self.repository.get_account_state(user_id)
        if not state.exists:
            raise UserNotFoundError()
        if not state.is_active:
            raise UserInactiveError()
        if tx_type is TransactionType.DEPOSIT:
            if (state.balance_cents or 0) + amount_cents > MAX_BALANCE_CENTS:
                raise InvalidAmountError(
                    f"Deposit would raise the balance above the maximum of {format_cents(MAX_BALANCE_CENTS)}"
                )
            # the account changed between the update and the lookup
            raise StoreUnavailableError("Account was modified concurrently, retry the request")
        logger.info(
            "%s of %d cents rejected for user %s: balance %s",
            tx_type.value,
            amount_cents,
            user_id,
            state.balance_cents,
        )
        raise InsufficientFundsError()

    async def _append(
        self,
        user_id: str,
        tx_type: TransactionType,
        amount_cents: int,
        change: BalanceChange,
        description: str,
    ) -> LedgerEntry:
        try:
            entry = await self.repository.add_entry(
                user_id=user_id,
                type=tx_type,
                amount_cents=amount_cents,
                balance_before_cents=change.balance_before_cents,
                balance_after_cents=change.balance_after_cents,
                description=description,
                status=TransactionStatus.COMPLETED,
            )
        except Exception as exc:
            logger.critical(
                "Ledger append failed after balance update, reconciliation required: "
                "user=%s type=%s amount_cents=%d balance_before=%d balance_after=%d",
                user_id,
                tx_type.value,
                amount_cents,
                change.balance_before_cents,
                change.balance_after_cents,
                exc_info=exc,
            )
            raise LedgerInconsistencyError() from exc

        logger.info(
            "%s of %d cents for user %s: %d -> %d",
            tx_type.value,
            amount_cents,
            user_id,
            change.balance_before_cents,
            change.balance_after_cents,
        )
        return entry
