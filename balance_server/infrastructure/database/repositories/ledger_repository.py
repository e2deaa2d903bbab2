"""SQLAlchemy implementation for the balance ledger."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.core.money import MAX_BALANCE_CENTS
from balance_server.db.models import LedgerTransaction, User as UserModel, utcnow
from balance_server.infrastructure.database.store import guarded_read, guarded_write
from balance_server.modules.ledger.models import (
    AccountState,
    BalanceChange,
    LedgerEntry,
    TransactionStatus,
    TransactionType,
)


class SqlLedgerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def apply_delta(self, user_id: str, delta_cents: int) -> BalanceChange | None:
        # Single conditional UPDATE; concurrent mutations of one user serialize on the row.
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.is_active.is_(True))
            .values(
                balance_cents=UserModel.balance_cents + delta_cents,
                version=UserModel.version + 1,
            )
            .returning(UserModel.balance_cents)
            .execution_options(synchronize_session=False)
        )
        if delta_cents < 0:
            stmt = stmt.where(UserModel.balance_cents >= -delta_cents)
        else:
            stmt = stmt.where(UserModel.balance_cents <= MAX_BALANCE_CENTS - delta_cents)

        async def _update() -> BalanceChange | None:
            result = await self.session.execute(stmt)
            row = result.first()
            if row is None:
                return None
            balance_after = int(row[0])
            return BalanceChange(
                balance_before_cents=balance_after - delta_cents,
                balance_after_cents=balance_after,
            )

        return await guarded_write(_update, name="ledger.apply_delta")

    async def get_account_state(self, user_id: str) -> AccountState:
        async def _query() -> AccountState:
            stmt = select(UserModel.is_active, UserModel.balance_cents).where(UserModel.id == user_id)
            row = (await self.session.execute(stmt)).first()
            if row is None:
                return AccountState(exists=False)
            return AccountState(exists=True, is_active=bool(row[0]), balance_cents=int(row[1]))

        return await guarded_read(_query, name="ledger.get_account_state")

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
        tx = LedgerTransaction(
            user_id=user_id,
            type=type.value,
            amount_cents=amount_cents,
            balance_before_cents=balance_before_cents,
            balance_after_cents=balance_after_cents,
            description=description,
            status=status.value,
            created_at=utcnow(),
        )

        async def _insert() -> None:
            self.session.add(tx)
            await self.session.flush()

        await guarded_write(_insert, name="ledger.add_entry")
        return entry_to_domain(tx)

    async def list_entries(self, user_id: str, offset: int, limit: int) -> tuple[Sequence[LedgerEntry], int]:
        async def _query() -> tuple[Sequence[LedgerEntry], int]:
            stmt = (
                select(LedgerTransaction)
                .where(LedgerTransaction.user_id == user_id)
                .order_by(desc(LedgerTransaction.created_at), desc(LedgerTransaction.id))
                .offset(offset)
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            entries = [entry_to_domain(row) for row in result.scalars().all()]
            count_stmt = select(func.count(LedgerTransaction.id)).where(LedgerTransaction.user_id == user_id)
            total = (await self.session.execute(count_stmt)).scalar() or 0
            return entries, int(total)

        return await guarded_read(_query, name="ledger.list_entries")


def entry_to_domain(model: LedgerTransaction) -> LedgerEntry:
    return LedgerEntry(
        id=model.id,
        user_id=model.user_id,
        type=TransactionType(model.type),
        amount_cents=int(model.amount_cents),
        balance_before_cents=int(model.balance_before_cents),
        balance_after_cents=int(model.balance_after_cents),
        description=model.description,
        status=TransactionStatus(model.status),
        created_at=model.created_at,
    )
