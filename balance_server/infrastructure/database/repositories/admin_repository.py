"""SQLAlchemy implementation of admin persistence and dashboard aggregates."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.db.models import Admin as AdminModel, LedgerTransaction, User as UserModel, UserDevice
from balance_server.infrastructure.database.store import guarded_read, guarded_write
from balance_server.modules.admins.models import Admin, DashboardStats, RecentActivity

from .ledger_repository import entry_to_domain


class SqlAdminRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, admin_id: str) -> Admin | None:
        return await guarded_read(lambda: self._fetch(AdminModel.id == admin_id), name="admins.get_by_id")

    async def get_by_username(self, username: str) -> Admin | None:
        return await guarded_read(lambda: self._fetch(AdminModel.username == username), name="admins.get_by_username")

    async def create_admin(self, *, username: str, password_hash: str) -> Admin:
        model = AdminModel(username=username, password_hash=password_hash, is_active=True)

        async def _insert() -> None:
            self._session.add(model)
            await self._session.flush()

        await guarded_write(_insert, name="admins.create_admin")
        return self._to_domain(model)

    async def set_last_login(self, admin_id: str, timestamp: datetime) -> None:
        stmt = update(AdminModel).where(AdminModel.id == admin_id).values(last_login_at=timestamp)

        async def _update() -> None:
            await self._session.execute(stmt)

        await guarded_write(_update, name="admins.set_last_login")

    async def dashboard_stats(self, recent_limit: int) -> DashboardStats:
        async def _query() -> DashboardStats:
            total_users = (await self._session.execute(select(func.count(UserModel.id)))).scalar_one()
            active_users = (
                await self._session.execute(select(func.count(UserModel.id)).where(UserModel.is_active.is_(True)))
            ).scalar_one()
            pending_devices = (
                await self._session.execute(select(func.count(UserDevice.id)).where(UserDevice.verified.is_(False)))
            ).scalar_one()
            total_balance = (
                await self._session.execute(select(func.coalesce(func.sum(UserModel.balance_cents), 0)))
            ).scalar_one()

            recent_stmt = (
                select(LedgerTransaction, UserModel.first_name, UserModel.last_name, UserModel.email)
                .join(UserModel, UserModel.id == LedgerTransaction.user_id)
                .order_by(LedgerTransaction.created_at.desc(), LedgerTransaction.id.desc())
                .limit(recent_limit)
            )
            recent = [
                RecentActivity(
                    entry=entry_to_domain(tx),
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                )
                for tx, first_name, last_name, email in (await self._session.execute(recent_stmt)).all()
            ]

            return DashboardStats(
                total_users=int(total_users),
                active_users=int(active_users),
                pending_devices=int(pending_devices),
                total_balance_cents=int(total_balance),
                recent_transactions=recent,
            )

        return await guarded_read(_query, name="admins.dashboard_stats")

    async def _fetch(self, criterion) -> Admin | None:
        stmt = select(AdminModel).where(criterion).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    @staticmethod
    def _to_domain(model: AdminModel | None) -> Admin | None:
        if model is None:
            return None
        return Admin(
            id=str(model.id),
            username=model.username,
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            created_at=model.created_at,
            last_login_at=model.last_login_at,
        )
