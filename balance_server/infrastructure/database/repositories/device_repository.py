"""SQLAlchemy powered repository for device trust records."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.db.models import User as UserModel, UserDevice as UserDeviceModel
from balance_server.infrastructure.database.store import guarded_read, guarded_write
from balance_server.modules.devices.models import DeviceTrust

from .user_repository import device_to_domain


class SqlDeviceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def user_exists(self, user_id: str) -> bool:
        async def _query() -> bool:
            result = await self._session.execute(select(UserModel.id).where(UserModel.id == user_id))
            return result.scalar_one_or_none() is not None

        return await guarded_read(_query, name="devices.user_exists")

    async def list_for_user(self, user_id: str) -> list[DeviceTrust]:
        async def _query() -> list[DeviceTrust]:
            result = await self._session.execute(self._select_for_user(user_id))
            return [device_to_domain(model) for model in result.scalars().all()]

        return await guarded_read(_query, name="devices.list_for_user")

    async def add_device(self, user_id: str, device_id: str) -> DeviceTrust:
        async def _insert() -> DeviceTrust:
            model = UserDeviceModel(user_id=user_id, device_id=device_id, verified=False)
            self._session.add(model)
            try:
                await self._session.flush()
            except IntegrityError:
                # a concurrent login registered the same device first
                await self._session.rollback()
                existing = await self._fetch(user_id, device_id)
                if existing is None:
                    raise
                return device_to_domain(existing)
            return device_to_domain(model)

        return await guarded_write(_insert, name="devices.add_device")

    async def mark_verified(self, user_id: str, device_id: str, timestamp: datetime) -> DeviceTrust | None:
        async def _update() -> DeviceTrust | None:
            stmt = (
                update(UserDeviceModel)
                .where(
                    UserDeviceModel.user_id == user_id,
                    UserDeviceModel.device_id == device_id,
                    UserDeviceModel.verified.is_(False),
                )
                .values(verified=True, verified_at=timestamp)
                .execution_options(synchronize_session="fetch")
            )
            await self._session.execute(stmt)
            model = await self._fetch(user_id, device_id)
            return device_to_domain(model) if model else None

        return await guarded_write(_update, name="devices.mark_verified")

    async def set_last_login(self, user_id: str, device_id: str, timestamp: datetime) -> None:
        async def _update() -> None:
            stmt = (
                update(UserDeviceModel)
                .where(UserDeviceModel.user_id == user_id, UserDeviceModel.device_id == device_id)
                .values(last_login=timestamp)
                .execution_options(synchronize_session="fetch")
            )
            await self._session.execute(stmt)

        await guarded_write(_update, name="devices.set_last_login")

    async def _fetch(self, user_id: str, device_id: str) -> UserDeviceModel | None:
        stmt = (
            select(UserDeviceModel)
            .where(UserDeviceModel.user_id == user_id, UserDeviceModel.device_id == device_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    def _select_for_user(user_id: str):
        return (
            select(UserDeviceModel)
            .where(UserDeviceModel.user_id == user_id)
            .order_by(UserDeviceModel.created_at)
            .execution_options(populate_existing=True)
        )
