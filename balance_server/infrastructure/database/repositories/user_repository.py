"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.db.models import User as UserModel, UserDevice as UserDeviceModel
from balance_server.infrastructure.database.store import guarded_read, guarded_write
from balance_server.modules.devices.models import DeviceTrust
from balance_server.modules.users.exceptions import DuplicateIdentityError
from balance_server.modules.users.models import User


class SqlUserRepository:
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: str) -> User | None:
        model = await guarded_read(lambda: self._fetch(UserModel.id == user_id), name="users.get_by_id")
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> User | None:
        model = await guarded_read(lambda: self._fetch(UserModel.email == email), name="users.get_by_email")
        return self._to_domain(model)

    async def identity_taken(self, email: str, phone: str) -> bool:
        async def _query() -> bool:
            stmt = select(UserModel.id).where(or_(UserModel.email == email, UserModel.phone == phone)).limit(1)
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none() is not None

        return await guarded_read(_query, name="users.identity_taken")

    async def create_user(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        password_hash: str,
        device_id: str,
    ) -> User:
        model = UserModel(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            password_hash=password_hash,
            balance_cents=0,
            is_active=True,
            devices=[UserDeviceModel(device_id=device_id, verified=False)],
        )

        async def _insert() -> None:
            self._session.add(model)
            try:
                await self._session.flush()
            except IntegrityError as exc:
                await self._session.rollback()
                raise DuplicateIdentityError() from exc

        await guarded_write(_insert, name="users.create_user")
        return self._to_domain(model)

    async def search_users(self, search: str | None, offset: int, limit: int) -> tuple[Sequence[User], int]:
        async def _query() -> tuple[Sequence[User], int]:
            query = select(UserModel).order_by(UserModel.created_at.desc(), UserModel.id)
            count_query = select(func.count(UserModel.id))
            if search:
                pattern = f"%{search.lower()}%"
                predicate = or_(
                    func.lower(UserModel.first_name).like(pattern),
                    func.lower(UserModel.last_name).like(pattern),
                    func.lower(UserModel.email).like(pattern),
                    func.lower(UserModel.phone).like(pattern),
                )
                query = query.where(predicate)
                count_query = count_query.where(predicate)

            result = await self._session.execute(query.offset(offset).limit(limit))
            users = [self._to_domain(model) for model in result.scalars().all()]
            total = (await self._session.execute(count_query)).scalar() or 0
            return users, int(total)

        return await guarded_read(_query, name="users.search_users")

    async def set_active(self, user_id: str, is_active: bool) -> User | None:
        async def _update() -> UserModel | None:
            model = await self._fetch(UserModel.id == user_id)
            if model is None:
                return None
            model.is_active = is_active
            await self._session.flush()
            await self._session.refresh(model)
            return model

        model = await guarded_write(_update, name="users.set_active")
        return self._to_domain(model)

    async def _fetch(self, criterion) -> UserModel | None:
        stmt = select(UserModel).where(criterion).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=str(model.id),
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            phone=model.phone,
            balance_cents=int(model.balance_cents or 0),
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            devices=[device_to_domain(device) for device in model.devices],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


def device_to_domain(model: UserDeviceModel) -> DeviceTrust:
    return DeviceTrust(
        device_id=model.device_id,
        verified=bool(model.verified),
        verified_at=model.verified_at,
        last_login=model.last_login,
        created_at=model.created_at,
    )
