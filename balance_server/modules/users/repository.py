"""Repository protocol for user accounts."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import User


class UserRepository(Protocol):
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def identity_taken(self, email: str, phone: str) -> bool:
        ...

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
        ...

    async def search_users(self, search: str | None, offset: int, limit: int) -> tuple[Sequence[User], int]:
        ...

    async def set_active(self, user_id: str, is_active: bool) -> User | None:
        ...
