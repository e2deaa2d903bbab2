"""Repository protocol for admin accounts and dashboard aggregates."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .models import Admin, DashboardStats


class AdminRepository(Protocol):
    async def get_by_id(self, admin_id: str) -> Admin | None:
        ...

    async def get_by_username(self, username: str) -> Admin | None:
        ...

    async def create_admin(self, *, username: str, password_hash: str) -> Admin:
        ...

    async def set_last_login(self, admin_id: str, timestamp: datetime) -> None:
        ...

    async def dashboard_stats(self, recent_limit: int) -> DashboardStats:
        ...
