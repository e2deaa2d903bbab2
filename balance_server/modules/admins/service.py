"""Admin oversight: admin login, user management, device verification and dashboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from balance_server.core.crypto import hash_password, verify_password
from balance_server.core.errors import InvalidCredentialError
from balance_server.core.security import TokenIssuer
from balance_server.modules.devices.models import DeviceTrust
from balance_server.modules.devices.service import DeviceTrustService
from balance_server.modules.ledger.service import LedgerService
from balance_server.modules.users.models import User, UserPage
from balance_server.modules.users.service import UserService

from .exceptions import AdminAlreadyExistsError
from .models import Admin, DashboardStats, UserDetail
from .repository import AdminRepository

logger = logging.getLogger(__name__)

RECENT_USER_TRANSACTIONS = 10
RECENT_DASHBOARD_TRANSACTIONS = 5


@dataclass(slots=True)
class AdminService:
    repository: AdminRepository
    users: UserService
    devices: DeviceTrustService
    ledger: LedgerService
    tokens: TokenIssuer
    password_rounds: int = 12

    async def get_admin(self, admin_id: str) -> Admin | None:
        return await self.repository.get_by_id(admin_id)

    async def create_admin(self, username: str, password: str) -> Admin:
        if await self.repository.get_by_username(username) is not None:
            raise AdminAlreadyExistsError()
        return await self.repository.create_admin(
            username=username,
            password_hash=hash_password(password, self.password_rounds),
        )

    async def login(self, username: str, password: str) -> tuple[Admin, str]:
        admin = await self.repository.get_by_username(username)
        if admin is None or not admin.is_active or not verify_password(password, admin.password_hash):
            logger.warning("Admin login failed for %s", username)
            raise InvalidCredentialError()

        await self.repository.set_last_login(admin.id, datetime.now(timezone.utc))
        return admin, self.tokens.issue_admin_token(admin.id, admin.username)

    async def list_users(self, page: object, limit: object, search: str | None) -> UserPage:
        return await self.users.list_users(page, limit, search)

    async def get_user_detail(self, user_id: str) -> UserDetail:
        user = await self.users.require_user(user_id)
        history = await self.ledger.get_history(user_id, 1, RECENT_USER_TRANSACTIONS)
        return UserDetail(user=user, recent_transactions=history.entries)

    async def set_user_active(self, user_id: str, is_active: bool) -> User:
        return await self.users.set_active(user_id, is_active)

    async def verify_device(self, user_id: str, device_id: str) -> tuple[DeviceTrust, User]:
        device = await self.devices.verify_device(user_id, device_id)
        user = await self.users.require_user(user_id)
        return device, user

    async def dashboard_stats(self) -> DashboardStats:
        return await self.repository.dashboard_stats(RECENT_DASHBOARD_TRANSACTIONS)
