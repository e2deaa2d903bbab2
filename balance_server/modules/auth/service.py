"""Registration and login workflows combining accounts, device trust and tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from balance_server.core.security import TokenIssuer
from balance_server.modules.devices.service import DeviceTrustService
from balance_server.modules.users.models import RegistrationInput, User
from balance_server.modules.users.service import UserService

from .models import LoginResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthService:
    users: UserService
    devices: DeviceTrustService
    tokens: TokenIssuer

    async def register(self, payload: RegistrationInput) -> User:
        return await self.users.register(payload)

    async def login(self, email: str, password: str, device_id: str) -> LoginResult:
        user = await self.users.authenticate(email, password)
        device_verified = await self.devices.resolve_login(user, device_id)
        token = self.tokens.issue_user_token(user.id, device_id, user.email)
        logger.info("User %s logged in from device %s (verified=%s)", user.id, device_id, device_verified)
        return LoginResult(user=user, token=token, device_verified=device_verified)
