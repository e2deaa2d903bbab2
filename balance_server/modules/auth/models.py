"""Login result model."""

from __future__ import annotations

from dataclasses import dataclass

from balance_server.modules.users.models import User


@dataclass(slots=True)
class LoginResult:
    user: User
    token: str
    device_verified: bool
