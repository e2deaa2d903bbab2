"""Domain models for user accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from balance_server.core.pagination import page_count
from balance_server.modules.devices.models import DeviceTrust


@dataclass(slots=True)
class User:
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    balance_cents: int
    is_active: bool
    password_hash: str = field(repr=False)
    devices: list[DeviceTrust] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(slots=True)
class RegistrationInput:
    first_name: str
    last_name: str
    email: str
    phone: str
    password: str
    device_id: str


@dataclass(slots=True)
class UserPage:
    users: list[User]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return page_count(self.total, self.limit)
