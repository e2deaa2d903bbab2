"""Domain models for the admin surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from balance_server.modules.ledger.models import LedgerEntry
from balance_server.modules.users.models import User


@dataclass(slots=True)
class Admin:
    id: str
    username: str
    is_active: bool
    password_hash: str = field(repr=False)
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


@dataclass(slots=True)
class UserDetail:
    user: User
    recent_transactions: list[LedgerEntry]


@dataclass(slots=True)
class RecentActivity:
    entry: LedgerEntry
    first_name: str
    last_name: str
    email: str


@dataclass(slots=True)
class DashboardStats:
    total_users: int
    active_users: int
    pending_devices: int
    total_balance_cents: int
    recent_transactions: list[RecentActivity]
