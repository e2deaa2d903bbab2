"""Pydantic schemas used by the HTTP interface."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from balance_server.core.money import format_cents
from balance_server.modules.admins.models import Admin, DashboardStats, RecentActivity, UserDetail
from balance_server.modules.devices.models import DeviceTrust
from balance_server.modules.ledger.models import HistoryPage, LedgerEntry
from balance_server.modules.users.models import User, UserPage


class RegisterRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=32)
    password: str = Field(..., min_length=6)
    device_id: str = Field(..., min_length=1, max_length=255)


class RegisterResponse(BaseModel):
    message: str
    user_id: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    device_id: str = Field(..., min_length=1, max_length=255)


class AdminLoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class AmountRequest(BaseModel):
    amount: Decimal
    description: str = Field(..., min_length=1, max_length=255)


class UserStatusUpdate(BaseModel):
    is_active: bool


class VerifyDeviceRequest(BaseModel):
    device_id: str = Field(..., min_length=1, max_length=255)


class DeviceResponse(BaseModel):
    device_id: str
    verified: bool
    verified_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, device: DeviceTrust) -> "DeviceResponse":
        return cls(
            device_id=device.device_id,
            verified=device.verified,
            verified_at=device.verified_at,
            last_login=device.last_login,
            created_at=device.created_at,
        )


class UserResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    balance: str
    is_active: bool
    devices: list[DeviceResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            balance=format_cents(user.balance_cents),
            is_active=user.is_active,
            devices=[DeviceResponse.from_domain(device) for device in user.devices],
            created_at=user.created_at,
        )


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    device_verified: bool
    user: UserResponse


class AdminLoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    admin_id: str
    username: str

    @classmethod
    def from_domain(cls, admin: Admin, token: str) -> "AdminLoginResponse":
        return cls(token=token, admin_id=admin.id, username=admin.username)


class TransactionResponse(BaseModel):
    id: str
    type: str
    amount: str
    balance_before: str
    balance_after: str
    description: str
    status: str
    created_at: datetime

    @classmethod
    def from_domain(cls, entry: LedgerEntry) -> "TransactionResponse":
        return cls(
            id=entry.id,
            type=entry.type.value,
            amount=format_cents(entry.amount_cents),
            balance_before=format_cents(entry.balance_before_cents),
            balance_after=format_cents(entry.balance_after_cents),
            description=entry.description,
            status=entry.status.value,
            created_at=entry.created_at,
        )


class TransactionResultResponse(BaseModel):
    message: str
    transaction: TransactionResponse


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]
    pagination: Pagination

    @classmethod
    def from_domain(cls, history: HistoryPage) -> "TransactionListResponse":
        return cls(
            transactions=[TransactionResponse.from_domain(entry) for entry in history.entries],
            pagination=Pagination(page=history.page, limit=history.limit, total=history.total, pages=history.pages),
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]
    pagination: Pagination

    @classmethod
    def from_domain(cls, page: UserPage) -> "UserListResponse":
        return cls(
            users=[UserResponse.from_domain(user) for user in page.users],
            pagination=Pagination(page=page.page, limit=page.limit, total=page.total, pages=page.pages),
        )


class UserDetailResponse(BaseModel):
    user: UserResponse
    recent_transactions: list[TransactionResponse]

    @classmethod
    def from_domain(cls, detail: UserDetail) -> "UserDetailResponse":
        return cls(
            user=UserResponse.from_domain(detail.user),
            recent_transactions=[TransactionResponse.from_domain(entry) for entry in detail.recent_transactions],
        )


class VerifyDeviceResponse(BaseModel):
    message: str
    device: DeviceResponse
    user: UserResponse


class RecentTransactionResponse(TransactionResponse):
    user_id: str
    first_name: str
    last_name: str
    email: str

    @classmethod
    def from_activity(cls, activity: RecentActivity) -> "RecentTransactionResponse":
        base = TransactionResponse.from_domain(activity.entry)
        return cls(
            **base.model_dump(),
            user_id=activity.entry.user_id,
            first_name=activity.first_name,
            last_name=activity.last_name,
            email=activity.email,
        )


class DashboardStatsResponse(BaseModel):
    total_users: int
    active_users: int
    pending_devices: int
    total_balance: str
    recent_transactions: list[RecentTransactionResponse]

    @classmethod
    def from_domain(cls, stats: DashboardStats) -> "DashboardStatsResponse":
        return cls(
            total_users=stats.total_users,
            active_users=stats.active_users,
            pending_devices=stats.pending_devices,
            total_balance=format_cents(stats.total_balance_cents),
            recent_transactions=[RecentTransactionResponse.from_activity(item) for item in stats.recent_transactions],
        )


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


__all__ = [
    "AdminLoginRequest",
    "AdminLoginResponse",
    "AmountRequest",
    "DashboardStatsResponse",
    "DeviceResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "Pagination",
    "RecentTransactionResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TransactionListResponse",
    "TransactionResponse",
    "TransactionResultResponse",
    "UserDetailResponse",
    "UserListResponse",
    "UserResponse",
    "UserStatusUpdate",
    "VerifyDeviceRequest",
    "VerifyDeviceResponse",
]
