"""Service dependency providers wiring SQL repositories into domain services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from balance_server.core.config import Settings, get_settings
from balance_server.core.security import TokenIssuer
from balance_server.infrastructure.database.repositories import (
    SqlAdminRepository,
    SqlDeviceRepository,
    SqlLedgerRepository,
    SqlUserRepository,
)
from balance_server.modules.admins import AdminService
from balance_server.modules.auth import AuthService
from balance_server.modules.devices import DeviceTrustService
from balance_server.modules.ledger import LedgerService
from balance_server.modules.users import UserService

from .database import get_db_session


def get_app_settings() -> Settings:
    return get_settings()


def get_token_issuer(settings: Settings = Depends(get_app_settings)) -> TokenIssuer:
    return TokenIssuer(settings.security)


def get_user_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> UserService:
    return UserService(SqlUserRepository(db), password_rounds=settings.security.bcrypt_rounds)


def get_device_trust_service(db: AsyncSession = Depends(get_db_session)) -> DeviceTrustService:
    return DeviceTrustService(SqlDeviceRepository(db))


def get_ledger_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> LedgerService:
    return LedgerService(SqlLedgerRepository(db), settings.ledger)


def get_auth_service(
    users: UserService = Depends(get_user_service),
    devices: DeviceTrustService = Depends(get_device_trust_service),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users=users, devices=devices, tokens=tokens)


def get_admin_service(
    db: AsyncSession = Depends(get_db_session),
    users: UserService = Depends(get_user_service),
    devices: DeviceTrustService = Depends(get_device_trust_service),
    ledger: LedgerService = Depends(get_ledger_service),
    tokens: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_app_settings),
) -> AdminService:
    return AdminService(
        repository=SqlAdminRepository(db),
        users=users,
        devices=devices,
        ledger=ledger,
        tokens=tokens,
        password_rounds=settings.security.bcrypt_rounds,
    )


__all__ = [
    "get_admin_service",
    "get_app_settings",
    "get_auth_service",
    "get_device_trust_service",
    "get_ledger_service",
    "get_token_issuer",
    "get_user_service",
]
