"""Reusable FastAPI dependencies."""

from .auth import get_current_admin, get_current_principal, get_current_user
from .database import get_db_session
from .services import (
    get_admin_service,
    get_app_settings,
    get_auth_service,
    get_device_trust_service,
    get_ledger_service,
    get_token_issuer,
    get_user_service,
)

__all__ = [
    "get_db_session",
    "get_app_settings",
    "get_token_issuer",
    "get_user_service",
    "get_device_trust_service",
    "get_ledger_service",
    "get_auth_service",
    "get_admin_service",
    "get_current_principal",
    "get_current_user",
    "get_current_admin",
]
