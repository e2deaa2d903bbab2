"""Authentication gate for protected routes."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from balance_server.core.errors import InvalidCredentialError
from balance_server.core.security import Principal, TokenIssuer
from balance_server.modules.admins import Admin, AdminRequiredError, AdminService, UserPrincipalRequiredError
from balance_server.modules.devices import DeviceTrustService
from balance_server.modules.users import User, UserInactiveError, UserService

from .services import get_admin_service, get_device_trust_service, get_token_issuer, get_user_service

security = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise InvalidCredentialError("Access denied. No token provided.")
    return tokens.decode(credentials.credentials)


async def get_current_user(
    principal: Principal = Depends(get_current_principal),
    users: UserService = Depends(get_user_service),
    devices: DeviceTrustService = Depends(get_device_trust_service),
) -> User:
    """Resolve a user principal whose account is active and whose device is trusted."""
    if principal.is_admin:
        raise UserPrincipalRequiredError()

    user = await users.get_by_id(principal.subject)
    if user is None:
        raise InvalidCredentialError()
    if not user.is_active:
        raise UserInactiveError()

    devices.require_verified_device(user, principal.device_id)
    return user


async def get_current_admin(
    principal: Principal = Depends(get_current_principal),
    admins: AdminService = Depends(get_admin_service),
) -> Admin:
    if not principal.is_admin:
        raise AdminRequiredError()

    admin = await admins.get_admin(principal.subject)
    if admin is None or not admin.is_active:
        raise InvalidCredentialError()
    return admin


__all__ = ["get_current_admin", "get_current_principal", "get_current_user", "security"]
