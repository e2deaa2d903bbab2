"""Domain services for user accounts."""

from __future__ import annotations

import logging

from balance_server.core.crypto import hash_password, verify_password
from balance_server.core.errors import InvalidCredentialError
from balance_server.core.pagination import normalize_page, page_offset

from .exceptions import DuplicateIdentityError, UserInactiveError, UserNotFoundError
from .models import RegistrationInput, User, UserPage
from .repository import UserRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Encapsulates account use cases: registration, credential checks, admin listing."""

    def __init__(self, repository: UserRepository, password_rounds: int = 12) -> None:
        self._repository = repository
        self._password_rounds = password_rounds

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._repository.get_by_id(user_id)

    async def require_user(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def register(self, payload: RegistrationInput) -> User:
        """Create a user with exactly one unverified device."""
        email = normalize_email(payload.email)
        phone = payload.phone.strip()
        if await self._repository.identity_taken(email, phone):
            logger.warning("Registration rejected, identity already exists: %s", email)
            raise DuplicateIdentityError()

        user = await self._repository.create_user(
            first_name=payload.first_name.strip(),
            last_name=payload.last_name.strip(),
            email=email,
            phone=phone,
            password_hash=hash_password(payload.password, self._password_rounds),
            device_id=payload.device_id,
        )
        logger.info("User %s registered with device %s", user.id, payload.device_id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        user = await self._repository.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialError()
        if not user.is_active:
            raise UserInactiveError()
        return user

    async def list_users(self, page: object, limit: object, search: str | None = None) -> UserPage:
        page_number, page_size = normalize_page(page, limit, max_limit=MAX_PAGE_SIZE)
        term = search.strip() if search else None
        users, total = await self._repository.search_users(term or None, page_offset(page_number, page_size), page_size)
        return UserPage(users=list(users), page=page_number, limit=page_size, total=total)

    async def set_active(self, user_id: str, is_active: bool) -> User:
        user = await self._repository.set_active(user_id, is_active)
        if user is None:
            raise UserNotFoundError()
        logger.info("User %s active flag set to %s", user_id, is_active)
        return user
