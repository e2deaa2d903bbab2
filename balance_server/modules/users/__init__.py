"""User account services and models."""

from .exceptions import DuplicateIdentityError, UserInactiveError, UserNotFoundError
from .models import RegistrationInput, User, UserPage
from .service import UserService, normalize_email

__all__ = [
    "User",
    "UserPage",
    "RegistrationInput",
    "UserService",
    "DuplicateIdentityError",
    "UserInactiveError",
    "UserNotFoundError",
    "normalize_email",
]
