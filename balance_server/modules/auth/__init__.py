"""Registration and login workflows."""

from .models import LoginResult
from .service import AuthService

__all__ = ["AuthService", "LoginResult"]
