"""Account specific exceptions."""

from balance_server.core.errors import AuthError, ConflictError, ErrorKind, NotFoundError


class DuplicateIdentityError(ConflictError):
    """Raised when the email or phone is already registered."""

    kind = ErrorKind.DUPLICATE_IDENTITY
    default_message = "User with this email or phone already exists"


class UserNotFoundError(NotFoundError):
    """Raised when the requested user cannot be found."""

    kind = ErrorKind.USER_NOT_FOUND
    default_message = "User not found"


class UserInactiveError(AuthError):
    """Raised when an inactive user authenticates or transacts."""

    kind = ErrorKind.USER_INACTIVE
    default_message = "User account is inactive"
