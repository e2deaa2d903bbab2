"""Admin specific exceptions."""

from balance_server.core.errors import AuthError, ConflictError, ErrorKind


class AdminRequiredError(AuthError):
    """Raised when a non-admin principal calls an admin endpoint."""

    kind = ErrorKind.ADMIN_REQUIRED
    status_code = 403
    default_message = "Access denied. Admin privileges required."


class UserPrincipalRequiredError(AuthError):
    """Raised when an admin principal calls an endpoint that acts on the caller's own account."""

    kind = ErrorKind.USER_PRINCIPAL_REQUIRED
    status_code = 403
    default_message = "Admin access not allowed for this route."


class AdminAlreadyExistsError(ConflictError):
    kind = ErrorKind.DUPLICATE_IDENTITY
    default_message = "Admin username already exists"
