"""Device trust specific exceptions."""

from balance_server.core.errors import AuthError, ErrorKind, NotFoundError


class DeviceNotVerifiedError(AuthError):
    """Raised when a user principal presents a device an admin has not verified."""

    kind = ErrorKind.DEVICE_NOT_VERIFIED
    default_message = "Device not verified. Please contact admin."


class DeviceNotFoundError(NotFoundError):
    """Raised when the user has no record for the requested device."""

    kind = ErrorKind.DEVICE_NOT_FOUND
    default_message = "Device not found"
