"""
Error taxonomy shared by every module.

Each error carries a stable ``kind`` that is returned to callers, so clients
can branch on the failure without parsing messages. Categories map to a
single HTTP status unless a subclass overrides it.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    USER_INACTIVE = "USER_INACTIVE"
    DEVICE_NOT_VERIFIED = "DEVICE_NOT_VERIFIED"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    USER_PRINCIPAL_REQUIRED = "USER_PRINCIPAL_REQUIRED"
    DUPLICATE_IDENTITY = "DUPLICATE_IDENTITY"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    DEVICE_NOT_FOUND = "DEVICE_NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    LEDGER_INCONSISTENT = "LEDGER_INCONSISTENT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class BalanceServerError(Exception):
    """Base error for all balance server operations."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BalanceServerError):
    """Malformed or missing input."""

    kind = ErrorKind.VALIDATION_FAILED
    status_code = 400
    default_message = "Validation failed"


class AuthError(BalanceServerError):
    """Authentication or authorization failure."""

    kind = ErrorKind.INVALID_CREDENTIAL
    status_code = 401
    default_message = "Invalid credentials"


class ConflictError(BalanceServerError):
    """Business rule rejection."""

    status_code = 409


class NotFoundError(BalanceServerError):
    """Unknown user or device."""

    status_code = 404


class StoreError(BalanceServerError):
    """Storage unavailable, timed out or concurrently modified."""

    kind = ErrorKind.STORE_UNAVAILABLE
    status_code = 503
    default_message = "Service temporarily unavailable"


class InvariantViolation(BalanceServerError):
    """A balance/ledger pair was only partially written."""

    kind = ErrorKind.LEDGER_INCONSISTENT
    status_code = 500
    default_message = "Transaction could not be recorded"


class InvalidCredentialError(AuthError):
    """Bad password, unknown identity, or an invalid or expired token."""


class StoreUnavailableError(StoreError):
    pass


__all__ = [
    "ErrorKind",
    "BalanceServerError",
    "ValidationError",
    "AuthError",
    "ConflictError",
    "NotFoundError",
    "StoreError",
    "InvariantViolation",
    "InvalidCredentialError",
    "StoreUnavailableError",
]
