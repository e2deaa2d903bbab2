"""Domain modules."""

from . import admins, auth, devices, ledger, users

__all__ = ["admins", "auth", "devices", "ledger", "users"]
