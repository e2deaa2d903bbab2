"""SQLAlchemy-backed repository implementations."""

from .admin_repository import SqlAdminRepository
from .device_repository import SqlDeviceRepository
from .ledger_repository import SqlLedgerRepository
from .user_repository import SqlUserRepository

__all__ = [
    "SqlAdminRepository",
    "SqlDeviceRepository",
    "SqlLedgerRepository",
    "SqlUserRepository",
]
