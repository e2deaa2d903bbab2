"""
Create the initial admin account.

Credentials default to admin / admin123 and can be overridden with the
ADMIN_USERNAME and ADMIN_PASSWORD environment variables.
"""
import asyncio
import os

from balance_server.core.config import get_settings
from balance_server.infrastructure.database import get_session, init_db
from balance_server.infrastructure.database.repositories import (
    SqlAdminRepository,
    SqlDeviceRepository,
    SqlLedgerRepository,
    SqlUserRepository,
)
from balance_server.core.security import TokenIssuer
from balance_server.modules.admins import AdminService
from balance_server.modules.devices import DeviceTrustService
from balance_server.modules.ledger import LedgerService
from balance_server.modules.users import UserService


async def create_default_admin():
    """Create the default admin if the username is free."""
    settings = get_settings()
    username = os.environ.get("ADMIN_USERNAME", "admin")
    password = os.environ.get("ADMIN_PASSWORD", "admin123")

    await init_db()

    async for db in get_session():
        service = AdminService(
            repository=SqlAdminRepository(db),
            users=UserService(SqlUserRepository(db), settings.security.bcrypt_rounds),
            devices=DeviceTrustService(SqlDeviceRepository(db)),
            ledger=LedgerService(SqlLedgerRepository(db), settings.ledger),
            tokens=TokenIssuer(settings.security),
            password_rounds=settings.security.bcrypt_rounds,
        )

        if await service.repository.get_by_username(username) is not None:
            print(f"Admin '{username}' already exists, nothing to do")
            return

        await service.create_admin(username, password)
        await db.commit()

        print("=" * 50)
        print("Admin account created")
        print("=" * 50)
        print(f"Username: {username}")
        print(f"Password: {password}")
        print("=" * 50)
        print("Change the password after the first login!")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
