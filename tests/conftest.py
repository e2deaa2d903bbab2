import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from balance_server.core.config import DatabaseSettings, SecuritySettings, Settings
from balance_server.core.security import TokenIssuer
from balance_server.infrastructure.database import init_db
from balance_server.infrastructure.database.repositories import (
    SqlAdminRepository,
    SqlDeviceRepository,
    SqlLedgerRepository,
    SqlUserRepository,
)
from balance_server.infrastructure.database.session import build_engine, build_session_factory
from balance_server.interfaces.http.deps import get_app_settings, get_db_session
from balance_server.main import create_app
from balance_server.modules.admins import AdminService
from balance_server.modules.devices import DeviceTrustService
from balance_server.modules.ledger import LedgerService
from balance_server.modules.users import RegistrationInput, UserService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
USER_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'balance.db'}"),
        security=SecuritySettings(secret_key="test-secret-key", bcrypt_rounds=4),
    )


@pytest.fixture
async def engine(settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def tokens(settings):
    return TokenIssuer(settings.security)


@pytest.fixture
def user_service(session, settings):
    return UserService(SqlUserRepository(session), password_rounds=settings.security.bcrypt_rounds)


@pytest.fixture
def device_service(session):
    return DeviceTrustService(SqlDeviceRepository(session))


@pytest.fixture
def ledger_service(session, settings):
    return LedgerService(SqlLedgerRepository(session), settings.ledger)


@pytest.fixture
def admin_service(session, settings, user_service, device_service, ledger_service, tokens):
    return AdminService(
        repository=SqlAdminRepository(session),
        users=user_service,
        devices=device_service,
        ledger=ledger_service,
        tokens=tokens,
        password_rounds=settings.security.bcrypt_rounds,
    )


@pytest.fixture
def registration():
    """Build a unique registration payload."""

    def _build(**overrides):
        suffix = uuid.uuid4().hex[:8]
        data = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": f"ada_{suffix}@example.com",
            "phone": f"+1555{suffix}",
            "password": USER_PASSWORD,
            "device_id": f"device-{suffix}",
        }
        data.update(overrides)
        return data

    return _build


@pytest.fixture
async def verified_user(session, user_service, device_service, registration):
    """A registered user whose first device has been verified."""
    payload = registration()
    user = await user_service.register(RegistrationInput(**payload))
    await device_service.verify_device(user.id, payload["device_id"])
    await session.commit()
    return await user_service.require_user(user.id)


@pytest.fixture
async def app(settings, session_factory):
    app = create_app()

    async def _session_override():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session_override
    app.dependency_overrides[get_app_settings] = lambda: settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def admin_account(session, admin_service):
    admin = await admin_service.create_admin(ADMIN_USERNAME, ADMIN_PASSWORD)
    await session.commit()
    return admin


@pytest.fixture
async def admin_headers(client, admin_account):
    response = await client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
