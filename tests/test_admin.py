import pytest

from balance_server.core.errors import InvalidCredentialError
from balance_server.modules.admins import AdminAlreadyExistsError
from balance_server.modules.users import RegistrationInput, UserNotFoundError

from .conftest import ADMIN_PASSWORD, ADMIN_USERNAME


async def test_admin_login_issues_admin_token(session, admin_service, admin_account, tokens):
    admin, token = await admin_service.login(ADMIN_USERNAME, ADMIN_PASSWORD)
    await session.commit()

    principal = tokens.decode(token)
    assert principal.is_admin
    assert principal.subject == admin.id
    assert (await admin_service.get_admin(admin.id)).last_login_at is not None


async def test_admin_login_rejects_bad_password(admin_service, admin_account):
    with pytest.raises(InvalidCredentialError):
        await admin_service.login(ADMIN_USERNAME, "wrong")
    with pytest.raises(InvalidCredentialError):
        await admin_service.login("ghost", ADMIN_PASSWORD)


async def test_duplicate_admin_is_rejected(admin_service, admin_account):
    with pytest.raises(AdminAlreadyExistsError):
        await admin_service.create_admin(ADMIN_USERNAME, "another-password")


async def test_list_users_searches_case_insensitively(session, admin_service, user_service, registration):
    await user_service.register(RegistrationInput(**registration(first_name="Grace", last_name="Hopper")))
    await user_service.register(RegistrationInput(**registration(first_name="Alan", last_name="Turing")))
    await session.commit()

    everyone = await admin_service.list_users(1, 10, None)
    hoppers = await admin_service.list_users(1, 10, "hOpPeR")

    assert everyone.total == 2
    assert [user.last_name for user in hoppers.users] == ["Hopper"]
    assert hoppers.total == 1


async def test_list_users_is_newest_first_and_paginated(session, admin_service, user_service, registration):
    for name in ("First", "Second", "Third"):
        await user_service.register(RegistrationInput(**registration(first_name=name)))
    await session.commit()

    page = await admin_service.list_users("1", "2", "")

    assert [user.first_name for user in page.users] == ["Third", "Second"]
    assert page.pages == 2


async def test_user_detail_includes_recent_transactions(session, admin_service, ledger_service, verified_user):
    for index in range(12):
        await ledger_service.deposit(verified_user.id, "1", f"Deposit {index}")
    await session.commit()

    detail = await admin_service.get_user_detail(verified_user.id)

    assert detail.user.balance_cents == 1200
    assert len(detail.recent_transactions) == 10
    assert detail.recent_transactions[0].description == "Deposit 11"

    with pytest.raises(UserNotFoundError):
        await admin_service.get_user_detail("missing")


async def test_dashboard_stats(session, admin_service, user_service, ledger_service, verified_user, registration):
    pending = await user_service.register(RegistrationInput(**registration()))
    await user_service.set_active(pending.id, False)
    await ledger_service.deposit(verified_user.id, "12.34", "Top up")
    await session.commit()

    stats = await admin_service.dashboard_stats()

    assert stats.total_users == 2
    assert stats.active_users == 1
    assert stats.pending_devices == 1
    assert stats.total_balance_cents == 1234
    assert len(stats.recent_transactions) == 1
    assert stats.recent_transactions[0].email == verified_user.email


async def test_admin_http_endpoints(client, admin_headers, registration):
    payload = registration(first_name="Katherine")
    created = await client.post("/api/auth/register", json=payload)
    user_id = created.json()["user_id"]

    listing = await client.get("/api/admin/users", params={"search": "kath"}, headers=admin_headers)
    detail = await client.get(f"/api/admin/users/{user_id}", headers=admin_headers)
    missing = await client.get("/api/admin/users/does-not-exist", headers=admin_headers)
    unknown_device = await client.post(
        f"/api/admin/users/{user_id}/verify-device", json={"device_id": "nope"}, headers=admin_headers
    )
    stats = await client.get("/api/admin/dashboard/stats", headers=admin_headers)

    assert listing.status_code == 200
    assert [user["id"] for user in listing.json()["users"]] == [user_id]
    assert listing.json()["pagination"]["total"] == 1
    assert detail.json()["user"]["email"] == payload["email"]
    assert detail.json()["recent_transactions"] == []
    assert missing.status_code == 404
    assert missing.json()["error"] == "USER_NOT_FOUND"
    assert unknown_device.status_code == 404
    assert unknown_device.json()["error"] == "DEVICE_NOT_FOUND"
    assert stats.status_code == 200
    assert stats.json()["pending_devices"] == 1
    assert stats.json()["total_balance"] == "0.00"


async def test_admin_login_endpoint(client, admin_account):
    ok = await client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    bad = await client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": "nope"})

    assert ok.status_code == 200
    assert ok.json()["username"] == ADMIN_USERNAME
    assert ok.json()["admin_id"] == admin_account.id
    assert bad.status_code == 401
    assert bad.json()["error"] == "INVALID_CREDENTIAL"
