"""Unique-constraint recovery in the SQL repositories."""

import pytest

from balance_server.core.errors import ErrorKind
from balance_server.infrastructure.database.repositories import SqlDeviceRepository, SqlUserRepository
from balance_server.modules.users import DuplicateIdentityError


async def test_add_device_returns_row_inserted_concurrently(session, verified_user):
    device_id = verified_user.devices[0].device_id
    repository = SqlDeviceRepository(session)

    # the row already exists, as if another login inserted it first
    device = await repository.add_device(verified_user.id, device_id)

    assert device.device_id == device_id
    assert device.verified is True
    assert device.verified_at is not None
    devices = await repository.list_for_user(verified_user.id)
    assert [item.device_id for item in devices] == [device_id]


async def test_create_user_maps_unique_violation_to_duplicate_identity(session, verified_user):
    repository = SqlUserRepository(session)

    with pytest.raises(DuplicateIdentityError) as exc_info:
        await repository.create_user(
            first_name="Grace",
            last_name="Hopper",
            email=verified_user.email,
            phone="+15550000000",
            password_hash="not-used",
            device_id="device-race",
        )

    assert exc_info.value.kind is ErrorKind.DUPLICATE_IDENTITY
    assert exc_info.value.status_code == 409
    assert (await repository.get_by_id(verified_user.id)).email == verified_user.email
