"""Device trust state machine.

A (user, device) pair moves ``unknown -> unverified -> verified``. Logins
from unknown devices create an unverified record, only an admin can verify
it, and nothing moves a verified device back. Login itself never fails on
device grounds; the authentication gate enforces trust for every
protected request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from balance_server.modules.users.exceptions import UserNotFoundError

from .exceptions import DeviceNotFoundError, DeviceNotVerifiedError
from .models import DeviceState, DeviceTrust, find_device
from .repository import DeviceRepository

if TYPE_CHECKING:
    from balance_server.modules.users.models import User

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeviceTrustService:
    repository: DeviceRepository

    async def resolve_login(self, user: User, device_id: str) -> bool:
        """Annotate a login with the device's trust, registering unknown devices."""
        device = find_device(user.devices, device_id)
        if device is None:
            device = await self.repository.add_device(user.id, device_id)
            user.devices.append(device)
            logger.info("New unverified device %s registered for user %s", device_id, user.id)
            return device.verified

        if device.state is DeviceState.UNVERIFIED:
            return False

        now = datetime.now(timezone.utc)
        await self.repository.set_last_login(user.id, device_id, now)
        device.last_login = now
        return True

    def require_verified_device(self, user: User, device_id: str | None) -> DeviceTrust:
        device = find_device(user.devices, device_id) if device_id else None
        if device is None or not device.verified:
            raise DeviceNotVerifiedError()
        return device

    async def verify_device(self, user_id: str, device_id: str) -> DeviceTrust:
        if not await self.repository.user_exists(user_id):
            raise UserNotFoundError()

        devices = await self.repository.list_for_user(user_id)
        device = find_device(devices, device_id)
        if device is None:
            raise DeviceNotFoundError()
        if device.verified:
            return device

        verified = await self.repository.mark_verified(user_id, device_id, datetime.now(timezone.utc))
        if verified is None:
            raise DeviceNotFoundError()
        logger.info("Device %s verified for user %s", device_id, user_id)
        return verified
