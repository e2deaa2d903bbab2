"""Repository protocol for device trust persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import DeviceTrust


class DeviceRepository(Protocol):
    async def user_exists(self, user_id: str) -> bool:
        ...

    async def list_for_user(self, user_id: str) -> Sequence[DeviceTrust]:
        ...

    async def add_device(self, user_id: str, device_id: str) -> DeviceTrust:
        ...

    async def mark_verified(self, user_id: str, device_id: str, timestamp: datetime) -> DeviceTrust | None:
        ...

    async def set_last_login(self, user_id: str, device_id: str, timestamp: datetime) -> None:
        ...
