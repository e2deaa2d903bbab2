"""Device trust domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional


class DeviceState(str, Enum):
    UNKNOWN = "unknown"
    UNVERIFIED = "unverified"
    VERIFIED = "verified"


@dataclass(slots=True)
class DeviceTrust:
    device_id: str
    verified: bool
    verified_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def state(self) -> DeviceState:
        return DeviceState.VERIFIED if self.verified else DeviceState.UNVERIFIED


def find_device(devices: Iterable[DeviceTrust], device_id: str) -> DeviceTrust | None:
    """Return the first record for ``device_id``, preferring a verified one."""
    matches = [device for device in devices if device.device_id == device_id]
    for device in matches:
        if device.verified:
            return device
    return matches[0] if matches else None


def device_state(devices: Iterable[DeviceTrust], device_id: str) -> DeviceState:
    device = find_device(devices, device_id)
    return device.state if device else DeviceState.UNKNOWN
