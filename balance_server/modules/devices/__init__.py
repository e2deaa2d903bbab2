"""Device trust state machine and models."""

from .exceptions import DeviceNotFoundError, DeviceNotVerifiedError
from .models import DeviceState, DeviceTrust, device_state, find_device
from .service import DeviceTrustService

__all__ = [
    "DeviceState",
    "DeviceTrust",
    "DeviceTrustService",
    "DeviceNotFoundError",
    "DeviceNotVerifiedError",
    "device_state",
    "find_device",
]
