"""Device listing and target resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from android_ui_assist.adb.errors import (
    device_not_available,
    device_not_found,
    no_available_devices,
    no_devices_found,
)
from android_ui_assist.adb.invoker import AdbInvoker


class DeviceStatus(str, Enum):
    """Connection state reported by ``adb devices``."""

    DEVICE = "device"
    OFFLINE = "offline"
    UNAUTHORIZED = "unauthorized"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, raw: str) -> "DeviceStatus":
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


# token prefix -> Device field
_INFO_PREFIXES = (
    ("model:", "model"),
    ("product:", "product"),
    ("transport_id:", "transport_id"),
    ("usb:", "usb"),
    ("product_string:", "product_string"),
)


@dataclass(frozen=True)
class Device:
    """A device line from ``adb devices -l``."""
    id: str
    status: DeviceStatus
    raw_status: str
    model: Optional[str] = None
    product: Optional[str] = None
    transport_id: Optional[str] = None
    usb: Optional[str] = None
    product_string: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.status is DeviceStatus.DEVICE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used on the wire, skipping unset fields."""
        result: Dict[str, Any] = {"id": self.id, "status": self.raw_status}
        optional = {
            "model": self.model,
            "product": self.product,
            "transportId": self.transport_id,
            "usb": self.usb,
            "productString": self.product_string,
        }
        result.update({key: value for key, value in optional.items() if value is not None})
        return result


def parse_device_list(output: str) -> List[Device]:
    """
    Parse the output of ``adb devices -l``.

    The first line is the ``List of devices attached`` header and is always
    skipped. Lines with fewer than two tokens are ignored; unknown
    ``key:value`` tokens are ignored.

    Args:
        output: Raw command output.

    Returns:
        Devices in output order.
    """
    lines = output.strip().split("\n")
    devices = []

    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue

        parts = line.split()
        if len(parts) < 2:
            continue

        info: Dict[str, str] = {}
        for part in parts[2:]:
            for prefix, field_name in _INFO_PREFIXES:
                if part.startswith(prefix):
                    info[field_name] = part[len(prefix):]
                    break

        devices.append(
            Device(
                id=parts[0],
                status=DeviceStatus.from_raw(parts[1]),
                raw_status=parts[1],
                **info,
            )
        )

    return devices


def get_connected_devices(invoker: Optional[AdbInvoker] = None) -> List[Device]:
    """
    Get the list of connected devices.

    Raises:
        BridgeError: NO_DEVICES_FOUND when adb lists nothing, or whatever the
            invoker raised.
    """
    invoker = invoker or AdbInvoker()
    devices = parse_device_list(invoker.run_text("devices -l"))
    if not devices:
        raise no_devices_found()
    return devices


def resolve_device(devices: Sequence[Device], device_id: Optional[str] = None) -> Device:
    """
    Pick the device a command should target.

    Args:
        devices: Non-empty device list.
        device_id: Explicit target. When omitted, the first ready device wins.

    Returns:
        The selected device.

    Raises:
        BridgeError: DEVICE_NOT_FOUND, DEVICE_NOT_AVAILABLE or NO_AVAILABLE_DEVICES.
    """
    if device_id:
        device = next((d for d in devices if d.id == device_id), None)
        if device is None:
            raise device_not_found(device_id)
        if not device.is_ready:
            raise device_not_available(device_id, device.raw_status)
        return device

    device = next((d for d in devices if d.is_ready), None)
    if device is None:
        raise no_available_devices([d.to_dict() for d in devices])
    return device


def get_device_info(device_id: str, invoker: Optional[AdbInvoker] = None) -> Device:
    """Look up a device by id regardless of its status."""
    for device in get_connected_devices(invoker):
        if device.id == device_id:
            return device
    raise device_not_found(device_id)
