"""Screenshot utilities for Android device."""

import base64
import struct
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from android_ui_assist.adb.devices import Device, get_connected_devices, resolve_device
from android_ui_assist.adb.errors import BridgeError, capture_failed, invalid_image
from android_ui_assist.adb.invoker import AdbInvoker

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PNG_MIN_HEADER_SIZE = 24


@dataclass
class Screenshot:
    """Screenshot data structure."""
    image_bytes: bytes
    width: int
    height: int
    device_id: str
    format: str = "png"
    captured_at_millis: int = field(default_factory=lambda: int(time.time() * 1000))

    @property
    def base64_data(self) -> str:
        return binary_to_base64(self.image_bytes)

    def to_response(self) -> Dict[str, Any]:
        return {
            "data": self.base64_data,
            "format": self.format,
            "width": self.width,
            "height": self.height,
            "deviceId": self.device_id,
            "timestamp": self.captured_at_millis,
        }


def get_png_dimensions(png_data: bytes) -> Tuple[int, int]:
    """
    Read width and height from a PNG capture.

    Width and height are the big-endian uint32 fields at offsets 8 and 12,
    right after the signature. Chunks are not walked and CRCs are not
    verified.

    Args:
        png_data: Raw PNG bytes.

    Returns:
        (width, height). Zero values are returned as-is.

    Raises:
        BridgeError: INVALID_IMAGE if the buffer is too short or the signature differs.
    """
    if len(png_data) < PNG_MIN_HEADER_SIZE:
        raise invalid_image(f"expected at least {PNG_MIN_HEADER_SIZE} bytes, got {len(png_data)}", size=len(png_data))
    if png_data[:8] != PNG_SIGNATURE:
        raise invalid_image("bad PNG signature", signature=png_data[:8].hex())

    width, height = struct.unpack(">II", png_data[8:16])
    return width, height


def binary_to_base64(data: bytes) -> str:
    """Convert binary data to base64 text."""
    return base64.b64encode(data).decode("ascii")


def capture_screenshot(
    device_id: Optional[str] = None,
    invoker: Optional[AdbInvoker] = None,
) -> Tuple[bytes, Device]:
    """
    Capture a PNG screenshot from a device.

    Args:
        device_id: Optional ADB device ID. Defaults to the first ready device.
        invoker: ADB invoker to use.

    Returns:
        Raw PNG bytes and the device they were captured from.

    Raises:
        BridgeError: Listing/resolution errors unchanged, CAPTURE_FAILED when
            adb returned nothing or failed in an unexpected way.
    """
    invoker = invoker or AdbInvoker()
    try:
        device = resolve_device(get_connected_devices(invoker), device_id)

        # Capture screenshot directly to memory (avoiding file I/O)
        data = invoker.run_binary(f"-s {device.id} exec-out screencap -p")
        if not data:
            raise capture_failed(device.id)
        return data, device
    except BridgeError:
        raise
    except Exception as e:
        raise capture_failed(device_id or "unknown", str(e)) from e


def assemble_screenshot(image_bytes: bytes, width: int, height: int, device_id: str) -> Screenshot:
    """Build the outward screenshot record, stamped with the current wall-clock time."""
    return Screenshot(
        image_bytes=image_bytes,
        width=width,
        height=height,
        device_id=device_id,
        captured_at_millis=int(time.time() * 1000),
    )
