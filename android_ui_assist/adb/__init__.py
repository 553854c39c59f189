"""ADB bridge: invocation, device listing and screen capture."""

from android_ui_assist.adb.devices import (
    Device,
    DeviceStatus,
    get_connected_devices,
    get_device_info,
    parse_device_list,
    resolve_device,
)
from android_ui_assist.adb.errors import (
    BridgeError,
    BridgeErrorKind,
    format_error_for_response,
)
from android_ui_assist.adb.invoker import AdbInvoker, InvocationOutcome
from android_ui_assist.adb.screenshot import (
    Screenshot,
    assemble_screenshot,
    binary_to_base64,
    capture_screenshot,
    get_png_dimensions,
)

__all__ = [
    "AdbInvoker",
    "InvocationOutcome",
    "Device",
    "DeviceStatus",
    "parse_device_list",
    "get_connected_devices",
    "get_device_info",
    "resolve_device",
    "Screenshot",
    "get_png_dimensions",
    "binary_to_base64",
    "capture_screenshot",
    "assemble_screenshot",
    "BridgeError",
    "BridgeErrorKind",
    "format_error_for_response",
]
