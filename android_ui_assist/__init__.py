"""Android UI Assist - ADB screenshots and device listing over MCP."""

__version__ = "1.0.0"

from android_ui_assist.adb import (
    AdbInvoker,
    BridgeError,
    BridgeErrorKind,
    Device,
    DeviceStatus,
    get_connected_devices,
    parse_device_list,
    resolve_device,
)
from android_ui_assist.mcp_server.backend import capture_screenshot_response, list_devices_response

__all__ = [
    "__version__",
    "AdbInvoker",
    "BridgeError",
    "BridgeErrorKind",
    "Device",
    "DeviceStatus",
    "get_connected_devices",
    "parse_device_list",
    "resolve_device",
    "capture_screenshot_response",
    "list_devices_response",
]
