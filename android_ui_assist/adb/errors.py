"""Error taxonomy for the ADB bridge.

All failures raised by the bridge are ``BridgeError`` instances. The
``kind`` attribute discriminates between them. There is one
exception type; callers dispatch on ``kind`` rather than on ``isinstance``.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Optional


class BridgeErrorKind(str, Enum):
    """Closed set of bridge failure kinds."""

    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    COMMAND_FAILED = "COMMAND_FAILED"
    DEVICE_NOT_FOUND = "DEVICE_NOT_FOUND"
    DEVICE_NOT_AVAILABLE = "DEVICE_NOT_AVAILABLE"
    NO_DEVICES_FOUND = "NO_DEVICES_FOUND"
    NO_AVAILABLE_DEVICES = "NO_AVAILABLE_DEVICES"
    INVALID_IMAGE = "INVALID_IMAGE"
    CAPTURE_FAILED = "CAPTURE_FAILED"


# Codes reported to MCP clients
ERROR_CODES: Dict[BridgeErrorKind, str] = {
    BridgeErrorKind.TOOL_NOT_FOUND: "ADB_NOT_FOUND",
    BridgeErrorKind.COMMAND_FAILED: "ADB_COMMAND_FAILED",
    BridgeErrorKind.DEVICE_NOT_FOUND: "DEVICE_NOT_FOUND",
    BridgeErrorKind.DEVICE_NOT_AVAILABLE: "DEVICE_NOT_AVAILABLE",
    BridgeErrorKind.NO_DEVICES_FOUND: "NO_DEVICES_FOUND",
    BridgeErrorKind.NO_AVAILABLE_DEVICES: "NO_AVAILABLE_DEVICES",
    BridgeErrorKind.INVALID_IMAGE: "INVALID_IMAGE",
    BridgeErrorKind.CAPTURE_FAILED: "SCREENSHOT_CAPTURE_FAILED",
}

DEFAULT_SUGGESTIONS: Dict[BridgeErrorKind, str] = {
    BridgeErrorKind.TOOL_NOT_FOUND: "Please install Android SDK Platform Tools and ensure ADB is in your PATH",
    BridgeErrorKind.COMMAND_FAILED: "Check that the device is still connected and retry the command",
    BridgeErrorKind.DEVICE_NOT_FOUND: "Please check if the device is connected and authorized",
    BridgeErrorKind.DEVICE_NOT_AVAILABLE: "Unlock the device and accept the USB debugging prompt, or reconnect it",
    BridgeErrorKind.NO_DEVICES_FOUND: (
        "Please connect an Android device or start an emulator and ensure USB debugging is enabled"
    ),
    BridgeErrorKind.NO_AVAILABLE_DEVICES: "Authorize at least one connected device for USB debugging",
    BridgeErrorKind.INVALID_IMAGE: "Make sure the device screen is on and retry the capture",
    BridgeErrorKind.CAPTURE_FAILED: "Please ensure the device is connected and screen is unlocked",
}


class BridgeError(Exception):
    """Failure raised by the ADB bridge.

    Args:
        kind: Failure kind.
        message: Human readable message.
        details: Optional structured details (command, device id, ...).
        suggestion: Remediation hint. Defaults to the kind's stock suggestion.
    """

    def __init__(
        self,
        kind: BridgeErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details
        self.suggestion = suggestion if suggestion is not None else DEFAULT_SUGGESTIONS.get(kind)

    @property
    def code(self) -> str:
        return ERROR_CODES[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result

    def __repr__(self) -> str:
        return f"BridgeError({self.kind.value}, {self.message!r})"


def tool_not_found(error: Optional[str] = None) -> BridgeError:
    details = {"error": error} if error else None
    return BridgeError(
        BridgeErrorKind.TOOL_NOT_FOUND,
        "Android Debug Bridge (ADB) not found",
        details,
    )


def command_failed(command: str, error: str, **extra: Any) -> BridgeError:
    details: Dict[str, Any] = {"command": command, "error": error}
    details.update(extra)
    return BridgeError(
        BridgeErrorKind.COMMAND_FAILED,
        f"ADB command failed: {error}",
        details,
    )


def device_not_found(device_id: str) -> BridgeError:
    return BridgeError(
        BridgeErrorKind.DEVICE_NOT_FOUND,
        f"Device with ID '{device_id}' not found",
        {"deviceId": device_id},
    )


def device_not_available(device_id: str, status: str) -> BridgeError:
    return BridgeError(
        BridgeErrorKind.DEVICE_NOT_AVAILABLE,
        f"Device '{device_id}' is not available (status: {status})",
        {"deviceId": device_id, "status": status},
    )


def no_devices_found() -> BridgeError:
    return BridgeError(BridgeErrorKind.NO_DEVICES_FOUND, "No Android devices found")


def no_available_devices(devices: List[Dict[str, Any]]) -> BridgeError:
    return BridgeError(
        BridgeErrorKind.NO_AVAILABLE_DEVICES,
        "No available devices found",
        {"devices": devices},
    )


def invalid_image(reason: str, **extra: Any) -> BridgeError:
    details: Dict[str, Any] = {"reason": reason}
    details.update(extra)
    return BridgeError(BridgeErrorKind.INVALID_IMAGE, f"Invalid PNG data: {reason}", details)


def capture_failed(device_id: str, original_error: Optional[str] = None) -> BridgeError:
    details: Dict[str, Any] = {"deviceId": device_id}
    if original_error:
        details["originalError"] = original_error
    return BridgeError(
        BridgeErrorKind.CAPTURE_FAILED,
        f"Failed to capture screenshot from device '{device_id}'",
        details,
    )


def format_error_for_response(error: BaseException) -> str:
    """
    Render an exception as the JSON text sent back in an MCP error result.

    Args:
        error: Exception raised while handling a tool call.

    Returns:
        JSON string with kind, code, message and, where known, details and suggestion.
    """
    if isinstance(error, BridgeError):
        payload = error.to_dict()
    else:
        payload = {
            "kind": "INTERNAL_ERROR",
            "code": "INTERNAL_ERROR",
            "message": str(error) or error.__class__.__name__,
        }
    return json.dumps({"error": payload}, ensure_ascii=False, default=str)
