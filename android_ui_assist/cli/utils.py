"""CLI helpers"""

import json

from android_ui_assist.adb.errors import BridgeError
from android_ui_assist.utils import logger


def print_error(e: BridgeError):
    """Print a bridge error with its remediation hint."""
    logger.error(f"Error [{e.kind.value}]: {e.message}")
    if e.suggestion:
        logger.error(f"  Suggestion: {e.suggestion}")
    if e.details and logger.is_verbose():
        logger.error(f"  Details: {json.dumps(e.details, ensure_ascii=False, default=str)}")


def print_devices(result):
    """Print the device list as a table."""
    devices = result["devices"]
    print(f"{len(devices)} device(s):")
    for device in devices:
        extras = [
            f"{key}={device[key]}"
            for key in ("model", "product", "transportId", "usb", "productString")
            if device.get(key)
        ]
        print(f"  {device['id']:<24} {device['status']:<14} {' '.join(extras)}")


def print_screenshot(result, output=None):
    """Print a screenshot summary."""
    print(f"Captured {result['width']}x{result['height']} {result['format']} from {result['deviceId']}")
    if output:
        print(f"Saved to: {output}")
