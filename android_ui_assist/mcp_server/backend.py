"""Backend implementation for the Android UI Assist MCP server."""

import copy
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from android_ui_assist.adb.devices import Device, get_connected_devices
from android_ui_assist.adb.errors import invalid_image
from android_ui_assist.adb.invoker import DEFAULT_TIMEOUT_MS, PROBE_TIMEOUT_MS, AdbInvoker
from android_ui_assist.adb.screenshot import assemble_screenshot, capture_screenshot, get_png_dimensions
from android_ui_assist.mcp_server.schemas import DeviceListOutput, ScreenshotOutput
from android_ui_assist.utils import logger

# Reported when the caller did not name a device
DEFAULT_DEVICE_ID = "default"

DEFAULT_CONFIG: Dict[str, Any] = {
    "server": {
        "transport": "stdio",
        "host": "127.0.0.1",
        "port": 8704,
    },
    "adb": {
        "path": "adb",
        "timeout_ms": DEFAULT_TIMEOUT_MS,
        "probe_timeout_ms": PROBE_TIMEOUT_MS,
    },
    "screenshot": {
        "report_resolved_device_id": False,
    },
}

_config_cache: Optional[Dict[str, Any]] = None
_config_lock = threading.Lock()


def load_server_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load server configuration from YAML file.

    The file is merged section by section over ``DEFAULT_CONFIG``. The
    result is cached: without ``config_path`` the cached config is returned,
    an explicit ``config_path`` is always read and replaces the cache.

    Args:
        config_path: Path to server_config.yaml (default: next to this module)

    Returns:
        Dictionary containing the full configuration
    """
    global _config_cache

    with _config_lock:
        if config_path is None:
            if _config_cache is not None:
                return _config_cache
            path = Path(__file__).parent / "server_config.yaml"
        else:
            path = Path(config_path)

        _config_cache = _read_config(path)
        return _config_cache


def _read_config(path: Path) -> Dict[str, Any]:
    merged_config = copy.deepcopy(DEFAULT_CONFIG)

    if not path.exists():
        logger.warning(f"[Config] Config file not found: {path}, using defaults")
    else:
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)

            if config:
                for key, value in config.items():
                    if isinstance(value, dict) and isinstance(merged_config.get(key), dict):
                        merged_config[key].update(value)
                    else:
                        merged_config[key] = value
            logger.debug(f"[Config] Loaded config file: {path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"[Config] Failed to load config file {path}: {e}, using defaults")
            merged_config = copy.deepcopy(DEFAULT_CONFIG)

    return merged_config


def reset_config_cache() -> None:
    """Forget the cached configuration."""
    global _config_cache
    with _config_lock:
        _config_cache = None


def build_invoker(config: Optional[Dict[str, Any]] = None) -> AdbInvoker:
    """Create an ADB invoker from the ``adb`` config section."""
    adb_config = (config or load_server_config())["adb"]
    return AdbInvoker(
        adb_path=adb_config["path"],
        default_timeout_ms=int(adb_config["timeout_ms"]),
        probe_timeout_ms=int(adb_config["probe_timeout_ms"]),
    )


def assemble_device_list(devices: List[Device]) -> Dict[str, Any]:
    """Build the ``list_android_devices`` response."""
    result = {"devices": [device.to_dict() for device in devices]}
    return DeviceListOutput.model_validate(result).model_dump(exclude_none=True)


def list_devices_response(invoker: Optional[AdbInvoker] = None) -> Dict[str, Any]:
    """
    List connected devices.

    Raises:
        BridgeError: NO_DEVICES_FOUND, TOOL_NOT_FOUND or COMMAND_FAILED.
    """
    invoker = invoker or build_invoker()
    return assemble_device_list(get_connected_devices(invoker))


def capture_screenshot_response(
    device_id: Optional[str] = None,
    invoker: Optional[AdbInvoker] = None,
    report_resolved_device_id: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Capture a screenshot and build the ``take_android_screenshot`` response.

    Args:
        device_id: Optional device to capture from. Defaults to the first ready device.
        invoker: ADB invoker (default: built from config).
        report_resolved_device_id: Report the id of the device actually used
            when ``device_id`` is omitted, instead of ``"default"``. Falls back
            to ``screenshot.report_resolved_device_id`` in the config.

    Returns:
        Dictionary with data (base64), format, width, height, deviceId, timestamp.

    Raises:
        BridgeError: Any bridge failure, kind preserved.
    """
    if invoker is None or report_resolved_device_id is None:
        config = load_server_config()
        invoker = invoker or build_invoker(config)
        if report_resolved_device_id is None:
            report_resolved_device_id = bool(config["screenshot"]["report_resolved_device_id"])

    image_bytes, device = capture_screenshot(device_id, invoker)
    width, height = get_png_dimensions(image_bytes)
    if width == 0 or height == 0:
        raise invalid_image("zero image dimensions", width=width, height=height)

    if device_id:
        reported_id = device_id
    elif report_resolved_device_id:
        reported_id = device.id
    else:
        reported_id = DEFAULT_DEVICE_ID

    screenshot = assemble_screenshot(image_bytes, width, height, reported_id)
    return ScreenshotOutput.model_validate(screenshot.to_response()).model_dump()
