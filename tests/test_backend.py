import base64

import pytest

from android_ui_assist.adb.errors import BridgeError, BridgeErrorKind
from android_ui_assist.adb.invoker import AdbInvoker
from android_ui_assist.mcp_server.backend import (
    DEFAULT_CONFIG,
    build_invoker,
    capture_screenshot_response,
    list_devices_response,
    load_server_config,
)

from conftest import DEVICES_HEADER, make_png


def test_capture_without_device_id_reports_default(emulator, monkeypatch):
    monkeypatch.setattr("android_ui_assist.adb.screenshot.time.time", lambda: 1634567890.5)

    result = capture_screenshot_response(invoker=AdbInvoker())

    assert result == {
        "data": base64.b64encode(make_png(100, 200)).decode(),
        "format": "png",
        "width": 100,
        "height": 200,
        "deviceId": "default",
        "timestamp": 1634567890500,
    }
    assert emulator.commands()[-1] == ["-s", "emulator-5554", "exec-out", "screencap", "-p"]


def test_capture_with_device_id_reports_it(emulator):
    result = capture_screenshot_response("emulator-5554", AdbInvoker())

    assert result["deviceId"] == "emulator-5554"


def test_capture_can_report_resolved_device(emulator):
    result = capture_screenshot_response(invoker=AdbInvoker(), report_resolved_device_id=True)

    assert result["deviceId"] == "emulator-5554"


def test_capture_with_no_devices(fake_adb):
    fake_adb.respond("devices -l", stdout=DEVICES_HEADER)

    with pytest.raises(BridgeError) as exc_info:
        capture_screenshot_response(invoker=AdbInvoker())

    assert exc_info.value.kind is BridgeErrorKind.NO_DEVICES_FOUND


def test_list_with_no_devices(fake_adb):
    fake_adb.respond("devices -l", stdout=DEVICES_HEADER)

    with pytest.raises(BridgeError) as exc_info:
        list_devices_response(AdbInvoker())

    assert exc_info.value.kind is BridgeErrorKind.NO_DEVICES_FOUND


@pytest.mark.parametrize("width, height", [(0, 200), (100, 0)])
def test_capture_rejects_zero_dimensions(fake_adb, width, height):
    fake_adb.respond("devices -l", stdout=DEVICES_HEADER + "A device\n")
    fake_adb.respond("-s A exec-out screencap -p", stdout=make_png(width, height))

    with pytest.raises(BridgeError) as exc_info:
        capture_screenshot_response(invoker=AdbInvoker())

    assert exc_info.value.kind is BridgeErrorKind.INVALID_IMAGE


def test_capture_rejects_non_png(fake_adb):
    fake_adb.respond("devices -l", stdout=DEVICES_HEADER + "A device\n")
    fake_adb.respond("-s A exec-out screencap -p", stdout=b"/system/bin/sh: screencap: not found\n" * 2)

    with pytest.raises(BridgeError) as exc_info:
        capture_screenshot_response(invoker=AdbInvoker())

    assert exc_info.value.kind is BridgeErrorKind.INVALID_IMAGE


def test_list_devices_response(fake_adb):
    fake_adb.respond(
        "devices -l",
        stdout=DEVICES_HEADER
        + "emulator-5554\tdevice product:sdk_gphone_x86 model:sdk_gphone_x86 transport_id:1\n"
        + "R58M123ABC\tunauthorized usb:1-1 transport_id:3\n",
    )

    result = list_devices_response(AdbInvoker())

    assert result == {
        "devices": [
            {
                "id": "emulator-5554",
                "status": "device",
                "model": "sdk_gphone_x86",
                "product": "sdk_gphone_x86",
                "transportId": "1",
            },
            {"id": "R58M123ABC", "status": "unauthorized", "transportId": "3", "usb": "1-1"},
        ]
    }


def test_default_config_is_shipped():
    config = load_server_config()

    assert config["server"]["transport"] == "stdio"
    assert config["adb"]["timeout_ms"] == 5000
    assert config["screenshot"]["report_resolved_device_id"] is False


def test_config_file_overrides_defaults(tmp_path):
    path = tmp_path / "server_config.yaml"
    path.write_text("adb:\n  path: /opt/adb\n  timeout_ms: 9000\nscreenshot:\n  report_resolved_device_id: true\n")

    config = load_server_config(str(path))

    assert config["adb"] == {"path": "/opt/adb", "timeout_ms": 9000, "probe_timeout_ms": 5000}
    assert config["screenshot"]["report_resolved_device_id"] is True
    assert config["server"] == DEFAULT_CONFIG["server"]
    assert DEFAULT_CONFIG["adb"]["path"] == "adb"


def test_config_is_cached(tmp_path):
    path = tmp_path / "server_config.yaml"
    path.write_text("server:\n  port: 9000\n")

    first = load_server_config(str(path))
    second = load_server_config()

    assert second is first
    assert second["server"]["port"] == 9000


@pytest.mark.parametrize("content", [None, "adb: [unclosed\n"])
def test_unusable_config_falls_back_to_defaults(tmp_path, content):
    path = tmp_path / "server_config.yaml"
    if content is not None:
        path.write_text(content)

    assert load_server_config(str(path)) == DEFAULT_CONFIG


def test_build_invoker_from_config():
    config = {"adb": {"path": "/opt/adb", "timeout_ms": "1500", "probe_timeout_ms": 300}}

    invoker = build_invoker(config)

    assert invoker.adb_path == "/opt/adb"
    assert invoker.default_timeout_ms == 1500
    assert invoker.probe_timeout_ms == 300


def test_responses_use_configured_adb(tmp_path, fake_adb):
    path = tmp_path / "server_config.yaml"
    path.write_text("adb:\n  path: /opt/adb\nscreenshot:\n  report_resolved_device_id: true\n")
    load_server_config(str(path))
    fake_adb.respond("devices -l", stdout=DEVICES_HEADER + "A device\n")
    fake_adb.respond("-s A exec-out screencap -p", stdout=make_png(10, 20))

    result = capture_screenshot_response()

    assert result["deviceId"] == "A"
    assert {call[0] for call in fake_adb.calls} == {"/opt/adb"}


def test_explicit_config_path_replaces_cached_config(tmp_path):
    path = tmp_path / "server_config.yaml"
    path.write_text("adb:\n  path: /opt/adb\n")

    assert load_server_config()["adb"]["path"] == "adb"
    assert load_server_config(str(path))["adb"]["path"] == "/opt/adb"
    assert load_server_config()["adb"]["path"] == "/opt/adb"
    assert build_invoker().adb_path == "/opt/adb"
