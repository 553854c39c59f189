"""Shared fixtures: a scripted stand-in for the adb executable."""

import struct
import subprocess

import pytest

from android_ui_assist.mcp_server.backend import reset_config_cache

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

DEVICES_HEADER = "List of devices attached\n"
EMULATOR_LINE = "emulator-5554\tdevice product:sdk_gphone_x86 model:sdk_gphone_x86 transport_id:1\n"


def make_png(width: int, height: int) -> bytes:
    """Smallest buffer the capture validator accepts: signature, width, height, padding."""
    return PNG_SIGNATURE + struct.pack(">II", width, height) + b"\x00" * 8


class FakeAdb:
    """Replacement for ``subprocess.run`` that answers adb commands from a script."""

    def __init__(self):
        self.responses = {}
        self.calls = []
        self.probe_returncode = 0
        self.probe_error = None

    def respond(self, args, returncode=0, stdout=b"", stderr=b""):
        if isinstance(stdout, str):
            stdout = stdout.encode("utf-8")
        if isinstance(stderr, str):
            stderr = stderr.encode("utf-8")
        self.responses[tuple(args.split())] = (returncode, stdout, stderr)

    def fail_with(self, args, exc):
        self.responses[tuple(args.split())] = exc

    def commands(self):
        """adb argument lists that were run, without the version probes."""
        return [call[1:] for call in self.calls if call[1:] != ["version"]]

    def __call__(self, cmd, capture_output=False, timeout=None, **kwargs):
        self.calls.append(list(cmd))
        args = tuple(cmd[1:])

        if args == ("version",):
            if self.probe_error is not None:
                raise self.probe_error
            return subprocess.CompletedProcess(
                cmd, self.probe_returncode, b"Android Debug Bridge version 1.0.41\n", b""
            )

        if args not in self.responses:
            raise AssertionError(f"unexpected adb call: {cmd}")
        response = self.responses[args]
        if isinstance(response, BaseException):
            raise response
        returncode, stdout, stderr = response
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)


@pytest.fixture
def fake_adb(monkeypatch):
    fake = FakeAdb()
    monkeypatch.setattr("android_ui_assist.adb.invoker.subprocess.run", fake)
    return fake


@pytest.fixture
def emulator(fake_adb):
    """One ready emulator that returns a 100x200 screenshot."""
    fake_adb.respond("devices -l", stdout=DEVICES_HEADER + EMULATOR_LINE)
    fake_adb.respond("-s emulator-5554 exec-out screencap -p", stdout=make_png(100, 200))
    return fake_adb


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config_cache()
    yield
    reset_config_cache()
