"""One-shot ADB subprocess invocation."""

import shlex
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from android_ui_assist.adb.errors import command_failed, tool_not_found
from android_ui_assist.utils import logger

# Default timeout for ADB commands (5 seconds)
DEFAULT_TIMEOUT_MS = 5000
PROBE_TIMEOUT_MS = 5000


class InvocationOutcome(Enum):
    """How a finished ADB process is interpreted."""

    SUCCESS = "success"
    # adb sometimes exits 1 after writing a complete payload to stdout
    SUCCESS_NONZERO_EXIT = "success_nonzero_exit"
    FAILURE = "failure"


@dataclass
class InvocationResult:
    """Raw result of a finished ADB process."""
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def outcome(self) -> InvocationOutcome:
        if self.returncode == 0:
            return InvocationOutcome.SUCCESS
        if self.returncode == 1 and self.stdout:
            return InvocationOutcome.SUCCESS_NONZERO_EXIT
        return InvocationOutcome.FAILURE

    def error_message(self, command: str) -> str:
        stderr = self.stderr.decode("utf-8", errors="replace").strip()
        if stderr:
            return f"Command failed: {command}\n{stderr}"
        return f"Command failed: {command} (exit status {self.returncode})"


class AdbInvoker:
    """
    Runs ``adb`` as a one-shot blocking subprocess.

    Every call first probes the tool with ``adb version``; a failed probe
    raises ``TOOL_NOT_FOUND``. Calls are never retried.

    Args:
        adb_path: ADB executable, looked up on PATH when not absolute.
        default_timeout_ms: Timeout for regular commands.
        probe_timeout_ms: Timeout for the availability probe.
    """

    def __init__(
        self,
        adb_path: str = "adb",
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        probe_timeout_ms: int = PROBE_TIMEOUT_MS,
    ):
        self.adb_path = adb_path
        self.default_timeout_ms = default_timeout_ms
        self.probe_timeout_ms = probe_timeout_ms

    def _build_command(self, args: str) -> List[str]:
        return [self.adb_path] + shlex.split(args)

    def check_available(self) -> bool:
        """Check if ADB is installed and runnable."""
        try:
            result = subprocess.run(
                [self.adb_path, "version"],
                capture_output=True,
                timeout=self.probe_timeout_ms / 1000,
            )
        except (subprocess.TimeoutExpired, OSError):
            return False
        return result.returncode == 0

    def _ensure_available(self):
        if not self.check_available():
            raise tool_not_found()

    def _invoke(self, args: str, timeout_ms: Optional[int]) -> bytes:
        self._ensure_available()

        if timeout_ms is None:
            timeout_ms = self.default_timeout_ms
        command = self._build_command(args)
        logger.debug(f"[ADB] {' '.join(command)} (timeout {timeout_ms}ms)")

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                timeout=timeout_ms / 1000,
            )
        except subprocess.TimeoutExpired:
            raise command_failed(
                args, f"Command timed out after {timeout_ms}ms: adb {args}", timeout_ms=timeout_ms
            )
        except FileNotFoundError as e:
            # adb vanished between the probe and the real call
            raise tool_not_found(str(e))
        except OSError as e:
            raise command_failed(args, str(e))

        result = InvocationResult(
            returncode=completed.returncode,
            stdout=completed.stdout or b"",
            stderr=completed.stderr or b"",
        )
        outcome = result.outcome
        if outcome is InvocationOutcome.SUCCESS:
            return result.stdout
        elif outcome is InvocationOutcome.SUCCESS_NONZERO_EXIT:
            logger.debug(f"[ADB] exit status 1 with {len(result.stdout)} bytes on stdout, keeping output")
            return result.stdout
        else:
            raise command_failed(args, result.error_message(f"adb {args}"))

    def run_text(self, args: str, timeout_ms: Optional[int] = None) -> str:
        """
        Run an ADB command and return its stdout as text.

        Args:
            args: Arguments after ``adb``, e.g. ``"devices -l"``.
            timeout_ms: Timeout override in milliseconds.

        Returns:
            Decoded stdout.

        Raises:
            BridgeError: TOOL_NOT_FOUND or COMMAND_FAILED.
        """
        return self._invoke(args, timeout_ms).decode("utf-8", errors="replace")

    def run_binary(self, args: str, timeout_ms: Optional[int] = None) -> bytes:
        """Run an ADB command and return its raw stdout bytes."""
        return self._invoke(args, timeout_ms)
