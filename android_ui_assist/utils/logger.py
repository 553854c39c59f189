"""Console logging for android-ui-assist.

Everything is written to stderr: on the stdio transport, stdout belongs to
the MCP stream.
"""
import os
import sys

_verbose = os.getenv("ANDROID_UI_ASSIST_VERBOSE", "0") == "1"
_quiet = os.getenv("ANDROID_UI_ASSIST_QUIET", "0") == "1"


def set_verbose(enabled: bool):
    """Enable or disable debug output."""
    global _verbose
    _verbose = enabled


def set_quiet(enabled: bool):
    """Enable or disable quiet mode (warnings and errors only)."""
    global _quiet
    _quiet = enabled


def is_verbose() -> bool:
    return _verbose and not _quiet


def debug(msg: str, flush: bool = False):
    """Debug message, shown in verbose mode only."""
    if _verbose and not _quiet:
        print(msg, flush=flush, file=sys.stderr)


def info(msg: str, flush: bool = False):
    """Regular message, hidden in quiet mode."""
    if not _quiet:
        print(msg, flush=flush, file=sys.stderr)


def warning(msg: str, flush: bool = False):
    """Warning, always shown."""
    print(msg, flush=flush, file=sys.stderr)


def error(msg: str, flush: bool = False):
    """Error, always shown."""
    print(msg, flush=flush, file=sys.stderr)
