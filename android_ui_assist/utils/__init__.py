"""Utility modules for android-ui-assist."""

from android_ui_assist.utils.logger import (
    debug,
    error,
    info,
    is_verbose,
    set_quiet,
    set_verbose,
    warning,
)

__all__ = [
    "debug",
    "info",
    "warning",
    "error",
    "is_verbose",
    "set_verbose",
    "set_quiet",
]
