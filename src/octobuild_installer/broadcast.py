"""
Environment change notification.

Explorer and other long-running processes only pick up a changed
environment block after a WM_SETTINGCHANGE broadcast with "Environment" as
the parameter. The broadcast is best effort: a hung top-level window is
skipped after the timeout and the result is never reported as a failure.
"""

from __future__ import annotations

import ctypes
import os
from enum import Enum
from typing import Callable, Optional

from .file_operations import Logger

HWND_BROADCAST = 0xFFFF
WM_SETTINGCHANGE = 0x001A
SMTO_ABORTIFHUNG = 0x0002
TIMEOUT_MS = 5000
ENVIRONMENT = "Environment"


class ActionResult(Enum):
    # Mirrors the installer engine result type; the broadcast only ever succeeds
    SUCCESS = 0
    FAILURE = 1


def send_message_timeout() -> int:
    from ctypes import wintypes

    user32 = ctypes.WinDLL("user32", use_last_error=True)
    send = user32.SendMessageTimeoutW
    send.argtypes = [
        wintypes.HWND, wintypes.UINT, wintypes.WPARAM, wintypes.LPCWSTR,
        wintypes.UINT, wintypes.UINT, ctypes.POINTER(ctypes.c_size_t),
    ]
    send.restype = wintypes.LPARAM
    result = ctypes.c_size_t(0)
    return send(HWND_BROADCAST, WM_SETTINGCHANGE, 0, ENVIRONMENT,
                SMTO_ABORTIFHUNG, TIMEOUT_MS, ctypes.byref(result))


def broadcast_setting_change(sender: Optional[Callable[[], int]] = None) -> ActionResult:
    """Notify top-level windows that the environment changed. Always succeeds."""
    if sender is None:
        if os.name != "nt":
            print("Skipping WM_SETTINGCHANGE broadcast: not running on Windows.")
            return ActionResult.SUCCESS
        sender = send_message_timeout
    try:
        sender()
    except Exception as e:
        Logger.log_error(f"WM_SETTINGCHANGE broadcast failed: {e}")
    return ActionResult.SUCCESS
