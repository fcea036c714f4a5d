"""
Pytest tests for octobuild_installer.broadcast.

The native SendMessageTimeoutW call is mocked so the suite runs on any OS.
"""

from __future__ import annotations

import ctypes
from unittest.mock import ANY, MagicMock, patch

import pytest

from octobuild_installer import broadcast
from octobuild_installer.broadcast import ActionResult, broadcast_setting_change


@pytest.fixture
def mock_logger():
    with patch("octobuild_installer.broadcast.Logger") as mock:
        yield mock


def test_success_when_sender_succeeds(mock_logger):
    sender = MagicMock(return_value=1)
    assert broadcast_setting_change(sender) is ActionResult.SUCCESS
    sender.assert_called_once_with()
    mock_logger.log_error.assert_not_called()


def test_success_when_broadcast_times_out(mock_logger):
    # SendMessageTimeout returns 0 when a receiver hangs past the timeout
    sender = MagicMock(return_value=0)
    assert broadcast_setting_change(sender) is ActionResult.SUCCESS


def test_success_when_sender_raises(mock_logger):
    sender = MagicMock(side_effect=OSError("user32 unavailable"))
    assert broadcast_setting_change(sender) is ActionResult.SUCCESS
    mock_logger.log_error.assert_called_once()
    assert "user32 unavailable" in mock_logger.log_error.call_args.args[0]


def test_skipped_off_windows(mock_logger, capsys):
    with patch("octobuild_installer.broadcast.os") as mock_os, \
            patch("octobuild_installer.broadcast.send_message_timeout") as send:
        mock_os.name = "posix"
        assert broadcast_setting_change() is ActionResult.SUCCESS
        send.assert_not_called()
    assert "Skipping" in capsys.readouterr().out


def test_uses_native_call_on_windows(mock_logger):
    with patch("octobuild_installer.broadcast.os") as mock_os, \
            patch("octobuild_installer.broadcast.send_message_timeout", side_effect=OSError("hung")) as send:
        mock_os.name = "nt"
        assert broadcast_setting_change() is ActionResult.SUCCESS
        send.assert_called_once_with()
    mock_logger.log_error.assert_called_once()


def test_native_call_arguments():
    user32 = MagicMock()
    user32.SendMessageTimeoutW.return_value = 1
    with patch.object(ctypes, "WinDLL", create=True, return_value=user32) as win_dll:
        assert broadcast.send_message_timeout() == 1
    win_dll.assert_called_once_with("user32", use_last_error=True)
    user32.SendMessageTimeoutW.assert_called_once_with(
        0xFFFF, 0x001A, 0, "Environment", 0x0002, 5000, ANY,
    )


@pytest.mark.parametrize("sender", [
    MagicMock(return_value=1),
    MagicMock(return_value=0),
    MagicMock(side_effect=RuntimeError("access denied")),
])
def test_never_reports_failure(mock_logger, sender):
    assert broadcast_setting_change(sender) is not ActionResult.FAILURE
