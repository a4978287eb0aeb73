"""Completion alerts shown through the system tray icon.

The notifier is fire-and-forget: nothing it does is allowed to feed back
into timer state.  Until permission has been granted (on Qt: a tray that
exists and can show messages) every ``notify`` call is inert.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtWidgets import QSystemTrayIcon

from .timer.formatting import format_duration


log = logging.getLogger(__name__)

FINISHED_SUBTITLE = "C'est fini"


def notification_title(duration: float | None) -> str:
    if duration is None:
        return "Timer finished"
    return f"{format_duration(duration)} minute timer"


class Notifier(QObject):
    """Raises a tray message (plus chime) when a timer completes.

    Signals
    -------
    permission_changed(granted: bool)
        Emitted whenever a permission request completes.
    """

    permission_changed = pyqtSignal(bool)

    def __init__(
        self,
        tray_icon: QSystemTrayIcon | None = None,
        parent: QObject | None = None,
        *,
        chime=None,
        enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._tray_icon = tray_icon
        self._chime = chime
        self._enabled = enabled
        self._has_permission = False

    @property
    def has_permission(self) -> bool:
        return self._has_permission

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_tray_icon(self, tray_icon: QSystemTrayIcon) -> None:
        self._tray_icon = tray_icon

    def request_permission(
        self, callback: Callable[[bool], None] | None = None,
    ) -> None:
        """Check asynchronously; *callback* gets the result exactly once."""

        def _complete() -> None:
            granted = self._check_permission()
            if not granted:
                log.info("tray messages unavailable, notifications disabled")
            self._has_permission = granted
            self.permission_changed.emit(granted)
            if callback is not None:
                callback(granted)

        QTimer.singleShot(0, _complete)

    def notify(self, duration: float | None) -> None:
        if not self._enabled or not self._has_permission:
            return
        if self._tray_icon is None:
            return

        self._tray_icon.showMessage(
            notification_title(duration),
            FINISHED_SUBTITLE,
            QSystemTrayIcon.MessageIcon.Information,
        )
        if self._chime is not None:
            self._chime.play()

    def _check_permission(self) -> bool:
        return (
            QSystemTrayIcon.isSystemTrayAvailable()
            and QSystemTrayIcon.supportsMessages()
        )
