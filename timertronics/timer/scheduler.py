"""Callback scheduling on the Qt event loop.

The registry never touches ``QTimer`` directly; it asks a scheduler for a
handle and keeps that handle in its own arena.  Anything with the same
``schedule(interval, repeating, callback)`` shape can stand in (tests use
a manual scheduler that fires callbacks on demand).
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer


class QtHandle:
    """Cancel handle around a single ``QTimer``."""

    def __init__(self, timer: QTimer) -> None:
        self._timer = timer
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled and self._timer.isActive()

    def cancel(self) -> None:
        """Stop the timer.  Safe to call more than once, including from
        inside its own callback."""
        if self._cancelled:
            return
        self._cancelled = True
        self._timer.stop()
        self._timer.deleteLater()


class QtScheduler:
    """Schedules callbacks with ``QTimer`` instances parented to *parent*."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def schedule(
        self,
        interval: float,
        repeating: bool,
        callback: Callable[[], None],
    ) -> QtHandle:
        timer = QTimer(self._parent)
        timer.setInterval(int(interval * 1000))
        timer.setSingleShot(not repeating)
        handle = QtHandle(timer)

        if repeating:
            timer.timeout.connect(callback)
        else:
            def _fire() -> None:
                handle.cancel()
                callback()
            timer.timeout.connect(_fire)

        timer.start()
        return handle
