"""Tray application shell for Timertronics."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QPoint, Qt
from PyQt6.QtGui import QColor, QCursor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from .audio.chime import ChimePlayer
from .notifications import Notifier
from .settings import Settings
from .timer.formatting import format_duration
from .timer.registry import TimerRegistry, TimerStatus
from .ui.menu_panel import MenuPanel


log = logging.getLogger(__name__)

APP_NAME = "Timertronics"


# ── tray‑icon image generation ────────────────────────────────────────────


def _make_tray_icon(running: bool) -> QIcon:
    """Generate a monochrome desk-clock template icon.

    - nothing running:  clock outline with hands
    - any timer running: filled clock face
    """
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)  # template image: macOS tints automatically

    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if running:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        hand_colour = QColor(0, 0, 0, 0)
        p.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        hand_colour = colour

    # Hands: minute straight up, hour towards three o'clock
    pen = QPen(hand_colour, 5)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    p.setPen(pen)
    p.drawLine(cx, cy, cx, cy - r + 10)
    p.drawLine(cx, cy, cx + r - 16, cy)
    p.end()

    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class TimerApp(QObject):
    """Owns the registry for the application session and wires it to the
    tray icon, the notifier and the popup panel."""

    def __init__(self, settings: Settings, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._settings = settings

        # ── tray icon ─────────────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(_make_tray_icon(False))
        self._tray_icon.setToolTip(APP_NAME)
        self._tray_icon.activated.connect(self._on_tray_activated)

        # ── notifier (+ chime) ────────────────────────────────────────
        chime = ChimePlayer(parent=self)
        chime.set_volume(settings.chime_volume)
        chime.set_enabled(settings.chime_enabled)
        self._notifier = Notifier(
            self._tray_icon, parent=self,
            chime=chime, enabled=settings.notifications_enabled,
        )

        # ── registry ──────────────────────────────────────────────────
        self._registry = TimerRegistry(
            self,
            notifier=self._notifier,
            default_seconds=settings.default_seconds,
            hold_seconds=settings.hold_seconds,
        )
        self._registry.timer_changed.connect(self._update_tray_state)
        self._registry.timer_removed.connect(self._update_tray_state)
        self._registry.ticked.connect(self._update_tray_state)

        # ── panel ─────────────────────────────────────────────────────
        self._panel = MenuPanel(self._registry, self._notifier)
        self._panel.setWindowFlags(Qt.WindowType.Popup)
        self._panel.setWindowTitle(APP_NAME)

        self._build_tray_menu()
        self._tray_icon.show()
        self._notifier.request_permission()

    @property
    def registry(self) -> TimerRegistry:
        return self._registry

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def panel(self) -> MenuPanel:
        return self._panel

    # ── tray ──────────────────────────────────────────────────────────────

    def _build_tray_menu(self) -> None:
        menu = QMenu()
        new_action = menu.addAction("New timer")
        new_action.triggered.connect(lambda: self._registry.create())
        menu.addSeparator()
        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self.quit)
        self._tray_menu = menu
        self._tray_icon.setContextMenu(menu)

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Left-click on tray icon → toggle the panel."""
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.toggle_panel()

    def toggle_panel(self) -> None:
        if self._panel.isVisible():
            self._panel.hide()
            return
        self._panel.adjustSize()
        anchor = self._tray_icon.geometry()
        if anchor.isValid():
            pos = QPoint(anchor.center().x() - self._panel.width() // 2, anchor.bottom())
        else:
            pos = QCursor.pos()
        self._panel.move(pos)
        self._panel.show()
        self._panel.raise_()

    def _update_tray_state(self, *_args) -> None:
        running = [
            state for _tid, state in self._registry.ordered()
            if state.status == TimerStatus.RUNNING
        ]
        self._tray_icon.setIcon(_make_tray_icon(bool(running)))
        if running:
            soonest = min(state.remaining for state in running)
            self._tray_icon.setToolTip(f"{APP_NAME}: {format_duration(soonest)}")
        else:
            self._tray_icon.setToolTip(APP_NAME)

    def quit(self) -> None:
        log.info("quitting")
        self._registry.shutdown()
        self._tray_icon.hide()
        QApplication.quit()
