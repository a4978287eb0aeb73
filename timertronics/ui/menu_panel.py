"""Popup panel shown from the tray icon.

Layout (top → bottom):
    - "Get permission" button (until notifications are allowed)
    - Scrollable list of timer rows, oldest first
    - "+" button that adds a timer
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QPushButton, QScrollArea, QFrame,
)

from ..notifications import Notifier
from ..timer.registry import TimerRegistry
from .timer_row import TimerRow


class MenuPanel(QWidget):
    """Timer list bound to a :class:`TimerRegistry`."""

    def __init__(
        self,
        registry: TimerRegistry,
        notifier: Notifier,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._registry = registry
        self._notifier = notifier
        self._rows: dict[str, TimerRow] = {}
        self._build_ui()
        self._connect_signals()
        self._rebuild_rows()
        self._update_permission_view(notifier.has_permission)

    @property
    def rows(self) -> list[TimerRow]:
        """Rows in display order."""
        return [self._rows[tid] for tid in self._registry.ordered_ids()
                if tid in self._rows]

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 14, 0, 10)
        root.setSpacing(4)
        root.setAlignment(Qt.AlignmentFlag.AlignHCenter)

        self._permission_btn = QPushButton("Get permission", self)
        root.addWidget(self._permission_btn)

        self._scroll = QScrollArea(self)
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.Shape.NoFrame)
        self._scroll.setMaximumHeight(200)
        self._scroll.setFixedWidth(160)

        self._list = QWidget(self._scroll)
        self._list_layout = QVBoxLayout(self._list)
        self._list_layout.setContentsMargins(0, 0, 20, 0)
        self._list_layout.setSpacing(0)
        self._list_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self._scroll.setWidget(self._list)
        root.addWidget(self._scroll)

        self._add_btn = QPushButton("+", self)
        self._add_btn.setObjectName("addButton")
        self._add_btn.setToolTip("New timer")
        root.addWidget(self._add_btn, alignment=Qt.AlignmentFlag.AlignHCenter)

    def _connect_signals(self) -> None:
        self._permission_btn.clicked.connect(self.request_permission)
        self._add_btn.clicked.connect(lambda: self._registry.create())
        self._registry.timer_added.connect(self._on_timer_added)
        self._registry.timer_removed.connect(self._on_timer_removed)
        self._notifier.permission_changed.connect(self._update_permission_view)

    # ── slots ─────────────────────────────────────────────────────────────

    def request_permission(self) -> None:
        self._notifier.request_permission()

    def _on_timer_added(self, timer_id: str) -> None:
        self._rebuild_rows()

    def _on_timer_removed(self, timer_id: str) -> None:
        row = self._rows.pop(timer_id, None)
        if row is not None:
            row.detach()
            self._list_layout.removeWidget(row)
            row.setParent(None)
            row.deleteLater()

    def _update_permission_view(self, granted: bool) -> None:
        self._permission_btn.setVisible(not granted)
        self._scroll.setVisible(granted)

    # ── rows ──────────────────────────────────────────────────────────────

    def _rebuild_rows(self) -> None:
        """Create missing rows and lay everything out by creation time."""
        for timer_id in self._registry.ordered_ids():
            if timer_id not in self._rows:
                self._rows[timer_id] = TimerRow(self._registry, timer_id, self._list)
        for row in self.rows:
            self._list_layout.removeWidget(row)
            self._list_layout.addWidget(row)
