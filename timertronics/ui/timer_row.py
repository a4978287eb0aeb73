"""One timer row in the menu panel.

Layout (left → right):
    - Hourglass icon; turns into a trash can on hover when the row may
      be deleted, and deletes the timer when clicked
    - mm:ss input (locked while running)
    - Start / pause button, replaced by a check mark while finished
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QLabel, QLineEdit, QPushButton

from ..timer.formatting import format_duration
from ..timer.registry import TimerRegistry, TimerStatus


HOURGLASS = "⌛"
TRASH = "\U0001f5d1"
PLAY = "▶"
PAUSE = "❚❚"
CHECK = "✓"


class HoverIcon(QLabel):
    """Label that reports pointer enter/leave and clicks."""

    hover_changed = pyqtSignal(bool)
    clicked = pyqtSignal()

    def enterEvent(self, event) -> None:  # type: ignore[override]
        self.hover_changed.emit(True)
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self.hover_changed.emit(False)
        super().leaveEvent(event)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)


class TimerRow(QWidget):
    """Controls for a single timer, kept in sync with the registry."""

    def __init__(
        self,
        registry: TimerRegistry,
        timer_id: str,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._registry = registry
        self._timer_id = timer_id
        self._build_ui()
        self._connect_signals()
        self.refresh()

    @property
    def timer_id(self) -> str:
        return self._timer_id

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(20, 0, 0, 10)
        layout.setSpacing(6)

        self._icon = HoverIcon(HOURGLASS, self)
        self._icon.setStyleSheet("font-size: 18px;")
        layout.addWidget(self._icon)

        self._input = QLineEdit(self)
        self._input.setPlaceholderText("mins")
        self._input.setFixedWidth(60)
        self._input.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._input)

        self._toggle_btn = QPushButton(PLAY, self)
        self._toggle_btn.setObjectName("toggleButton")
        self._toggle_btn.setFixedSize(22, 22)
        layout.addWidget(self._toggle_btn)

        self._done_label = QLabel(CHECK, self)
        self._done_label.setFixedWidth(20)
        self._done_label.setStyleSheet("color: #A6E3A1; font-weight: 700;")
        self._done_label.setVisible(False)
        layout.addWidget(self._done_label)

    def _connect_signals(self) -> None:
        self._icon.hover_changed.connect(
            lambda hovering: self._registry.set_hovered(self._timer_id, hovering)
        )
        self._icon.clicked.connect(self._on_icon_clicked)
        self._input.editingFinished.connect(self._commit_input)
        self._input.returnPressed.connect(self._on_return)
        self._toggle_btn.clicked.connect(
            lambda: self._registry.toggle(self._timer_id)
        )

        self._registry.timer_changed.connect(self._on_registry_change)
        self._registry.ticked.connect(self._on_registry_change)
        # Icon depends on how many timers exist
        self._registry.timer_added.connect(self._on_count_changed)
        self._registry.timer_removed.connect(self._on_count_changed)

    def detach(self) -> None:
        """Disconnect from the registry before the row is thrown away."""
        self._registry.timer_changed.disconnect(self._on_registry_change)
        self._registry.ticked.disconnect(self._on_registry_change)
        self._registry.timer_added.disconnect(self._on_count_changed)
        self._registry.timer_removed.disconnect(self._on_count_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_registry_change(self, timer_id: str, *_args) -> None:
        if timer_id == self._timer_id:
            self.refresh()

    def _on_count_changed(self, _timer_id: str) -> None:
        self._refresh_icon()

    def _on_icon_clicked(self) -> None:
        if self._registry.can_delete:
            self._registry.delete(self._timer_id)

    def _commit_input(self) -> None:
        # Focus-out without typing must not re-parse the rounded display
        if not self._input.isModified():
            return
        state = self._registry.get(self._timer_id)
        if state is None or state.status == TimerStatus.RUNNING:
            return
        if not self._registry.edit_text(self._timer_id, self._input.text()):
            # Rejected: put the last valid value back
            self._input.setText(format_duration(state.remaining))
        self._input.setModified(False)

    def _on_return(self) -> None:
        self._commit_input()
        self._registry.start(self._timer_id)

    # ── display ───────────────────────────────────────────────────────────

    def refresh(self) -> None:
        state = self._registry.get(self._timer_id)
        if state is None:
            return

        if not self._input.hasFocus() or state.status == TimerStatus.RUNNING:
            self._input.setText(format_duration(state.remaining))
        self._input.setEnabled(state.status != TimerStatus.RUNNING)

        finished = state.status == TimerStatus.FINISHED
        self._toggle_btn.setVisible(not finished)
        self._done_label.setVisible(finished)
        self._toggle_btn.setText(
            PAUSE if state.status == TimerStatus.RUNNING else PLAY
        )
        self._refresh_icon()

    def _refresh_icon(self) -> None:
        state = self._registry.get(self._timer_id)
        if state is None:
            return
        deletable = state.hovered and self._registry.can_delete
        self._icon.setText(TRASH if deletable else HOURGLASS)
