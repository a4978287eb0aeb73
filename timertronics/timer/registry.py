"""Multi-timer state machine for Timertronics.

States
------
IDLE       Editable, waiting for the user to start it.
RUNNING    Counting down one second per tick.
PAUSED     Frozen; the countdown handle stays alive but does not decrement.
FINISHED   Reached zero; shows "done" for the hold period, then goes IDLE.

Transitions
-----------
IDLE → RUNNING              (start)
RUNNING → PAUSED            (pause)
PAUSED → RUNNING            (resume)
RUNNING → FINISHED          (last tick)
any → FINISHED              (stop)
FINISHED → IDLE             (automatically, after ``hold_seconds``)

Every operation keyed by timer id quietly does nothing when the id is
unknown.  Each timer owns at most one countdown handle and at most one
pending idle reversion; both live in arenas keyed by id.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from .formatting import InvalidDuration, parse_duration
from .scheduler import QtScheduler


log = logging.getLogger(__name__)


# ── enums / state ─────────────────────────────────────────────────────────


class TimerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass
class TimerState:
    status: TimerStatus
    remaining: float
    duration: float
    created_at: datetime = field(default_factory=datetime.now)
    hovered: bool = False
    seq: int = 0  # tie-break for equal created_at


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_SECONDS = 5 * 60
HOLD_SECONDS = 10
TICK_INTERVAL = 1.0


# ── registry ──────────────────────────────────────────────────────────────


class TimerRegistry(QObject):
    """In-memory collection of countdown timers.

    Signals
    -------
    timer_added(timer_id: str)
    timer_removed(timer_id: str)
    timer_changed(timer_id: str)
        Status, value or hover flag changed.
    ticked(timer_id: str, remaining: float)
        Emitted after every decrement.
    timer_finished(timer_id: str, duration: float)
        Emitted on every move to FINISHED: the last tick, or an explicit
        ``stop`` with time still on the clock.
    """

    timer_added = pyqtSignal(str)
    timer_removed = pyqtSignal(str)
    timer_changed = pyqtSignal(str)
    ticked = pyqtSignal(str, float)
    timer_finished = pyqtSignal(str, float)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        notifier=None,
        scheduler=None,
        default_seconds: float = DEFAULT_SECONDS,
        hold_seconds: float = HOLD_SECONDS,
        seed: bool = True,
    ) -> None:
        super().__init__(parent)
        self._notifier = notifier
        self._scheduler = scheduler or QtScheduler(self)
        self._default_seconds = default_seconds
        self._hold_seconds = hold_seconds

        self._timers: dict[str, TimerState] = {}
        self._countdowns: dict[str, object] = {}
        self._reversions: dict[str, object] = {}
        self._seq = itertools.count()

        self._main_id: str | None = None
        if seed:
            self._main_id = self.create()

    # ══════════════════════════════════════════════════════════════════
    #  QUERIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def main_id(self) -> str | None:
        """Id of the seeded default timer (None once deleted)."""
        if self._main_id in self._timers:
            return self._main_id
        return None

    @property
    def can_delete(self) -> bool:
        return len(self._timers) > 1

    @property
    def default_seconds(self) -> float:
        return self._default_seconds

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, timer_id: object) -> bool:
        return timer_id in self._timers

    def get(self, timer_id: str) -> TimerState | None:
        return self._timers.get(timer_id)

    def ordered(self) -> list[tuple[str, TimerState]]:
        """``(id, state)`` pairs oldest first."""
        return sorted(
            self._timers.items(),
            key=lambda item: (item[1].created_at, item[1].seq),
        )

    def ordered_ids(self) -> list[str]:
        return [timer_id for timer_id, _ in self.ordered()]

    def has_countdown(self, timer_id: str) -> bool:
        return timer_id in self._countdowns

    def has_pending_reversion(self, timer_id: str) -> bool:
        return timer_id in self._reversions

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def create(self, initial_seconds: float | None = None) -> str:
        """Add a new IDLE timer and return its id."""
        if initial_seconds is None:
            initial_seconds = self._default_seconds
        seconds = max(0.0, float(initial_seconds))

        timer_id = uuid.uuid4().hex
        self._timers[timer_id] = TimerState(
            status=TimerStatus.IDLE,
            remaining=seconds,
            duration=seconds,
            seq=next(self._seq),
        )
        log.debug("created timer %s (%.0fs)", timer_id, seconds)
        self.timer_added.emit(timer_id)
        return timer_id

    def toggle(self, timer_id: str) -> None:
        """Start, pause or resume depending on the current status."""
        state = self._timers.get(timer_id)
        if state is None:
            return
        if state.status == TimerStatus.IDLE:
            self.start(timer_id)
        elif state.status == TimerStatus.PAUSED:
            self.resume(timer_id)
        elif state.status == TimerStatus.RUNNING:
            self.pause(timer_id)
        # FINISHED: wait for the hold period to pass

    def start(self, timer_id: str) -> None:
        """Begin counting down from the current value.

        Replaces any countdown the timer already owns, so repeated starts
        never double the decrement rate.
        """
        state = self._timers.get(timer_id)
        if state is None:
            return
        if state.remaining <= 0:
            log.debug("timer %s has nothing to count down", timer_id)
            return

        self._cancel_countdown(timer_id)
        self._cancel_reversion(timer_id)

        state.status = TimerStatus.RUNNING
        state.duration = state.remaining
        self._countdowns[timer_id] = self._scheduler.schedule(
            TICK_INTERVAL, True, lambda: self.tick(timer_id),
        )
        log.debug("started timer %s (%.0fs)", timer_id, state.duration)
        self.timer_changed.emit(timer_id)

    def pause(self, timer_id: str) -> None:
        state = self._timers.get(timer_id)
        if state is None or state.remaining <= 0:
            return
        if state.status != TimerStatus.RUNNING:
            return
        state.status = TimerStatus.PAUSED
        self.timer_changed.emit(timer_id)

    def resume(self, timer_id: str) -> None:
        state = self._timers.get(timer_id)
        if state is None or state.remaining <= 0:
            return
        if state.status != TimerStatus.PAUSED:
            return
        if timer_id not in self._countdowns:
            # Handle was lost (e.g. after shutdown); start a fresh one
            # without touching the snapshotted duration.
            self._countdowns[timer_id] = self._scheduler.schedule(
                TICK_INTERVAL, True, lambda: self.tick(timer_id),
            )
        state.status = TimerStatus.RUNNING
        self.timer_changed.emit(timer_id)

    def tick(self, timer_id: str) -> None:
        """One elapsed second.  Ignored unless the timer is RUNNING."""
        state = self._timers.get(timer_id)
        if state is None or state.status != TimerStatus.RUNNING:
            return

        state.remaining = max(0.0, state.remaining - 1)
        self.ticked.emit(timer_id, state.remaining)

        if state.remaining <= 0:
            self.stop(timer_id)
            self._notify(state.duration)

    def stop(self, timer_id: str) -> None:
        """Cancel the countdown and mark the timer FINISHED.

        A one-shot callback returns it to IDLE after the hold period.
        """
        state = self._timers.get(timer_id)
        if state is None:
            return

        self._cancel_countdown(timer_id)
        self._cancel_reversion(timer_id)
        state.status = TimerStatus.FINISHED
        self._reversions[timer_id] = self._scheduler.schedule(
            self._hold_seconds, False, lambda: self._revert_to_idle(timer_id),
        )
        log.info("timer %s finished after %.0fs", timer_id, state.duration)
        self.timer_changed.emit(timer_id)
        self.timer_finished.emit(timer_id, state.duration)

    def edit(self, timer_id: str, seconds: float) -> bool:
        """Set a new value.  Refused while the timer is RUNNING."""
        state = self._timers.get(timer_id)
        if state is None or state.status == TimerStatus.RUNNING:
            return False
        if seconds < 0:
            return False
        state.remaining = float(seconds)
        state.duration = float(seconds)
        self.timer_changed.emit(timer_id)
        return True

    def edit_text(self, timer_id: str, text: str) -> bool:
        """Parse mm:ss *text* and apply it.  False if it was rejected."""
        try:
            seconds = parse_duration(text)
        except InvalidDuration as exc:
            log.debug("rejected %r for timer %s: %s", text, timer_id, exc)
            return False
        return self.edit(timer_id, seconds)

    def delete(self, timer_id: str) -> bool:
        """Remove a timer.  The last remaining timer cannot be deleted."""
        if timer_id not in self._timers or not self.can_delete:
            return False
        self._cancel_countdown(timer_id)
        self._cancel_reversion(timer_id)
        del self._timers[timer_id]
        log.info("deleted timer %s", timer_id)
        self.timer_removed.emit(timer_id)
        return True

    def set_hovered(self, timer_id: str, hovered: bool) -> None:
        state = self._timers.get(timer_id)
        if state is None or state.hovered == hovered:
            return
        state.hovered = hovered
        self.timer_changed.emit(timer_id)

    def shutdown(self) -> None:
        """Cancel every live handle (application exit)."""
        for timer_id in list(self._countdowns):
            self._cancel_countdown(timer_id)
        for timer_id in list(self._reversions):
            self._cancel_reversion(timer_id)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _revert_to_idle(self, timer_id: str) -> None:
        self._reversions.pop(timer_id, None)
        state = self._timers.get(timer_id)
        if state is None or state.status != TimerStatus.FINISHED:
            return
        state.status = TimerStatus.IDLE
        self.timer_changed.emit(timer_id)

    def _notify(self, duration: float | None) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(duration)
        except Exception:
            log.warning("completion notification failed", exc_info=True)

    def _cancel_countdown(self, timer_id: str) -> None:
        handle = self._countdowns.pop(timer_id, None)
        if handle is not None:
            handle.cancel()

    def _cancel_reversion(self, timer_id: str) -> None:
        handle = self._reversions.pop(timer_id, None)
        if handle is not None:
            handle.cancel()
