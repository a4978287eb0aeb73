"""Tests for the QTimer-backed scheduler."""

import pytest
from PyQt6.QtTest import QTest

from timertronics.timer.scheduler import QtScheduler


@pytest.mark.usefixtures("qapp")
class TestQtScheduler:

    def test_repeating_handle_is_active(self):
        handle = QtScheduler().schedule(1.0, True, lambda: None)
        assert handle.active is True
        handle.cancel()
        assert handle.active is False

    def test_cancel_twice_is_safe(self):
        handle = QtScheduler().schedule(1.0, True, lambda: None)
        handle.cancel()
        handle.cancel()
        assert handle.active is False

    def test_one_shot_fires_once(self):
        calls = []
        handle = QtScheduler().schedule(0.01, False, lambda: calls.append(1))
        QTest.qWait(100)
        assert calls == [1]
        assert handle.active is False

    def test_repeating_fires_until_cancelled(self):
        calls = []
        handle = QtScheduler().schedule(0.01, True, lambda: calls.append(1))
        QTest.qWait(100)
        handle.cancel()
        fired = len(calls)
        QTest.qWait(50)
        assert fired >= 2
        assert len(calls) == fired

    def test_cancelled_one_shot_never_fires(self):
        calls = []
        handle = QtScheduler().schedule(0.01, False, lambda: calls.append(1))
        handle.cancel()
        QTest.qWait(50)
        assert calls == []
