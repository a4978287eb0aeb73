"""Tests for the completion notifier: template, permission gate, chime."""

import pytest

from timertronics.notifications import (
    FINISHED_SUBTITLE, Notifier, notification_title,
)

from helpers import FakeChime, FakeTrayIcon


@pytest.fixture
def tray():
    return FakeTrayIcon()


@pytest.fixture
def chime():
    return FakeChime()


@pytest.fixture
def granted(monkeypatch):
    monkeypatch.setattr(Notifier, "_check_permission", lambda self: True)


@pytest.fixture
def denied(monkeypatch):
    monkeypatch.setattr(Notifier, "_check_permission", lambda self: False)


class TestTemplate:

    def test_title_with_duration(self):
        assert notification_title(300) == "05:00 minute timer"

    def test_title_without_duration(self):
        assert notification_title(None) == "Timer finished"

    def test_subtitle(self):
        assert FINISHED_SUBTITLE == "C'est fini"


@pytest.mark.usefixtures("qapp")
class TestPermission:

    def test_starts_without_permission(self, tray):
        assert Notifier(tray).has_permission is False

    def test_request_is_async_and_cached(self, qapp, tray, granted):
        n = Notifier(tray)
        results = []
        n.request_permission(results.append)
        assert results == []  # not delivered synchronously
        qapp.processEvents()
        assert results == [True]
        assert n.has_permission is True

    def test_denied(self, qapp, tray, denied):
        n = Notifier(tray)
        results = []
        n.request_permission(results.append)
        qapp.processEvents()
        assert results == [False]
        assert n.has_permission is False

    def test_permission_changed_signal(self, qapp, tray, granted):
        n = Notifier(tray)
        seen = []
        n.permission_changed.connect(seen.append)
        n.request_permission()
        qapp.processEvents()
        assert seen == [True]


@pytest.mark.usefixtures("qapp")
class TestNotify:

    def _granted_notifier(self, qapp, tray, chime, **kwargs):
        n = Notifier(tray, chime=chime, **kwargs)
        n.request_permission()
        qapp.processEvents()
        return n

    def test_inert_without_permission(self, tray, chime):
        n = Notifier(tray, chime=chime)
        n.notify(60)
        assert tray.messages == []
        assert chime.plays == 0

    def test_shows_message_and_plays_chime(self, qapp, tray, chime, granted):
        n = self._granted_notifier(qapp, tray, chime)
        n.notify(90)
        assert tray.messages == [("01:30 minute timer", "C'est fini")]
        assert chime.plays == 1

    def test_unknown_duration(self, qapp, tray, chime, granted):
        n = self._granted_notifier(qapp, tray, chime)
        n.notify(None)
        assert tray.messages == [("Timer finished", "C'est fini")]

    def test_disabled_in_settings(self, qapp, tray, chime, granted):
        n = self._granted_notifier(qapp, tray, chime, enabled=False)
        n.notify(60)
        assert tray.messages == []

    def test_no_tray_icon(self, qapp, chime, granted):
        n = self._granted_notifier(qapp, None, chime)
        n.notify(60)  # should not raise
        assert chime.plays == 0
