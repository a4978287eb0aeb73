"""Shared pytest fixtures for Timertronics tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from timertronics.timer.registry import TimerRegistry

from helpers import FakeNotifier, ManualScheduler


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def app_support_dir(tmp_path, monkeypatch):
    """Keep settings and cached sounds out of the real home directory."""
    monkeypatch.setattr("timertronics.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr(
        "timertronics.settings.SETTINGS_PATH", tmp_path / "settings.json",
    )
    monkeypatch.setattr("timertronics.audio.chime.SOUNDS_DIR", tmp_path / "sounds")
    yield tmp_path


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def registry(qapp, scheduler, notifier):
    """Fresh registry with the default seeded timer and manual time."""
    return TimerRegistry(parent=None, notifier=notifier, scheduler=scheduler)


@pytest.fixture
def timer_id(registry):
    """Id of the seeded default timer."""
    return registry.main_id
