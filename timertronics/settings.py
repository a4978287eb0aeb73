"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Timertronics/settings.json

Only preferences live here; timers themselves are never saved.

Usage::

    settings = load_settings()
    settings.chime_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path


log = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Timertronics"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timers ────────────────────────────────────────────────────────
    default_seconds: int = 5 * 60          # value for new timers
    hold_seconds: int = 10                 # "done" display before reset

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True
    chime_enabled: bool = True
    chime_volume: int = 70                 # 0-100

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return _drop_mistyped(Settings(**filtered))
    except (OSError, ValueError, TypeError, AttributeError):
        log.warning("could not read %s, using defaults", SETTINGS_PATH, exc_info=True)
        return Settings()


def _drop_mistyped(settings: Settings) -> Settings:
    """Reset any field whose value is not the type of its default."""
    defaults = Settings()
    for f in fields(Settings):
        value = getattr(settings, f.name)
        default = getattr(defaults, f.name)
        if type(value) is not type(default):
            log.warning(
                "ignoring %s=%r in %s, using %r", f.name, value, SETTINGS_PATH, default,
            )
            setattr(settings, f.name, default)
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
