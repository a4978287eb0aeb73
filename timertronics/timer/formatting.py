"""Minutes:seconds text round trip for timer values.

Accepted input
--------------
``"5"``       bare integer, whole minutes (300 s)
``"1:30"``    minutes and seconds, summed (90 s)
``"2.5:10"``  either side may carry a decimal part

Only ASCII digits count and neither form takes a sign.  Everything else
(``"abc"``, ``"1:2:3"``, ``":30"``, ``"-1"``, ``"+5"``, ``"\u0665"``) is
rejected with :class:`InvalidDuration`.
"""

from __future__ import annotations

import math
import re


_BARE_MINUTES = re.compile(r"[0-9]+")
_NUMBER = re.compile(r"[0-9]+(?:\.[0-9]+)?")


class InvalidDuration(ValueError):
    """Text that cannot be read as a timer value."""


def format_duration(seconds: float) -> str:
    """Render *seconds* as ``MM:SS`` (minutes may run past 99)."""
    total = max(0, int(round(seconds)))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def parse_duration(text: str) -> float:
    """Parse user input into seconds.  Raises :class:`InvalidDuration`."""
    text = text.strip()

    if ":" in text:
        parts = text.split(":")
        if len(parts) != 2 or not all(_NUMBER.fullmatch(p) for p in parts):
            raise InvalidDuration("Invalid format. Use mm:ss")
        minutes, seconds = (float(p) for p in parts)
        total = minutes * 60 + seconds
    else:
        # No colon: the user typed whole minutes
        if not _BARE_MINUTES.fullmatch(text):
            raise InvalidDuration("Invalid number")
        total = float(int(text) * 60)

    if not math.isfinite(total):
        raise InvalidDuration("Invalid number")
    return total

