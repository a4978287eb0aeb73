"""UI package."""

from .timer_row import TimerRow
from .menu_panel import MenuPanel

__all__ = ["TimerRow", "MenuPanel"]
