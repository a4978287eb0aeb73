"""Audio package."""

from .chime import ChimePlayer, generate_chime

__all__ = ["ChimePlayer", "generate_chime"]
