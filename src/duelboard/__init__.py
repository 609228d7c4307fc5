"""duelboard - watch two submitted programs play each other, then replay the game."""

__version__ = "0.1.0"
