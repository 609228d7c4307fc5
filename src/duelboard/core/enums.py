"""Core enumerations for the duel domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color. Black is the first program submitted."""

    BLACK = 0
    WHITE = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class GameStatus(IntEnum):
    """Status carried by every turn report."""

    NOT_STARTED = 0
    IN_PROGRESS = 1
    BLACK_WON = 2
    WHITE_WON = 3
    DRAW = 4

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL

    @property
    def winner(self) -> Color | None:
        """Winning side, or None for draws and unfinished games."""
        if self == GameStatus.BLACK_WON:
            return Color.BLACK
        if self == GameStatus.WHITE_WON:
            return Color.WHITE
        return None


_TERMINAL = frozenset({GameStatus.BLACK_WON, GameStatus.WHITE_WON, GameStatus.DRAW})
