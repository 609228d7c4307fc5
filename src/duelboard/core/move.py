"""Move and turn-report value objects.

One move occupies exactly one turn. ``number_of_turns`` everywhere in the
code base counts moves, passes included.
"""

from __future__ import annotations

from dataclasses import dataclass

from duelboard.core.enums import Color, GameStatus


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object for a single placement (or a pass)."""

    color: Color
    row: int | None = None
    col: int | None = None

    def __post_init__(self) -> None:
        if (self.row is None) != (self.col is None):
            raise ValueError("row and col must both be set or both be None")

    @classmethod
    def pass_turn(cls, color: Color) -> Move:
        return cls(color)

    @property
    def is_pass(self) -> bool:
        return self.row is None

    def __str__(self) -> str:
        if self.is_pass:
            return f"{self.color}:pass"
        return f"{self.color}:{self.row},{self.col}"


@dataclass(frozen=True, slots=True)
class TurnReport:
    """Server answer to one poll.

    Args:
        status: Game status after the last move in ``moves``.
        since_turn: Cursor the report starts at (the first move's turn index).
        moves: Moves played since ``since_turn``, oldest first.
    """

    status: GameStatus
    since_turn: int = 0
    moves: tuple[Move, ...] = ()

    @property
    def end_turn(self) -> int:
        """Cursor value after applying this report."""
        return self.since_turn + len(self.moves)
