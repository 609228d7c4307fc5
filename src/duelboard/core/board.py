"""Board model - cells derived from an append-only move history."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from duelboard.core.enums import Color
from duelboard.core.errors import InvalidMoveError
from duelboard.core.move import Move

Cells: TypeAlias = tuple[tuple[Color | None, ...], ...]

DEFAULT_BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class BoardFrame:
    """Snapshot of the board after ``turn`` moves, ready to be drawn."""

    turn: int
    cells: Cells

    @property
    def size(self) -> int:
        return len(self.cells)

    def count(self, color: Color) -> int:
        return sum(row.count(color) for row in self.cells)


def empty_cells(size: int) -> Cells:
    return tuple((None,) * size for _ in range(size))


def check_move(move: Move, size: int) -> None:
    """Raise :class:`InvalidMoveError` if *move* addresses a cell off the board."""
    if move.is_pass:
        return
    assert move.row is not None and move.col is not None
    if not (0 <= move.row < size and 0 <= move.col < size):
        raise InvalidMoveError(f"Move {move} is outside a {size}x{size} board")


def derive_cells(history: Iterable[Move], size: int = DEFAULT_BOARD_SIZE) -> Cells:
    """Fold *history* over the empty board. Later moves overwrite earlier ones."""
    grid: list[list[Color | None]] = [[None] * size for _ in range(size)]
    for move in history:
        check_move(move, size)
        if not move.is_pass:
            grid[move.row][move.col] = move.color  # type: ignore[index]
    return tuple(tuple(row) for row in grid)


class BoardModel:
    """Cells plus the move history they were folded from.

    The only mutation is :meth:`append`; ``cells`` always equals
    ``derive_cells(history, size)``.
    """

    __slots__ = ("_size", "_history", "_grid")

    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        if size <= 0:
            raise ValueError(f"Board size must be positive, got {size}")
        self._size = size
        self._history: list[Move] = []
        self._grid: list[list[Color | None]] = [[None] * size for _ in range(size)]

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self._size

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    @property
    def number_of_turns(self) -> int:
        """Moves applied so far; the cursor sent with every poll."""
        return len(self._history)

    @property
    def cells(self) -> Cells:
        return tuple(tuple(row) for row in self._grid)

    def __getitem__(self, pos: tuple[int, int]) -> Color | None:
        row, col = pos
        return self._grid[row][col]

    # ── Mutation ─────────────────────────────────────────────────────────

    def append(self, moves: Sequence[Move]) -> None:
        """Append *moves* atomically: all of them or, on a bad move, none."""
        for move in moves:
            check_move(move, self._size)
        for move in moves:
            self._history.append(move)
            if not move.is_pass:
                self._grid[move.row][move.col] = move.color  # type: ignore[index]

    # ── Frames ───────────────────────────────────────────────────────────

    def frame(self) -> BoardFrame:
        return BoardFrame(turn=self.number_of_turns, cells=self.cells)

    def frame_at(self, turn: int) -> BoardFrame:
        """Frame after the first *turn* moves of the history."""
        if not 0 <= turn <= len(self._history):
            raise IndexError(f"turn {turn} outside 0..{len(self._history)}")
        return BoardFrame(
            turn=turn,
            cells=derive_cells(self._history[:turn], self._size),
        )

    def frames(self) -> Iterator[BoardFrame]:
        """Yield every frame from the empty board through the full history."""
        grid: list[list[Color | None]] = [[None] * self._size for _ in range(self._size)]
        yield BoardFrame(turn=0, cells=empty_cells(self._size))
        for turn, move in enumerate(self._history, start=1):
            if not move.is_pass:
                grid[move.row][move.col] = move.color  # type: ignore[index]
            yield BoardFrame(turn=turn, cells=tuple(tuple(row) for row in grid))

    def __repr__(self) -> str:
        return f"BoardModel(size={self._size}, turns={self.number_of_turns})"
