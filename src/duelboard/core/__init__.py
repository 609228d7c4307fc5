"""Core domain layer - moves, turn reports and the board model.

Quick start::

    from duelboard.core import BoardModel, Color, Move

    board = BoardModel(size=8)
    board.append([Move(Color.BLACK, 3, 4), Move(Color.WHITE, 4, 4)])
    print(board.number_of_turns)  # 2
"""

from duelboard.core.board import (
    DEFAULT_BOARD_SIZE,
    BoardFrame,
    BoardModel,
    Cells,
    derive_cells,
    empty_cells,
)
from duelboard.core.enums import Color, GameStatus
from duelboard.core.errors import DuelboardError, InvalidMoveError, TransportError
from duelboard.core.move import Move, TurnReport

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    # Errors
    "DuelboardError",
    "InvalidMoveError",
    "TransportError",
    # Domain objects
    "DEFAULT_BOARD_SIZE",
    "BoardFrame",
    "BoardModel",
    "Cells",
    "Move",
    "TurnReport",
    # Helpers
    "derive_cells",
    "empty_cells",
]
