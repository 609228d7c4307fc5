"""BoardWidget - paints a BoardFrame as a grid of stones."""

from __future__ import annotations

from PyQt6.QtCore import QRectF, QSize
from PyQt6.QtGui import QPainter, QPaintEvent, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from duelboard.core.board import DEFAULT_BOARD_SIZE, BoardFrame, empty_cells
from duelboard.core.enums import Color
from duelboard.ui.styles.theme import BoardTheme

_STONE_MARGIN = 0.12  # fraction of a cell left empty around a stone


class BoardWidget(QWidget):
    """Read-only board view. Knows nothing about sessions, only frames."""

    def __init__(
        self,
        size: int = DEFAULT_BOARD_SIZE,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._frame = BoardFrame(turn=0, cells=empty_cells(size))
        self._theme = BoardTheme.default()
        self.setMinimumSize(240, 240)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    @property
    def frame(self) -> BoardFrame:
        return self._frame

    def set_frame(self, frame: BoardFrame) -> None:
        self._frame = frame
        self.update()

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self.update()

    def sizeHint(self) -> QSize:
        return QSize(480, 480)

    def board_rect(self) -> QRectF:
        """Largest centred square that fits the widget."""
        side = min(self.width(), self.height())
        return QRectF(
            (self.width() - side) / 2,
            (self.height() - side) / 2,
            side,
            side,
        )

    def cell_rect(self, row: int, col: int) -> QRectF:
        board = self.board_rect()
        cell = board.width() / max(1, self._frame.size)
        return QRectF(board.left() + col * cell, board.top() + row * cell, cell, cell)

    def paintEvent(self, event: QPaintEvent | None) -> None:
        del event
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        board = self.board_rect()
        painter.fillRect(board, self._theme.background)

        size = self._frame.size
        cell = board.width() / max(1, size)
        painter.setPen(QPen(self._theme.grid_line, 1))
        for i in range(size + 1):
            offset = i * cell
            painter.drawLine(
                int(board.left() + offset),
                int(board.top()),
                int(board.left() + offset),
                int(board.bottom()),
            )
            painter.drawLine(
                int(board.left()),
                int(board.top() + offset),
                int(board.right()),
                int(board.top() + offset),
            )

        painter.setPen(QPen(self._theme.stone_outline, 1))
        for row, cells in enumerate(self._frame.cells):
            for col, color in enumerate(cells):
                if color is None:
                    continue
                rect = self.cell_rect(row, col)
                margin = rect.width() * _STONE_MARGIN
                painter.setBrush(
                    self._theme.black_stone
                    if color == Color.BLACK
                    else self._theme.white_stone
                )
                painter.drawEllipse(rect.adjusted(margin, margin, -margin, -margin))

        painter.end()
