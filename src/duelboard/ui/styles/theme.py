"""Visual theme constants and QSS styles for duelboard."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the board widget."""

    background: QColor
    grid_line: QColor
    black_stone: QColor
    white_stone: QColor
    stone_outline: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            background=QColor(46, 125, 80),  # felt green
            grid_line=QColor(20, 60, 35),
            black_stone=QColor(25, 25, 25),
            white_stone=QColor(240, 240, 240),
            stone_outline=QColor(10, 10, 10),
        )

    @classmethod
    def slate(cls) -> BoardTheme:
        return cls(
            background=QColor(101, 110, 122),
            grid_line=QColor(60, 66, 74),
            black_stone=QColor(25, 25, 25),
            white_stone=QColor(224, 226, 231),
            stone_outline=QColor(10, 10, 10),
        )


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-family: "Adwaita Sans", "Helvetica Neue", sans-serif;
}

QPlainTextEdit {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-family: "Adwaita Mono", "Consolas", monospace;
    font-size: 13px;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}
QPushButton:disabled {
    color: #666;
    background: #2b2b2b;
}
"""
