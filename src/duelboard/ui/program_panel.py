"""ProgramPanel - editors for the black and white programs."""

from __future__ import annotations

from PyQt6.QtWidgets import QLabel, QPlainTextEdit, QVBoxLayout, QWidget

from duelboard.ui.i18n import t


class ProgramPanel(QWidget):
    """Two source editors. Read-only while a session runs."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        self._black_label = QLabel()
        self._black_edit = QPlainTextEdit()
        self._white_label = QLabel()
        self._white_edit = QPlainTextEdit()
        for widget in (
            self._black_label,
            self._black_edit,
            self._white_label,
            self._white_edit,
        ):
            layout.addWidget(widget)

        self.retranslate_ui()

    def retranslate_ui(self) -> None:
        s = t()
        self._black_label.setText(s.program_black)
        self._white_label.setText(s.program_white)

    def programs(self) -> tuple[str, str]:
        """``(black, white)`` program sources."""
        return self._black_edit.toPlainText(), self._white_edit.toPlainText()

    def set_programs(self, black: str, white: str) -> None:
        self._black_edit.setPlainText(black)
        self._white_edit.setPlainText(white)

    def set_editable(self, editable: bool) -> None:
        self._black_edit.setReadOnly(not editable)
        self._white_edit.setReadOnly(not editable)
