"""ControlPanel - session action buttons."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QWidget

from duelboard.game.interfaces import SessionPhase
from duelboard.ui.i18n import t


class ControlPanel(QWidget):
    """Buttons for session actions: submit, reset, replay."""

    submit_clicked = pyqtSignal()
    reset_clicked = pyqtSignal()
    replay_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()
        self.retranslate_ui()
        self.sync(SessionPhase.IDLE)

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        btn_font = QFont("Adwaita Sans", 10)

        self._btn_submit = QPushButton()
        self._btn_reset = QPushButton()
        self._btn_replay = QPushButton()
        for button, signal in (
            (self._btn_submit, self.submit_clicked),
            (self._btn_reset, self.reset_clicked),
            (self._btn_replay, self.replay_clicked),
        ):
            button.setFont(btn_font)
            button.setMinimumHeight(36)
            button.clicked.connect(signal)
            layout.addWidget(button)

    def retranslate_ui(self) -> None:
        s = t()
        self._btn_submit.setText(s.btn_submit)
        self._btn_reset.setText(s.btn_reset)
        self._btn_replay.setText(s.btn_replay)

    def sync(self, phase: SessionPhase) -> None:
        """Enable only the actions the session accepts in *phase*."""
        self._btn_submit.setEnabled(
            phase in (SessionPhase.IDLE, SessionPhase.STOPPED, SessionPhase.ERROR)
        )
        self._btn_reset.setEnabled(phase != SessionPhase.IDLE)
        self._btn_replay.setEnabled(phase == SessionPhase.STOPPED)
