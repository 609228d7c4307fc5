"""MainWindow - top-level window assembling all UI components."""

from __future__ import annotations

from typing import Any

from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from duelboard.game.interfaces import INetworkService, IScheduler
from duelboard.game.scheduler import QtScheduler
from duelboard.game.session import SessionController
from duelboard.game.settings import SessionSettings
from duelboard.network.local import LocalSimulationServer, random_match
from duelboard.network.qt_bridge import ThreadedNetworkService
from duelboard.ui.board_widget import BoardWidget
from duelboard.ui.control_panel import ControlPanel
from duelboard.ui.i18n import t
from duelboard.ui.program_panel import ProgramPanel
from duelboard.ui.session_sync import SessionSync


class MainWindow(QMainWindow):
    """Main application window: program editors, board and controls.

    Without an explicit *network* the window runs in local mode: a randomly
    generated match served from a worker thread.
    """

    def __init__(
        self,
        *,
        network: INetworkService | None = None,
        scheduler: IScheduler | None = None,
        settings: SessionSettings | None = None,
        message_box_cls: type[Any] = QMessageBox,
    ) -> None:
        super().__init__()
        self.setWindowTitle(t().window_title)
        self.setMinimumSize(720, 480)
        self.resize(960, 640)

        self._settings = settings or SessionSettings()
        self._scheduler = scheduler or QtScheduler(self)
        self._network = network or ThreadedNetworkService(
            LocalSimulationServer(random_match(self._settings.board_size)),
            parent=self,
        )
        self._session = SessionController(self._network, self._scheduler, self._settings)
        self._message_box_cls = message_box_cls

        self._setup_ui()
        self._connect_signals()

        self._session_sync = SessionSync(
            session=self._session,
            board_widget=self._board_widget,
            control_panel=self._control_panel,
            program_panel=self._program_panel,
            set_status=self._status_label.setText,
            set_score=self._score_label.setText,
            show_notice=self._show_notice,
        )
        self._session_sync.connect()
        self._session_sync.on_phase_changed(self._session.phase)
        self._session_sync.on_frame(self._session.frame)

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        # Board (left)
        self._board_widget = BoardWidget(self._settings.board_size)
        root.addWidget(self._board_widget, stretch=3)

        # Right panel
        right = QVBoxLayout()
        right.setSpacing(6)

        self._program_panel = ProgramPanel()
        right.addWidget(self._program_panel, stretch=1)

        self._score_label = QLabel()
        right.addWidget(self._score_label)

        self._control_panel = ControlPanel()
        right.addWidget(self._control_panel)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(320)
        root.addWidget(right_widget)

        status_bar = QStatusBar()
        self._status_label = QLabel()
        status_bar.addWidget(self._status_label, 1)
        self.setStatusBar(status_bar)

    def _connect_signals(self) -> None:
        self._control_panel.submit_clicked.connect(self._on_submit)
        self._control_panel.reset_clicked.connect(self._on_reset)
        self._control_panel.replay_clicked.connect(self._on_replay)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> SessionController:
        return self._session

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_submit(self) -> None:
        self._session.programs_submitted(self._program_panel.programs())

    def _on_reset(self) -> None:
        self._session.reset()

    def _on_replay(self) -> None:
        self._session.replay()

    def _show_notice(self, text: str) -> None:
        self._message_box_cls.warning(self, t().notice_title, text)

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._session_sync.disconnect()
        self._session.reset()
        if isinstance(self._scheduler, QtScheduler):
            self._scheduler.cancel_all()
        if isinstance(self._network, ThreadedNetworkService):
            self._network.shutdown()
        super().closeEvent(event)
