"""Tests for MainWindow wiring against a local simulation."""

from __future__ import annotations

from typing import Any

from duelboard.core.board import BoardFrame
from duelboard.core.enums import Color, GameStatus
from duelboard.core.move import Move
from duelboard.game.interfaces import (
    ErrorCallback,
    INetworkService,
    ReportCallback,
    ResultCallback,
    SessionPhase,
)
from duelboard.game.scheduler import ManualScheduler
from duelboard.game.settings import SessionSettings
from duelboard.network.local import LocalNetworkService, MatchRecord
from duelboard.network.qt_bridge import ThreadedNetworkService
from duelboard.ui.i18n import set_language, t
from duelboard.ui.main_window import MainWindow

_MATCH = MatchRecord(
    moves=(
        Move(Color.BLACK, 0, 0),
        Move(Color.WHITE, 1, 1),
        Move(Color.BLACK, 2, 2),
    ),
    status=GameStatus.BLACK_WON,
)


class _RecordingMessageBox:
    warnings: list[tuple[str, str]]

    @classmethod
    def warning(cls, _parent: Any, title: str, text: str) -> None:
        cls.warnings.append((title, text))


def _message_box() -> type[_RecordingMessageBox]:
    return type("_MessageBox", (_RecordingMessageBox,), {"warnings": []})


class _UnreachableNetwork(INetworkService):
    def start_simulation(
        self,
        black_program: str,
        white_program: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        del black_program, white_program, on_result
        on_error("connection refused")

    def query(
        self,
        since_turn: int,
        on_report: ReportCallback,
        on_error: ErrorCallback,
    ) -> None:
        del since_turn, on_report
        on_error("connection refused")


class _LostNetwork(INetworkService):
    def start_simulation(
        self,
        black_program: str,
        white_program: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        del black_program, white_program, on_error
        on_result(True)

    def query(
        self,
        since_turn: int,
        on_report: ReportCallback,
        on_error: ErrorCallback,
    ) -> None:
        del since_turn, on_report
        on_error("timed out")


def _make_window(
    qapp: object,
    scheduler: ManualScheduler,
    network: INetworkService | None = None,
    message_box: type[Any] | None = None,
) -> MainWindow:
    del qapp
    return MainWindow(
        network=network or LocalNetworkService(_MATCH, scheduler),
        scheduler=scheduler,
        settings=SessionSettings(board_size=3, max_poll_retries=0),
        message_box_cls=message_box or _message_box(),
    )


def _submit(window: MainWindow, black: str = "black()", white: str = "white()") -> None:
    window._program_panel.set_programs(black, white)
    window._control_panel._btn_submit.click()


class TestInitialState:
    def test_idle_controls(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        assert window._control_panel._btn_submit.isEnabled()
        assert not window._control_panel._btn_reset.isEnabled()
        assert not window._control_panel._btn_replay.isEnabled()

    def test_idle_labels(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        assert window._status_label.text() == t().phase_idle
        assert window._score_label.text() == "Black 0 : 0 White"
        assert window._board_widget.frame.size == 3

    def test_translated_buttons(self, qapp: object, scheduler: ManualScheduler) -> None:
        set_language("Russian")
        window = _make_window(qapp, scheduler)
        assert window._control_panel._btn_replay.text() == "Повтор"


class TestSubmit:
    def test_plays_to_the_end(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        _submit(window)
        assert window.session.phase == SessionPhase.STARTING
        assert window._program_panel._black_edit.isReadOnly()

        scheduler.run_until_idle()

        assert window.session.phase == SessionPhase.STOPPED
        assert window._board_widget.frame == window.session.game.frame()
        assert window._board_widget.frame.turn == 3
        assert window._score_label.text() == "Black 2 : 1 White"
        assert window._status_label.text() == "Game over - Black wins."
        assert window._control_panel._btn_replay.isEnabled()
        assert not window._program_panel._black_edit.isReadOnly()

    def test_compile_failure_notice(self, qapp: object, scheduler: ManualScheduler) -> None:
        box = _message_box()
        window = _make_window(qapp, scheduler, message_box=box)
        _submit(window, black="broken(")
        scheduler.run_until_idle()

        assert box.warnings == [(t().notice_title, "Your code does not compile!")]
        assert window.session.phase == SessionPhase.IDLE
        assert window._board_widget.frame.turn == 0

    def test_transport_failure_notice(self, qapp: object, scheduler: ManualScheduler) -> None:
        box = _message_box()
        window = _make_window(qapp, scheduler, network=_UnreachableNetwork(), message_box=box)
        _submit(window)

        assert len(box.warnings) == 1
        assert "connection refused" in box.warnings[0][1]
        assert window.session.phase == SessionPhase.IDLE

    def test_lost_session_status(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler, network=_LostNetwork())
        _submit(window)

        assert window.session.phase == SessionPhase.ERROR
        assert window._status_label.text() == "Session lost: timed out"
        assert window._control_panel._btn_submit.isEnabled()
        assert window._control_panel._btn_reset.isEnabled()


class TestReplayAndReset:
    def test_replay_shows_each_frame(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        _submit(window)
        scheduler.run_until_idle()

        shown: list[BoardFrame] = []
        window.session.events.on_frame.append(shown.append)
        window._control_panel._btn_replay.click()

        assert window.session.phase == SessionPhase.REPLAYING
        assert window._board_widget.frame.turn == 0
        assert not window._control_panel._btn_replay.isEnabled()
        assert window._status_label.text() == "Replaying turn 0/3"

        scheduler.run_until_idle()

        assert [f.turn for f in shown] == [0, 1, 2, 3]
        assert window.session.phase == SessionPhase.STOPPED
        assert window._board_widget.frame.turn == 3

    def test_reset_clears_board(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        _submit(window)
        scheduler.run_until_idle()

        window._control_panel._btn_reset.click()

        assert window.session.phase == SessionPhase.IDLE
        assert window._board_widget.frame.turn == 0
        assert window._score_label.text() == "Black 0 : 0 White"
        assert window._status_label.text() == t().phase_idle

    def test_close_detaches_from_session(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        session = window.session
        window.show()
        window.close()
        assert session.events.on_frame == []
        assert session.events.on_phase_changed == []
        assert session.phase == SessionPhase.IDLE


class TestStatusText:
    def test_polling_shows_turn(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        _submit(window)
        scheduler.advance(50)  # start accepted, first query sent
        scheduler.advance(50)  # first report in
        assert window.session.phase == SessionPhase.POLLING
        assert window._status_label.text() == "Simulating... turn 1"

    def test_report_updates_board(self, qapp: object, scheduler: ManualScheduler) -> None:
        window = _make_window(qapp, scheduler)
        _submit(window)
        scheduler.advance(100)
        assert window._board_widget.frame.cells[0][0] == Color.BLACK
        assert window._board_widget.frame.cells[1][1] is None


class TestDefaultNetwork:
    def test_local_mode_uses_worker_thread(self, qapp: object, scheduler: ManualScheduler) -> None:
        del qapp
        window = MainWindow(scheduler=scheduler, message_box_cls=_message_box())
        network = window._network
        assert isinstance(network, ThreadedNetworkService)

        window.show()
        network.setup()
        window.close()

        assert network._is_started is False
        assert network.pending_requests == 0
