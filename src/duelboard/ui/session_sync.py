"""UI/session synchronisation helpers for MainWindow."""

from __future__ import annotations

from collections.abc import Callable

from duelboard.core.board import BoardFrame
from duelboard.core.enums import Color, GameStatus
from duelboard.game.interfaces import SessionPhase, StartFailure, StartResult
from duelboard.game.session import SessionController
from duelboard.ui.board_widget import BoardWidget
from duelboard.ui.control_panel import ControlPanel
from duelboard.ui.i18n import t
from duelboard.ui.program_panel import ProgramPanel


class SessionSync:
    """Applies session changes to UI widgets."""

    __slots__ = (
        "_session",
        "_board_widget",
        "_control_panel",
        "_program_panel",
        "_set_status",
        "_set_score",
        "_show_notice",
    )

    def __init__(
        self,
        *,
        session: SessionController,
        board_widget: BoardWidget,
        control_panel: ControlPanel,
        program_panel: ProgramPanel,
        set_status: Callable[[str], None],
        set_score: Callable[[str], None],
        show_notice: Callable[[str], None],
    ) -> None:
        self._session = session
        self._board_widget = board_widget
        self._control_panel = control_panel
        self._program_panel = program_panel
        self._set_status = set_status
        self._set_score = set_score
        self._show_notice = show_notice

    def connect(self) -> None:
        """Subscribe to session events."""
        events = self._session.events
        events.on_frame.append(self.on_frame)
        events.on_phase_changed.append(self.on_phase_changed)
        events.on_start_failed.append(self.on_start_failed)
        events.on_error.append(self.on_error)

    def disconnect(self) -> None:
        events = self._session.events
        for callbacks, cb in (
            (events.on_frame, self.on_frame),
            (events.on_phase_changed, self.on_phase_changed),
            (events.on_start_failed, self.on_start_failed),
            (events.on_error, self.on_error),
        ):
            if cb in callbacks:
                callbacks.remove(cb)

    def on_frame(self, frame: BoardFrame) -> None:
        self._board_widget.set_frame(frame)
        self._set_score(
            t().score.format(
                black=frame.count(Color.BLACK),
                white=frame.count(Color.WHITE),
            )
        )
        self.update_status()

    def on_phase_changed(self, phase: SessionPhase) -> None:
        self._control_panel.sync(phase)
        self._program_panel.set_editable(
            phase in (SessionPhase.IDLE, SessionPhase.STOPPED, SessionPhase.ERROR)
        )
        self.update_status()

    def on_start_failed(self, result: StartResult) -> None:
        s = t()
        if result.failure == StartFailure.TRANSPORT:
            self._show_notice(s.notice_transport_failed.format(msg=result.message))
        else:
            self._show_notice(s.notice_compile_failed)

    def on_error(self, _message: str) -> None:
        self.update_status()

    def update_status(self) -> None:
        """Update the status line from the current session phase."""
        self._set_status(status_text(self._session))


def status_text(session: SessionController) -> str:
    s = t()
    phase = session.phase
    if phase == SessionPhase.STARTING:
        return s.phase_starting
    if phase == SessionPhase.POLLING:
        return s.phase_polling.format(turn=session.game.number_of_turns)
    if phase == SessionPhase.STOPPED:
        return s.phase_stopped.format(result=result_text(session.state.status))
    if phase == SessionPhase.REPLAYING:
        return s.phase_replaying.format(
            turn=session.frame.turn,
            total=session.game.number_of_turns,
        )
    if phase == SessionPhase.ERROR:
        return s.phase_error.format(msg=session.last_error or "")
    return s.phase_idle


def result_text(status: GameStatus) -> str:
    s = t()
    if status == GameStatus.BLACK_WON:
        return s.result_black_won
    if status == GameStatus.WHITE_WON:
        return s.result_white_won
    return s.result_draw
