"""SessionController - runs one duel from program submission to replay.

Coordinates: the network service, the scheduler and the GameState.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from duelboard.core.board import BoardFrame, BoardModel
from duelboard.core.move import TurnReport
from duelboard.game.interfaces import (
    ApplyOutcome,
    INetworkService,
    IScheduler,
    SessionPhase,
    StartFailure,
    StartResult,
)
from duelboard.game.settings import SessionSettings
from duelboard.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

PhaseCallback = Callable[[SessionPhase], None]
FrameCallback = Callable[[BoardFrame], None]
StartFailedCallback = Callable[[StartResult], None]
SessionErrorCallback = Callable[[str], None]
StartResultCallback = Callable[[StartResult], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_frame: list[FrameCallback] = field(default_factory=list)
    on_start_failed: list[StartFailedCallback] = field(default_factory=list)
    on_error: list[SessionErrorCallback] = field(default_factory=list)


_SUBMITTABLE = frozenset({SessionPhase.IDLE, SessionPhase.STOPPED, SessionPhase.ERROR})
_IN_GAME = frozenset(
    {
        SessionPhase.POLLING,
        SessionPhase.STOPPED,
        SessionPhase.REPLAYING,
        SessionPhase.ERROR,
    }
)


# ── Controller ───────────────────────────────────────────────────────────────


class SessionController:
    """Starts a simulation, polls it to the end and replays the result.

    Every asynchronous callback captures the session epoch when it is
    issued. :meth:`reset` and :meth:`submit_programs` bump the epoch, so a
    response that belongs to an abandoned session is dropped instead of
    touching the fresh state.

    Thread-safety: all methods and callbacks must run on one thread (the
    Qt main thread in the application).
    """

    __slots__ = (
        "_network",
        "_scheduler",
        "_settings",
        "_state",
        "_phase",
        "_epoch",
        "_remaining_poll_retries",
        "_retry_attempt",
        "_query_seq",
        "_pending_query",
        "_last_error",
        "events",
    )

    def __init__(
        self,
        network: INetworkService,
        scheduler: IScheduler,
        settings: SessionSettings | None = None,
    ) -> None:
        self._network = network
        self._scheduler = scheduler
        self._settings = settings or SessionSettings()
        self._state = GameState(
            scheduler,
            board_size=self._settings.board_size,
            frame_interval_ms=self._settings.frame_interval_ms,
        )
        self._phase = SessionPhase.IDLE
        self._epoch = 0
        self._remaining_poll_retries = 0
        self._retry_attempt = 0
        self._query_seq = 0
        self._pending_query: int | None = None
        self._last_error: str | None = None
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def game(self) -> BoardModel:
        """The authoritative board built from every applied report."""
        return self._state.board

    @property
    def frame(self) -> BoardFrame:
        """What the board view should show right now."""
        return self._state.current_frame

    @property
    def is_in_game(self) -> bool:
        return self._phase in _IN_GAME

    @property
    def is_in_game_but_stopped(self) -> bool:
        return self._phase == SessionPhase.STOPPED

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def last_error(self) -> str | None:
        return self._last_error

    # ── User actions ─────────────────────────────────────────────────────

    def submit_programs(
        self,
        black_program: str,
        white_program: str,
        on_result: StartResultCallback | None = None,
    ) -> bool:
        """Start a new duel. Returns False if a session is already running."""
        if self._phase not in _SUBMITTABLE:
            _LOGGER.debug("submit_programs ignored in phase %s", self._phase.name)
            return False

        self._epoch += 1
        epoch = self._epoch
        self._state.reset()
        self._last_error = None
        self._pending_query = None
        self._set_phase(SessionPhase.STARTING)
        self._emit_frame(self._state.current_frame)

        self._network.start_simulation(
            black_program,
            white_program,
            on_result=lambda ok: self._on_start_result(epoch, ok, on_result),
            on_error=lambda message: self._on_start_error(epoch, message, on_result),
        )
        return True

    def programs_submitted(self, programs: tuple[str, str]) -> bool:
        """Tuple form of :meth:`submit_programs` used by the program editor."""
        black_program, white_program = programs
        return self.submit_programs(black_program, white_program)

    def reset(self) -> None:
        """Abandon the current session, whatever it is doing."""
        self._epoch += 1
        self._state.reset()
        self._last_error = None
        self._remaining_poll_retries = 0
        self._retry_attempt = 0
        self._pending_query = None
        self._set_phase(SessionPhase.IDLE)
        self._emit_frame(self._state.current_frame)

    def replay(self) -> bool:
        """Replay the finished game. Only valid once the game has stopped."""
        if self._phase != SessionPhase.STOPPED:
            _LOGGER.debug("replay ignored in phase %s", self._phase.name)
            return False

        epoch = self._epoch
        self._set_phase(SessionPhase.REPLAYING)
        started = self._state.replay(
            on_complete=lambda: self._on_replay_complete(epoch),
            on_frame=self._emit_frame,
        )
        if not started:
            self._set_phase(SessionPhase.STOPPED)
        return started

    # ── Network callbacks ────────────────────────────────────────────────

    def _on_start_result(
        self,
        epoch: int,
        ok: bool,
        on_result: StartResultCallback | None,
    ) -> None:
        if self._is_stale(epoch, SessionPhase.STARTING):
            return
        if not ok:
            self._fail_start(
                StartResult.failed(StartFailure.REJECTED, "Programs were rejected"),
                on_result,
            )
            return

        _LOGGER.info("Simulation started (epoch %d)", epoch)
        self._remaining_poll_retries = self._settings.max_poll_retries
        self._retry_attempt = 0
        self._set_phase(SessionPhase.POLLING)
        if on_result is not None:
            on_result(StartResult.started())
        self._poll(epoch)

    def _on_start_error(
        self,
        epoch: int,
        message: str,
        on_result: StartResultCallback | None,
    ) -> None:
        if self._is_stale(epoch, SessionPhase.STARTING):
            return
        self._fail_start(StartResult.failed(StartFailure.TRANSPORT, message), on_result)

    def _poll(self, epoch: int) -> None:
        if self._is_stale(epoch, SessionPhase.POLLING):
            return
        if self._pending_query is not None:
            _LOGGER.debug("Query %d still outstanding; poll skipped", self._pending_query)
            return
        self._query_seq += 1
        query_id = self._query_seq
        self._pending_query = query_id
        cursor = self._state.number_of_turns
        self._network.query(
            cursor,
            on_report=lambda report: self._on_report(epoch, query_id, report),
            on_error=lambda message: self._on_poll_error(epoch, query_id, message),
        )

    def _on_report(self, epoch: int, query_id: int, report: TurnReport) -> None:
        if self._is_stale(epoch, SessionPhase.POLLING) or not self._take_query(query_id):
            return

        outcome = self._state.apply_changes(report)
        if outcome == ApplyOutcome.REJECTED:
            self._retry_or_fail(epoch, f"Server sent an invalid report: {report}")
            return

        self._remaining_poll_retries = self._settings.max_poll_retries
        self._retry_attempt = 0
        if outcome.changed_state:
            self._emit_frame(self._state.current_frame)

        if self._state.is_finished:
            _LOGGER.info(
                "Game finished after %d turns: %s",
                self._state.number_of_turns,
                self._state.status.name,
            )
            self._set_phase(SessionPhase.STOPPED)
            return

        self._scheduler.call_later(
            self._settings.poll_interval_ms,
            lambda: self._poll(epoch),
        )

    def _on_poll_error(self, epoch: int, query_id: int, message: str) -> None:
        if self._is_stale(epoch, SessionPhase.POLLING) or not self._take_query(query_id):
            return
        self._retry_or_fail(epoch, message)

    def _retry_or_fail(self, epoch: int, message: str) -> None:
        if self._remaining_poll_retries > 0:
            self._remaining_poll_retries -= 1
            self._retry_attempt += 1
            delay = self._settings.retry_delay_ms(self._retry_attempt)
            _LOGGER.warning(
                "Query at turn %d failed (%s); retrying in %d ms",
                self._state.number_of_turns,
                message,
                delay,
            )
            self._scheduler.call_later(delay, lambda: self._poll(epoch))
            return

        _LOGGER.error("Session lost at turn %d: %s", self._state.number_of_turns, message)
        self._last_error = message
        self._set_phase(SessionPhase.ERROR)
        for cb in self.events.on_error:
            cb(message)

    def _take_query(self, query_id: int) -> bool:
        """Consume the answer to the outstanding query; False for any other."""
        if query_id != self._pending_query:
            _LOGGER.debug("Dropping extra answer to query %d", query_id)
            return False
        self._pending_query = None
        return True

    def _on_replay_complete(self, epoch: int) -> None:
        if self._is_stale(epoch, SessionPhase.REPLAYING):
            return
        self._set_phase(SessionPhase.STOPPED)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _is_stale(self, epoch: int, expected_phase: SessionPhase) -> bool:
        if epoch != self._epoch:
            _LOGGER.debug("Dropping callback from epoch %d (now %d)", epoch, self._epoch)
            return True
        if self._phase != expected_phase:
            _LOGGER.debug(
                "Dropping callback for %s while in %s",
                expected_phase.name,
                self._phase.name,
            )
            return True
        return False

    def _fail_start(
        self,
        result: StartResult,
        on_result: StartResultCallback | None,
    ) -> None:
        _LOGGER.warning("Simulation did not start: %s", result.message or result.failure)
        self._set_phase(SessionPhase.IDLE)
        if on_result is not None:
            on_result(result)
        for cb in self.events.on_start_failed:
            cb(result)

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase == self._phase:
            return
        _LOGGER.info("Session phase %s -> %s", self._phase.name, phase.name)
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_frame(self, frame: BoardFrame) -> None:
        for cb in self.events.on_frame:
            cb(frame)
