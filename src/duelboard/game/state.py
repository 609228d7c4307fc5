"""Game state - the authoritative local copy of a duel and its replay."""

from __future__ import annotations

import logging
from collections.abc import Callable

from duelboard.core.board import DEFAULT_BOARD_SIZE, BoardFrame, BoardModel
from duelboard.core.enums import GameStatus
from duelboard.core.errors import InvalidMoveError
from duelboard.core.move import TurnReport
from duelboard.game.interfaces import ApplyOutcome, IScheduler

_LOGGER = logging.getLogger(__name__)

FrameCallback = Callable[[BoardFrame], None]


class GameState:
    """Merges turn reports into a :class:`BoardModel` and replays its history.

    This class does no I/O. The only asynchronous part is :meth:`replay`,
    which paces frames through the injected scheduler.
    """

    __slots__ = (
        "_scheduler",
        "_board_size",
        "_frame_interval_ms",
        "_board",
        "_status",
        "_replay_token",
        "_replay_generation",
        "_replay_frame",
    )

    def __init__(
        self,
        scheduler: IScheduler,
        *,
        board_size: int = DEFAULT_BOARD_SIZE,
        frame_interval_ms: int = 400,
    ) -> None:
        self._scheduler = scheduler
        self._board_size = board_size
        self._frame_interval_ms = frame_interval_ms
        self._board = BoardModel(board_size)
        self._status = GameStatus.NOT_STARTED
        self._replay_token: int | None = None
        self._replay_generation = 0
        self._replay_frame: BoardFrame | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> BoardModel:
        return self._board

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def number_of_turns(self) -> int:
        return self._board.number_of_turns

    @property
    def is_finished(self) -> bool:
        return self._status.is_terminal

    @property
    def is_replaying(self) -> bool:
        return self._replay_token is not None

    @property
    def current_frame(self) -> BoardFrame:
        """The frame on display: the replay frame while replaying, else the live board."""
        if self._replay_frame is not None:
            return self._replay_frame
        return self._board.frame()

    # ── Report merging ───────────────────────────────────────────────────

    def apply_changes(self, report: TurnReport) -> ApplyOutcome:
        """Merge *report* if it continues exactly where the board stands."""
        expected = self._board.number_of_turns
        if report.since_turn != expected:
            _LOGGER.debug(
                "Discarding report starting at turn %d (board at %d)",
                report.since_turn,
                expected,
            )
            return ApplyOutcome.OUT_OF_ORDER

        if self._status.is_terminal:
            if not report.moves and report.status == self._status:
                return ApplyOutcome.DUPLICATE
            _LOGGER.debug("Discarding report after game end: %s", report)
            return ApplyOutcome.REJECTED

        if report.status == GameStatus.NOT_STARTED:
            _LOGGER.debug("Discarding report with status NOT_STARTED")
            return ApplyOutcome.REJECTED

        try:
            self._board.append(report.moves)
        except InvalidMoveError as exc:
            _LOGGER.warning("Discarding report: %s", exc)
            return ApplyOutcome.REJECTED

        self._status = report.status
        return ApplyOutcome.APPLIED

    def reset(self) -> None:
        """Back to an empty, unstarted game. Abandons a running replay."""
        self.cancel_replay()
        self._board = BoardModel(self._board_size)
        self._status = GameStatus.NOT_STARTED

    # ── Replay ───────────────────────────────────────────────────────────

    def replay(
        self,
        on_complete: Callable[[], None],
        on_frame: FrameCallback | None = None,
    ) -> bool:
        """Show every frame from the empty board to the final position.

        The first frame is shown immediately, each following one
        ``frame_interval_ms`` later. ``on_complete`` runs once, right after
        the final frame. Returns False if a replay is already running.
        """
        if self.is_replaying:
            _LOGGER.debug("Replay already running; request ignored")
            return False

        self._replay_generation += 1
        token = self._replay_generation
        self._replay_token = token
        frames = list(self._board.frames())
        _LOGGER.info("Replaying %d turns", len(frames) - 1)
        self._show_frame(token, frames, 0, on_frame, on_complete)
        return True

    def cancel_replay(self) -> None:
        """Abandon a running replay. Its completion callback never runs."""
        self._replay_token = None
        self._replay_frame = None

    def _show_frame(
        self,
        token: int,
        frames: list[BoardFrame],
        index: int,
        on_frame: FrameCallback | None,
        on_complete: Callable[[], None],
    ) -> None:
        if token != self._replay_token:
            return

        frame = frames[index]
        self._replay_frame = frame
        if on_frame is not None:
            on_frame(frame)

        if index == len(frames) - 1:
            self._replay_token = None
            self._replay_frame = None
            on_complete()
            return

        self._scheduler.call_later(
            self._frame_interval_ms,
            lambda: self._show_frame(token, frames, index + 1, on_frame, on_complete),
        )
