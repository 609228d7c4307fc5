"""In-process simulation server used by local mode and the test-suite."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from duelboard.core.board import DEFAULT_BOARD_SIZE
from duelboard.core.enums import Color, GameStatus
from duelboard.core.errors import TransportError
from duelboard.core.move import Move, TurnReport
from duelboard.game.interfaces import (
    ErrorCallback,
    INetworkService,
    IScheduler,
    ISimulationClient,
    ReportCallback,
    ResultCallback,
)

_LOGGER = logging.getLogger(__name__)

_BRACKETS = {")": "(", "]": "[", "}": "{"}

ProgramCheck = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """A complete duel as the server would play it out."""

    moves: tuple[Move, ...]
    status: GameStatus

    def __post_init__(self) -> None:
        if not self.status.is_terminal:
            raise ValueError(f"Match must end in a terminal status, got {self.status.name}")


def check_program(source: str) -> bool:
    """Cheap stand-in for compilation: non-blank with balanced brackets."""
    if not source.strip():
        return False
    stack: list[str] = []
    for ch in source:
        if ch in "([{":
            stack.append(ch)
        elif ch in _BRACKETS:
            if not stack or stack.pop() != _BRACKETS[ch]:
                return False
    return not stack


def random_match(
    size: int = DEFAULT_BOARD_SIZE,
    seed: int | None = None,
    max_moves: int | None = None,
) -> MatchRecord:
    """Alternate black and white on random empty cells; most cells wins."""
    rng = random.Random(seed)
    cells = [(row, col) for row in range(size) for col in range(size)]
    rng.shuffle(cells)
    if max_moves is not None:
        cells = cells[: max(0, max_moves)]

    moves: list[Move] = []
    color = Color.BLACK
    for row, col in cells:
        moves.append(Move(color, row, col))
        color = color.opposite

    black = sum(1 for m in moves if m.color == Color.BLACK)
    white = len(moves) - black
    if black > white:
        status = GameStatus.BLACK_WON
    elif white > black:
        status = GameStatus.WHITE_WON
    else:
        status = GameStatus.DRAW
    return MatchRecord(moves=tuple(moves), status=status)


class LocalSimulationServer(ISimulationClient):
    """Serves a pre-recorded :class:`MatchRecord` in chunks.

    Status is ``IN_PROGRESS`` until the cursor reaches the end of the
    match, then the match's final status.
    """

    __slots__ = ("_match", "_moves_per_report", "_program_check", "_started")

    def __init__(
        self,
        match: MatchRecord,
        *,
        moves_per_report: int = 1,
        program_check: ProgramCheck = check_program,
    ) -> None:
        if moves_per_report < 1:
            raise ValueError("moves_per_report must be >= 1")
        self._match = match
        self._moves_per_report = moves_per_report
        self._program_check = program_check
        self._started = False

    @property
    def is_started(self) -> bool:
        return self._started

    def start(self, black_program: str, white_program: str) -> bool:
        self._started = self._program_check(black_program) and self._program_check(
            white_program
        )
        return self._started

    def query(self, since_turn: int) -> TurnReport:
        if not self._started:
            raise TransportError("No simulation is running")
        total = len(self._match.moves)
        if not 0 <= since_turn <= total:
            raise TransportError(f"Turn {since_turn} is outside 0..{total}")

        chunk = self._match.moves[since_turn : since_turn + self._moves_per_report]
        end = since_turn + len(chunk)
        status = self._match.status if end == total else GameStatus.IN_PROGRESS
        return TurnReport(status=status, since_turn=since_turn, moves=chunk)


class LocalNetworkService(INetworkService):
    """Asynchronous facade over a :class:`LocalSimulationServer`.

    Every answer is delivered through the scheduler after ``latency_ms``,
    so callers see the same asynchrony as with a remote server.
    """

    __slots__ = ("_server", "_scheduler", "_latency_ms", "_queries")

    def __init__(
        self,
        match: MatchRecord,
        scheduler: IScheduler,
        *,
        latency_ms: int = 50,
        moves_per_report: int = 1,
        program_check: ProgramCheck = check_program,
    ) -> None:
        self._server = LocalSimulationServer(
            match,
            moves_per_report=moves_per_report,
            program_check=program_check,
        )
        self._scheduler = scheduler
        self._latency_ms = latency_ms
        self._queries: list[int] = []

    @property
    def queries(self) -> list[int]:
        """Cursors of every query received, oldest first."""
        return list(self._queries)

    def start_simulation(
        self,
        black_program: str,
        white_program: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        del on_error
        ok = self._server.start(black_program, white_program)
        _LOGGER.debug("Local simulation start: %s", "accepted" if ok else "rejected")
        self._scheduler.call_later(self._latency_ms, lambda: on_result(ok))

    def query(
        self,
        since_turn: int,
        on_report: ReportCallback,
        on_error: ErrorCallback,
    ) -> None:
        self._queries.append(since_turn)
        try:
            report = self._server.query(since_turn)
        except TransportError as exc:
            message = str(exc)
            self._scheduler.call_later(self._latency_ms, lambda: on_error(message))
            return
        self._scheduler.call_later(self._latency_ms, lambda: on_report(report))
