"""Abstract interfaces for the game layer.

The session controller depends on these ABCs, not on a concrete transport
or timer: production wires in the Qt implementations, tests wire in stubs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duelboard.core.move import TurnReport


# ── Session FSM states ───────────────────────────────────────────────────────


class SessionPhase(IntEnum):
    """Finite-state-machine states for one duel session."""

    IDLE = auto()
    STARTING = auto()  # waiting for start_simulation
    POLLING = auto()
    STOPPED = auto()  # terminal status reached
    REPLAYING = auto()
    ERROR = auto()  # session lost after retries


class ApplyOutcome(IntEnum):
    """What :meth:`GameState.apply_changes` did with a report."""

    APPLIED = auto()
    OUT_OF_ORDER = auto()  # cursor mismatch, ahead or behind
    DUPLICATE = auto()  # repeated terminal report
    REJECTED = auto()  # moves after the end, or off the board

    @property
    def changed_state(self) -> bool:
        return self == ApplyOutcome.APPLIED


class StartFailure(IntEnum):
    """Why a simulation did not start."""

    REJECTED = auto()  # the server refused the programs (compile error)
    TRANSPORT = auto()  # the server could not be reached


@dataclass(frozen=True, slots=True)
class StartResult:
    """Outcome of :meth:`SessionController.submit_programs`."""

    ok: bool
    failure: StartFailure | None = None
    message: str = ""

    @classmethod
    def started(cls) -> StartResult:
        return cls(ok=True)

    @classmethod
    def failed(cls, failure: StartFailure, message: str = "") -> StartResult:
        return cls(ok=False, failure=failure, message=message)


ResultCallback = Callable[[bool], None]
ReportCallback = Callable[["TurnReport"], None]
ErrorCallback = Callable[[str], None]


# ── Abstract interfaces ─────────────────────────────────────────────────────


class INetworkService(ABC):
    """Asynchronous access to the simulation server.

    Exactly one of the two callbacks fires per call, on the thread that
    owns the session.
    """

    @abstractmethod
    def start_simulation(
        self,
        black_program: str,
        white_program: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Ask the server to start a duel.

        ``on_result(False)`` means the server rejected the programs.
        ``on_error`` means the request itself failed.
        """

    @abstractmethod
    def query(
        self,
        since_turn: int,
        on_report: ReportCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Fetch the moves played since *since_turn*."""


class ISimulationClient(ABC):
    """Blocking access to the simulation server.

    Implementations raise :class:`~duelboard.core.errors.TransportError`
    when a request cannot be completed.
    """

    @abstractmethod
    def start(self, black_program: str, white_program: str) -> bool:
        """Start a duel; False if the server rejected the programs."""

    @abstractmethod
    def query(self, since_turn: int) -> TurnReport:
        """Return the moves played since *since_turn*."""


class IScheduler(ABC):
    """Single-shot timer on the session's event loop."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Run *callback* once, *delay_ms* milliseconds from now."""
