"""Qt bridge to run a blocking simulation client in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from duelboard.core.move import TurnReport
from duelboard.game.interfaces import (
    ErrorCallback,
    INetworkService,
    ISimulationClient,
    ReportCallback,
    ResultCallback,
)

_LOGGER = logging.getLogger(__name__)


class SimulationWorker(QObject):
    """Thread-affine worker that performs blocking client calls on demand."""

    start_finished = pyqtSignal(int, bool)  # request_id, ok
    report_ready = pyqtSignal(int, object)  # request_id, report
    request_failed = pyqtSignal(int, str)  # request_id, message

    __slots__ = ("_client",)

    def __init__(self, client: ISimulationClient) -> None:
        super().__init__()
        self._client = client

    @pyqtSlot(int, str, str)
    def start(self, request_id: int, black_program: str, white_program: str) -> None:
        """Start a simulation and emit whether the server accepted it."""
        try:
            ok = self._client.start(black_program, white_program)
        except Exception as exc:
            self.request_failed.emit(request_id, str(exc))
            return
        self.start_finished.emit(request_id, bool(ok))

    @pyqtSlot(int, int)
    def query(self, request_id: int, since_turn: int) -> None:
        """Fetch the report starting at *since_turn* and emit it."""
        try:
            report = self._client.query(since_turn)
        except Exception as exc:
            self.request_failed.emit(request_id, str(exc))
            return
        if not isinstance(report, TurnReport):
            self.request_failed.emit(request_id, "Server returned an invalid report")
            return
        self.report_ready.emit(request_id, report)


class _NetworkCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    start_requested = pyqtSignal(int, str, str)
    query_requested = pyqtSignal(int, int)


class ThreadedNetworkService(INetworkService):
    """Owns the worker thread and routes results back to their callbacks.

    Results are delivered through queued signals, so callbacks run on the
    thread that created the service.
    """

    __slots__ = (
        "_command_bus",
        "_thread",
        "_worker",
        "_pending_results",
        "_pending_reports",
        "_next_request_id",
        "_is_started",
        "_is_shutting_down",
    )

    def __init__(self, client: ISimulationClient, parent: QObject | None = None) -> None:
        self._command_bus = _NetworkCommandBus(parent)
        self._thread = QThread(parent)
        self._worker = SimulationWorker(client)
        self._worker.moveToThread(self._thread)
        self._command_bus.start_requested.connect(self._worker.start)
        self._command_bus.query_requested.connect(self._worker.query)
        self._worker.start_finished.connect(self._on_start_finished)
        self._worker.report_ready.connect(self._on_report_ready)
        self._worker.request_failed.connect(self._on_request_failed)
        self._pending_results: dict[int, tuple[ResultCallback, ErrorCallback]] = {}
        self._pending_reports: dict[int, tuple[ReportCallback, ErrorCallback]] = {}
        self._next_request_id = 0
        self._is_started = False
        self._is_shutting_down = False

    @property
    def pending_requests(self) -> int:
        return len(self._pending_results) + len(self._pending_reports)

    def setup(self) -> None:
        """Start the worker thread. Safe to call again after :meth:`shutdown`."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Drop outstanding callbacks and stop the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self._pending_results.clear()
        self._pending_reports.clear()
        self._thread.quit()
        self._thread.wait(2000)
        self._is_started = False

    # ── INetworkService ──────────────────────────────────────────────────

    def start_simulation(
        self,
        black_program: str,
        white_program: str,
        on_result: ResultCallback,
        on_error: ErrorCallback,
    ) -> None:
        if not self._is_started:
            self.setup()
        request_id = self._new_request_id()
        self._pending_results[request_id] = (on_result, on_error)
        self._command_bus.start_requested.emit(request_id, black_program, white_program)

    def query(
        self,
        since_turn: int,
        on_report: ReportCallback,
        on_error: ErrorCallback,
    ) -> None:
        if not self._is_started:
            self.setup()
        request_id = self._new_request_id()
        self._pending_reports[request_id] = (on_report, on_error)
        self._command_bus.query_requested.emit(request_id, since_turn)

    # ── Worker results ───────────────────────────────────────────────────

    def _on_start_finished(self, request_id: int, ok: bool) -> None:
        if self._is_shutting_down:
            return
        callbacks = self._pending_results.pop(request_id, None)
        if callbacks is None:
            return
        callbacks[0](ok)

    def _on_report_ready(self, request_id: int, report_obj: object) -> None:
        if self._is_shutting_down:
            return
        callbacks = self._pending_reports.pop(request_id, None)
        if callbacks is None:
            return
        on_report, on_error = callbacks
        if not isinstance(report_obj, TurnReport):
            on_error("Server returned an invalid report")
            return
        on_report(report_obj)

    def _on_request_failed(self, request_id: int, message: str) -> None:
        if self._is_shutting_down:
            return
        callbacks = self._pending_results.pop(request_id, None)
        if callbacks is None:
            callbacks = self._pending_reports.pop(request_id, None)
        if callbacks is None:
            return
        _LOGGER.warning("Request %d failed: %s", request_id, message)
        callbacks[1](message)

    def _new_request_id(self) -> int:
        self._next_request_id += 1
        return self._next_request_id
