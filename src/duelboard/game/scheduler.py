"""Scheduler implementations: Qt timers and a manual clock."""

from __future__ import annotations

import heapq
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

from duelboard.game.interfaces import IScheduler


class QtScheduler(IScheduler):
    """Schedules callbacks on the Qt event loop with single-shot timers.

    Timers are parented to *parent* (when given) so they die with it.
    """

    __slots__ = ("_parent", "_timers")

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        self._timers: set[QTimer] = set()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        self._timers.add(timer)

        def _fire() -> None:
            self._timers.discard(timer)
            timer.deleteLater()
            callback()

        timer.timeout.connect(_fire)
        timer.start(max(0, delay_ms))

    @property
    def pending(self) -> int:
        """Number of timers that have not fired yet."""
        return len(self._timers)

    def cancel_all(self) -> None:
        """Stop every pending timer without running its callback."""
        for timer in self._timers:
            timer.stop()
            timer.deleteLater()
        self._timers.clear()


class ManualScheduler(IScheduler):
    """Deterministic scheduler driven by explicit time advances.

    Nothing runs until :meth:`advance` or :meth:`run_until_idle` is called.
    Callbacks due at the same time run in scheduling order.
    """

    __slots__ = ("_now", "_seq", "_queue", "delays")

    def __init__(self) -> None:
        self._now = 0
        self._seq = 0
        self._queue: list[tuple[int, int, Callable[[], None]]] = []
        self.delays: list[int] = []

    @property
    def now(self) -> int:
        """Milliseconds elapsed since creation."""
        return self._now

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        delay = max(0, delay_ms)
        self.delays.append(delay)
        self._seq += 1
        heapq.heappush(self._queue, (self._now + delay, self._seq, callback))

    def advance(self, delay_ms: int) -> int:
        """Move the clock forward, running everything that falls due.

        Returns the number of callbacks run.
        """
        target = self._now + delay_ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _seq, callback = heapq.heappop(self._queue)
            self._now = due
            callback()
            ran += 1
        self._now = target
        return ran

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        """Run callbacks in time order until none are left."""
        ran = 0
        while self._queue:
            if ran >= max_callbacks:
                raise RuntimeError(f"Scheduler still busy after {max_callbacks} callbacks")
            due, _seq, callback = heapq.heappop(self._queue)
            self._now = due
            callback()
            ran += 1
        return ran
