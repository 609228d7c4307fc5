"""Tests for the scheduler implementations."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QTest

from duelboard.game.scheduler import ManualScheduler, QtScheduler


class TestManualScheduler:
    def test_nothing_runs_until_advanced(self) -> None:
        sched = ManualScheduler()
        calls: list[str] = []
        sched.call_later(100, lambda: calls.append("a"))
        assert calls == []
        assert sched.pending == 1

    def test_runs_in_time_order(self) -> None:
        sched = ManualScheduler()
        calls: list[str] = []
        sched.call_later(300, lambda: calls.append("late"))
        sched.call_later(100, lambda: calls.append("early"))
        sched.call_later(100, lambda: calls.append("early-2"))
        assert sched.advance(300) == 3
        assert calls == ["early", "early-2", "late"]

    def test_advance_stops_at_target(self) -> None:
        sched = ManualScheduler()
        calls: list[int] = []
        sched.call_later(100, lambda: calls.append(sched.now))
        sched.call_later(200, lambda: calls.append(sched.now))
        sched.advance(150)
        assert calls == [100]
        assert sched.now == 150
        assert sched.pending == 1

    def test_callbacks_can_schedule_more(self) -> None:
        sched = ManualScheduler()
        calls: list[int] = []

        def tick() -> None:
            calls.append(sched.now)
            if len(calls) < 3:
                sched.call_later(50, tick)

        sched.call_later(50, tick)
        assert sched.run_until_idle() == 3
        assert calls == [50, 100, 150]

    def test_negative_delay_runs_now(self) -> None:
        sched = ManualScheduler()
        calls: list[int] = []
        sched.call_later(-10, lambda: calls.append(sched.now))
        sched.advance(0)
        assert calls == [0]
        assert sched.delays == [0]

    def test_run_until_idle_guards_endless_loops(self) -> None:
        sched = ManualScheduler()

        def again() -> None:
            sched.call_later(1, again)

        sched.call_later(1, again)
        with pytest.raises(RuntimeError):
            sched.run_until_idle(max_callbacks=20)


class TestQtScheduler:
    def test_fires_on_event_loop(self, qapp: object) -> None:
        del qapp
        sched = QtScheduler()
        calls: list[str] = []
        sched.call_later(0, lambda: calls.append("fired"))
        assert sched.pending == 1
        QTest.qWait(50)
        assert calls == ["fired"]
        assert sched.pending == 0

    def test_cancel_all(self, qapp: object) -> None:
        del qapp
        sched = QtScheduler()
        calls: list[str] = []
        sched.call_later(10, lambda: calls.append("fired"))
        sched.cancel_all()
        QTest.qWait(50)
        assert calls == []
        assert sched.pending == 0
