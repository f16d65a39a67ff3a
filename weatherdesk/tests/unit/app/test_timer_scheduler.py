from __future__ import annotations

from weatherdesk.app.timer_scheduler import TimerScheduler
from weatherdesk.tests.unit.fakes import make_scheduler


def test_schedule_fires_once_after_delay() -> None:
    scheduler, timers = make_scheduler()
    fired = []

    scheduler.schedule("k", 100, lambda: fired.append("k"))
    timers.advance(99)
    assert fired == []
    timers.advance(1)

    assert fired == ["k"]
    assert timers.pending_count == 0


def test_rescheduling_a_key_replaces_the_pending_timer() -> None:
    scheduler, timers = make_scheduler()
    fired = []

    scheduler.schedule("k", 100, lambda: fired.append("first"))
    timers.advance(50)
    scheduler.schedule("k", 100, lambda: fired.append("second"))
    timers.advance(1000)

    assert fired == ["second"]
    assert len(timers.canceled) == 1


def test_cancel_all_clears_every_channel() -> None:
    scheduler, timers = make_scheduler()
    fired = []
    scheduler.schedule("a", 10, lambda: fired.append("a"))
    scheduler.schedule("b", 20, lambda: fired.append("b"))

    scheduler.cancel_all()
    timers.advance(100)

    assert fired == []
    assert timers.pending_count == 0


def test_superseded_callback_is_ignored_when_backend_cannot_cancel() -> None:
    fired = []
    callbacks = []

    def schedule(delay_ms, callback):
        callbacks.append(callback)
        return len(callbacks)

    def cancel(_token):
        raise RuntimeError("timer already running")

    scheduler = TimerScheduler(schedule, cancel)
    scheduler.schedule("k", 10, lambda: fired.append("old"))
    scheduler.schedule("k", 10, lambda: fired.append("new"))

    callbacks[0]()
    callbacks[1]()

    assert fired == ["new"]


def test_negative_delay_is_clamped_to_zero() -> None:
    scheduler, timers = make_scheduler()
    fired = []

    scheduler.schedule("k", -5, lambda: fired.append(True))
    timers.advance(0)

    assert fired == [True]
