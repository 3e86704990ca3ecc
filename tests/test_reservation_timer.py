"""Reservation countdown driven by a fake clock."""

import asyncio

import pytest

from eventa.flows.reservation_timer import ReservationTimer, TimerState


def _timer(clock, duration=5, on_expire=None, ticks=None):
    expired = []
    timer = ReservationTimer(
        on_expire=on_expire or (lambda: expired.append(clock())),
        duration=duration,
        on_tick=(lambda m, s: ticks.append((m, s))) if ticks is not None else None,
        clock=clock,
        sleep=clock.sleep,
    )
    return timer, expired


async def test_counts_down_once_per_second_then_expires(clock):
    ticks = []
    timer, expired = _timer(clock, duration=3, ticks=ticks)
    timer.start()
    await timer.wait()

    assert ticks == [(0, 3), (0, 2), (0, 1), (0, 0)]
    assert clock.sleeps == [1.0, 1.0, 1.0]
    assert timer.state == TimerState.EXPIRED
    assert expired == [1003.0]


async def test_default_window_is_fifteen_minutes(clock):
    timer, _ = _timer(clock, duration=15 * 60)
    assert timer.display() == "15:00"
    timer.start()
    clock.now += 61
    assert timer.time_left() == (13, 59)
    timer.cancel()


async def test_display_derived_from_deadline_after_late_wakeup(clock):
    timer, _ = _timer(clock, duration=10)
    timer.start()
    clock.now += 2.5
    assert timer.seconds_left() == 8
    clock.now += 100
    assert timer.seconds_left() == 0
    assert timer.display() == "00:00"
    timer.cancel()


async def test_never_negative(clock):
    ticks = []
    timer, _ = _timer(clock, duration=2, ticks=ticks)
    timer.start()
    await timer.wait()
    clock.now += 50
    assert timer.seconds_left() == 0
    assert all(m >= 0 and s >= 0 for m, s in ticks)


async def test_cancel_stops_ticking(clock):
    timer, expired = _timer(clock, duration=60)
    timer.start()
    await asyncio.sleep(0)
    timer.cancel()
    await timer.wait()

    assert timer.state == TimerState.CANCELLED
    assert expired == []


async def test_cancel_after_expiry_keeps_expired(clock):
    timer, expired = _timer(clock, duration=1)
    timer.start()
    await timer.wait()
    timer.cancel()
    assert timer.state == TimerState.EXPIRED
    assert len(expired) == 1


async def test_cannot_restart(clock):
    timer, _ = _timer(clock, duration=1)
    timer.start()
    await timer.wait()
    with pytest.raises(RuntimeError):
        timer.start()


async def test_early_wakeup_does_not_repeat_a_tick(clock):
    ticks = []

    async def early_sleep(seconds):
        # wake a quarter second before the value drops
        await clock.sleep(seconds - 0.25 if seconds >= 1 else seconds)

    timer = ReservationTimer(
        on_expire=lambda: None,
        duration=3,
        on_tick=lambda m, s: ticks.append((m, s)),
        clock=clock,
        sleep=early_sleep,
    )
    timer.start()
    await timer.wait()

    assert ticks == [(0, 3), (0, 2), (0, 1), (0, 0)]
    assert clock.sleeps == [0.75, 0.25] * 3
    assert timer.state == TimerState.EXPIRED
