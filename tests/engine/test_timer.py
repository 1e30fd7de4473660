"""
Tests for the game clock.

Ticks are driven by hand through the fake scheduler; no real time passes
except in the asyncio scheduler tests.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from gridrush.engine.timer import AsyncioScheduler, GameTimer, TimerState


class TestConstruction:
    def test_defaults(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        assert timer.duration == 300
        assert timer.time_remaining == 300
        assert not timer.is_active

    def test_invalid_duration(self, scheduler):
        with pytest.raises(ValueError, match="must be positive"):
            GameTimer(duration=0, scheduler=scheduler)


class TestStartPause:
    def test_start_schedules_one_second_ticks(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        timer.start()
        assert timer.is_active
        assert len(scheduler.active) == 1
        assert scheduler.active[0][0] == 1.0

    def test_start_is_idempotent(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        timer.start()
        timer.start()
        assert len(scheduler.calls) == 1

    def test_pause_keeps_remaining(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        timer.start()
        scheduler.fire(5)
        timer.pause()
        assert timer.time_remaining == 295
        assert not timer.is_active
        assert scheduler.active == []

    def test_pause_twice_is_harmless(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        timer.start()
        timer.pause()
        timer.pause()
        assert not timer.is_active

    def test_failed_start_stays_stopped(self, scheduler):
        timer = GameTimer(duration=30)
        with pytest.raises(RuntimeError):
            timer.start()
        assert not timer.is_active
        assert timer._handle is None

        timer._scheduler = scheduler
        timer.start()
        assert timer.is_active
        assert len(scheduler.active) == 1

    def test_tick_ignored_when_paused(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        timer.tick()
        assert timer.time_remaining == 300

    def test_resume_after_pause(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        timer.start()
        scheduler.fire(3)
        timer.pause()
        timer.start()
        scheduler.fire(2)
        assert timer.time_remaining == 295


class TestTick:
    def test_on_tick_receives_remaining(self, scheduler):
        on_tick = MagicMock()
        timer = GameTimer(duration=5, on_tick=on_tick, scheduler=scheduler)
        timer.start()
        scheduler.fire(2)
        assert [c.args[0] for c in on_tick.call_args_list] == [4, 3]

    def test_timeout_fires_once_and_stops(self, scheduler):
        on_timeout = MagicMock()
        timer = GameTimer(duration=3, on_timeout=on_timeout, scheduler=scheduler)
        timer.start()
        scheduler.fire(10)
        on_timeout.assert_called_once()
        assert timer.time_remaining == 0
        assert not timer.is_active

    def test_warnings_fire_once_each(self, scheduler):
        on_warning = MagicMock()
        timer = GameTimer(duration=65, on_warning=on_warning, scheduler=scheduler)
        timer.start()
        scheduler.fire(65)
        thresholds = [c.args[0] for c in on_warning.call_args_list]
        assert thresholds == [60, 30, 10]

    def test_warning_message(self, scheduler):
        on_warning = MagicMock()
        timer = GameTimer(duration=31, on_warning=on_warning, scheduler=scheduler)
        timer.start()
        scheduler.fire(1)
        on_warning.assert_called_once_with(30, "30 SECONDS - FINAL LAP!")

    def test_short_game_skips_higher_thresholds(self, scheduler):
        on_warning = MagicMock()
        timer = GameTimer(duration=45, on_warning=on_warning, scheduler=scheduler)
        timer.start()
        scheduler.fire(45)
        assert [c.args[0] for c in on_warning.call_args_list] == [30, 10]

    def test_reset_rearms_warnings(self, scheduler):
        on_warning = MagicMock()
        timer = GameTimer(duration=11, on_warning=on_warning, scheduler=scheduler)
        timer.start()
        scheduler.fire(1)
        timer.reset()
        assert timer.time_remaining == 11
        assert not timer.is_active
        timer.start()
        scheduler.fire(1)
        assert on_warning.call_count == 2


class TestDisplay:
    @pytest.mark.parametrize("seconds,expected", [
        (300, "5:00"), (65, "1:05"), (9, "0:09"), (0, "0:00"),
    ])
    def test_format_time(self, scheduler, seconds, expected):
        assert GameTimer(scheduler=scheduler).format_time(seconds) == expected

    @pytest.mark.parametrize("seconds,color", [
        (181, "green"), (180, "yellow"), (61, "yellow"), (60, "red"),
        (11, "red"), (10, "flash-red"), (0, "flash-red"),
    ])
    def test_time_color(self, scheduler, seconds, color):
        assert GameTimer(scheduler=scheduler).get_time_color(seconds) == color

    @pytest.mark.parametrize("remaining,message", [
        (60, "1 MINUTE REMAINING!"),
        (30, "30 SECONDS - FINAL LAP!"),
        (10, "10 SECONDS!"),
        (3, "3 SECONDS!"),
        (45, None),
        (0, None),
    ])
    def test_warning_message(self, scheduler, remaining, message):
        timer = GameTimer(scheduler=scheduler)
        timer.time_remaining = remaining
        assert timer.get_warning_message() == message

    def test_set_duration(self, scheduler):
        timer = GameTimer(scheduler=scheduler)
        timer.set_duration(120)
        assert timer.duration == 120
        assert timer.time_remaining == 120

    def test_get_state(self, scheduler):
        timer = GameTimer(duration=75, scheduler=scheduler)
        assert timer.get_state() == TimerState(
            time_remaining=75,
            is_active=False,
            formatted="1:15",
            color="yellow",
            warning=None,
        )


class TestAsyncioScheduler:
    def test_runs_ticks_on_event_loop(self):
        async def run():
            done = asyncio.Event()
            timer = GameTimer(duration=2, on_timeout=done.set, scheduler=_FastScheduler())
            timer.start()
            await asyncio.wait_for(done.wait(), timeout=2)
            return timer

        timer = asyncio.run(run())
        assert timer.time_remaining == 0
        assert not timer.is_active

    def test_cancel_stops_callbacks(self):
        async def run():
            calls = []
            handle = AsyncioScheduler().call_repeating(0.01, lambda: calls.append(1))
            await asyncio.sleep(0.035)
            handle.cancel()
            seen = len(calls)
            await asyncio.sleep(0.03)
            return seen, len(calls)

        seen, total = asyncio.run(run())
        assert seen >= 1
        assert total == seen


class _FastScheduler(AsyncioScheduler):
    def call_repeating(self, interval, callback):
        return super().call_repeating(0.001, callback)
