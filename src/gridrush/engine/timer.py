"""
GridRush - Game Timer

Countdown clock for a single game (5 minutes by default). The countdown
logic (decrement, threshold warnings, timeout) is a set of plain state
transitions in ``GameTimer.tick``. Wall-clock scheduling is delegated to a
``Scheduler`` so tests can drive ticks by hand.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from gridrush.engine.validators import validate_duration

logger = logging.getLogger(__name__)


DEFAULT_DURATION = 300
TICK_INTERVAL = 1.0

WARNING_MESSAGES: dict[int, str] = {
    60: "1 MINUTE REMAINING!",
    30: "30 SECONDS - FINAL LAP!",
    10: "10 SECONDS!",
}


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can call ``callback`` every ``interval`` seconds."""

    def call_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> ScheduledHandle: ...


class _RepeatingCall:
    """Re-arms ``loop.call_later`` after each run until cancelled."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle = loop.call_later(interval, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        self._callback()
        if not self._cancelled:
            self._handle = self._loop.call_later(self._interval, self._run)

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Callbacks run on the loop's thread, so timer ticks never interleave with
    other engine calls made from the same loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> _RepeatingCall:
        loop = self._loop or asyncio.get_running_loop()
        return _RepeatingCall(loop, interval, callback)


@dataclass(frozen=True)
class TimerState:
    """
    Display-ready timer state.

    Attributes:
        time_remaining: Seconds left
        is_active: Whether the clock is running
        formatted: Remaining time as M:SS
        color: Display tier (green, yellow, red, flash-red)
        warning: Warning text for the current second, if any
    """
    time_remaining: int
    is_active: bool
    formatted: str
    color: str
    warning: str | None


class GameTimer:
    """Countdown timer with per-second ticks, threshold warnings and timeout."""

    def __init__(
        self,
        duration: int = DEFAULT_DURATION,
        on_tick: Callable[[int], None] | None = None,
        on_timeout: Callable[[], None] | None = None,
        on_warning: Callable[[int, str], None] | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.duration = validate_duration(duration)
        self.time_remaining = self.duration
        self.is_active = False
        self.on_tick = on_tick or (lambda remaining: None)
        self.on_timeout = on_timeout or (lambda: None)
        self.on_warning = on_warning or (lambda threshold, message: None)
        self._scheduler = scheduler or AsyncioScheduler()
        self._handle: ScheduledHandle | None = None
        self._warnings_fired: dict[int, bool] = {t: False for t in WARNING_MESSAGES}

    def start(self) -> None:
        """Start counting down. Does nothing if already running."""
        if self.is_active:
            return
        # is_active only flips once the scheduler has handed back a handle
        self._handle = self._scheduler.call_repeating(TICK_INTERVAL, self.tick)
        self.is_active = True

    def pause(self) -> None:
        """Stop counting down, keeping the remaining time."""
        self.is_active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def reset(self) -> None:
        """Stop and restore the full duration; warnings can fire again."""
        self.pause()
        self.time_remaining = self.duration
        self._warnings_fired = {t: False for t in WARNING_MESSAGES}

    def tick(self) -> None:
        """Advance the clock by one second."""
        if not self.is_active:
            return

        previous = self.time_remaining
        self.time_remaining -= 1

        self._check_warnings(previous)
        self.on_tick(self.time_remaining)

        if self.time_remaining <= 0:
            self.time_remaining = 0
            self.pause()
            logger.info("Game clock expired")
            self.on_timeout()

    def _check_warnings(self, previous: int) -> None:
        """Fire each threshold warning once, on the tick that crosses it."""
        for threshold, fired in self._warnings_fired.items():
            if not fired and previous > threshold >= self.time_remaining:
                self._warnings_fired[threshold] = True
                message = WARNING_MESSAGES[threshold]
                logger.warning("Timer warning: %s", message)
                self.on_warning(threshold, message)

    def set_duration(self, seconds: int) -> None:
        self.duration = validate_duration(seconds)
        self.time_remaining = self.duration

    def format_time(self, seconds: int | None = None) -> str:
        """Format seconds as M:SS."""
        if seconds is None:
            seconds = self.time_remaining
        minutes, secs = divmod(max(seconds, 0), 60)
        return f"{minutes}:{secs:02d}"

    def get_time_color(self, seconds: int | None = None) -> str:
        if seconds is None:
            seconds = self.time_remaining
        if seconds > 180:
            return "green"
        if seconds > 60:
            return "yellow"
        if seconds > 10:
            return "red"
        return "flash-red"

    def get_warning_message(self) -> str | None:
        """Warning text for the current second, or None."""
        if self.time_remaining in (60, 30):
            return WARNING_MESSAGES[self.time_remaining]
        if 0 < self.time_remaining <= 10:
            return f"{self.time_remaining} SECONDS!"
        return None

    def get_state(self) -> TimerState:
        return TimerState(
            time_remaining=self.time_remaining,
            is_active=self.is_active,
            formatted=self.format_time(),
            color=self.get_time_color(),
            warning=self.get_warning_message(),
        )
