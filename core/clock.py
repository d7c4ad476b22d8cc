"""
core/clock.py — Frame-driven time sources for Hexa.

The game loop advances in variable frame steps (dt), while the session
counts down in whole seconds. Two small classes bridge the gap:

    TickClock    — accumulates dt and reports how many whole ticks have
                   elapsed. Stopping it discards the partial accumulator so
                   a stopped clock can never fire again.
    Continuation — a one-shot callback due after a delay. Cancelling it
                   guarantees the callback never runs.

Neither class touches session state. engine.py owns exactly one of each
and decides what a tick or a due continuation means.

Usage:
    clock = TickClock(interval=1.0)
    clock.start()

    # each frame:
    for _ in range(clock.update(dt)):
        engine.tick()
"""

from __future__ import annotations
from typing import Callable

from settings import TICK_INTERVAL_S


class TickClock:
    """Fixed-interval tick source fed by frame deltas.

    Attributes:
        interval:  Seconds per tick.
        _acc:      Seconds accumulated towards the next tick.
        _running:  True while the clock is counting.
    """

    def __init__(self, interval: float = TICK_INTERVAL_S) -> None:
        """Initialise a stopped clock."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval: float = interval
        self._acc:     float = 0.0
        self._running: bool  = False

    def start(self) -> None:
        """Start (or restart) counting from zero."""
        self._acc = 0.0
        self._running = True

    def stop(self) -> None:
        """Stop the clock and drop any partial interval."""
        self._running = False
        self._acc = 0.0

    @property
    def running(self) -> bool:
        return self._running

    def update(self, dt: float) -> int:
        """Advance the clock by dt seconds.

        No-op if the clock is stopped.

        Args:
            dt: Delta time in seconds since the last frame.

        Returns:
            Number of whole ticks that elapsed during this update.
        """
        if not self._running or dt <= 0:
            return 0
        self._acc += dt
        ticks = int(self._acc // self.interval)
        self._acc -= ticks * self.interval
        return ticks


class Continuation:
    """A cancelable callback scheduled a fixed delay into the future.

    Attributes:
        _callback:  Function to run when due, or None when idle.
        _remaining: Seconds until the callback runs.
    """

    def __init__(self) -> None:
        self._callback:  Callable[[], None] | None = None
        self._remaining: float                     = 0.0

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Arm the continuation, replacing anything already pending."""
        self._callback = callback
        self._remaining = max(0.0, delay)

    def cancel(self) -> None:
        self._callback = None
        self._remaining = 0.0

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def update(self, dt: float) -> bool:
        """Count down and run the callback once it is due.

        Args:
            dt: Delta time in seconds since the last frame.

        Returns:
            True if the callback ran during this update.
        """
        if self._callback is None:
            return False
        self._remaining -= dt
        if self._remaining > 0:
            return False
        callback, self._callback = self._callback, None
        self._remaining = 0.0
        callback()
        return True
