"""
Time sources and frame scheduling.

The frame loop never reads wall-clock time or re-arms itself directly.
It asks a Clock for the current time and a FrameScheduler for the next
frame, so hosts and tests decide when frames happen.
"""

import time
from typing import Callable, Protocol

FrameCallback = Callable[[], None]


class Clock(Protocol):
    """Source of the current simulation time in milliseconds."""

    def now(self) -> float:
        ...


class FrameScheduler(Protocol):
    """Something that runs a callback on the next frame tick."""

    def request_frame(self, callback: FrameCallback) -> None:
        ...


class SystemClock:
    """Monotonic wall-clock time in milliseconds."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms

    def now(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        """Move time forward and return the new time."""
        self._now += delta_ms
        return self._now


class FrameQueue:
    """
    Collects frame requests and runs them once per host tick.

    Mirrors the browser's requestAnimationFrame contract: callbacks
    requested during a tick run on the next tick, never the current one.
    """

    def __init__(self) -> None:
        self._pending: list[FrameCallback] = []
        self._ticks = 0

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next tick."""
        return len(self._pending)

    @property
    def ticks(self) -> int:
        return self._ticks

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def run_pending(self) -> int:
        """
        Run every callback requested before this tick.

        Returns:
            Number of callbacks run
        """
        callbacks, self._pending = self._pending, []
        self._ticks += 1

        for callback in callbacks:
            callback()

        return len(callbacks)

