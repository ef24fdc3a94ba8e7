"""Elapsed-time measurement on a wrapping 32-bit tick counter."""

from __future__ import annotations

import enum
import time
from collections.abc import Callable

_UINT32_MAX = 0xFFFFFFFF
_EPOCH_NS = time.monotonic_ns()


class StopWatchResolution(enum.IntEnum):
    """Unit of the ticks a stopwatch counts."""

    MILLIS = 0
    MICROS = 1


class StopWatchState(enum.IntEnum):
    """Whether a stopwatch is counting."""

    STOPPED = 0
    RUNNING = 1


class StopWatch:
    """Measures elapsed ticks, tolerating one wrap of the 32-bit counter.

    ``clock`` returns the current tick count; by default it is the
    millisecond or microsecond counter that matches ``resolution``.
    """

    def __init__(
        self,
        resolution: StopWatchResolution = StopWatchResolution.MILLIS,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.resolution = StopWatchResolution(resolution)
        if clock is None:
            clock = (
                StopWatch.now_micros
                if self.resolution is StopWatchResolution.MICROS
                else StopWatch.now_millis
            )
        self._clock = clock
        self._state = StopWatchState.STOPPED
        self._start_time = 0
        self._stop_time = 0

    def start(self) -> None:
        self._start_time = self.now()
        self._state = StopWatchState.RUNNING

    def stop(self) -> None:
        self._stop_time = self.now()
        self._state = StopWatchState.STOPPED

    def reset(self) -> None:
        """Restart counting from now and leave the stopwatch running."""
        self._state = StopWatchState.RUNNING
        self._start_time = self._stop_time = self.now()

    def is_running(self) -> bool:
        return self._state is StopWatchState.RUNNING

    def elapsed(self) -> int:
        """Ticks between start and stop, or between start and now while running."""
        end = self.now() if self.is_running() else self._stop_time
        return StopWatch.time_diff_with_rollover(self._start_time, end)

    def now(self) -> int:
        """Current tick count in this stopwatch's resolution."""
        return self._clock() & _UINT32_MAX

    @staticmethod
    def now_millis() -> int:
        """Milliseconds since the program started, wrapping at 32 bits."""
        return ((time.monotonic_ns() - _EPOCH_NS) // 1_000_000) & _UINT32_MAX

    @staticmethod
    def now_micros() -> int:
        """Microseconds since the program started, wrapping at 32 bits."""
        return ((time.monotonic_ns() - _EPOCH_NS) // 1_000) & _UINT32_MAX

    @staticmethod
    def time_diff_with_rollover(start: int, end: int) -> int:
        """Ticks from ``start`` to ``end``, assuming at most one counter wrap."""
        if end < start:
            return (_UINT32_MAX - start) + end
        return end - start