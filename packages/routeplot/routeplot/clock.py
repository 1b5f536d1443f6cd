"""Millisecond time sources for the frame scheduler."""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float: ...

    def wait(self, ms: float) -> None: ...


class MonotonicClock:
    """Wall clock backed by ``time.monotonic``, reported in milliseconds."""

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def wait(self, ms: float) -> None:
        if ms > 0:
            time.sleep(ms / 1000.0)


class ManualClock:
    """Simulated clock for deterministic playback and tests.

    ``wait`` advances simulated time instantly instead of sleeping, so a
    scheduler driven by this clock runs frames back to back.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def wait(self, ms: float) -> None:
        if ms > 0:
            self._now += ms

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("cannot advance a clock backwards")
        self._now += ms
        return self._now

    def set(self, ms: float) -> None:
        self._now = float(ms)
