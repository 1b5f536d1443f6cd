"""FrameScheduler - cooperative per-frame loop, pacing, and lifecycle hooks."""

import logging
from typing import Callable

from routeplot.clock import Clock, MonotonicClock
from routeplot.types import FrameContext, InvalidConfigError, System

logger = logging.getLogger(__name__)


class FrameScheduler:
    """Runs registered systems once per frame on the calling thread.

    Stands in for a display-synchronized callback: every frame reads the
    clock, builds a ``FrameContext`` and calls each system in registration
    order. ``cancel`` stops the schedule and may be called any number of
    times.
    """

    def __init__(self, fps: float = 60, clock: Clock | None = None) -> None:
        if fps <= 0:
            raise InvalidConfigError("fps must be positive")
        self._fps = fps
        self._interval = 1000.0 / fps
        self._clock: Clock = clock if clock is not None else MonotonicClock()
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[FrameContext], None]] = []
        self._stop_hooks: list[Callable[[FrameContext], None]] = []
        self._frame_number = 0
        self._last_frame: float | None = None
        self._stop_requested = False
        self._running = False

    @property
    def fps(self) -> float:
        return self._fps

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def frame_number(self) -> int:
        return self._frame_number

    @property
    def is_running(self) -> bool:
        return self._running

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def remove_system(self, system: System) -> None:
        try:
            self._systems.remove(system)
        except ValueError:
            pass

    def on_start(self, hook: Callable[[FrameContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[FrameContext], None]) -> None:
        self._stop_hooks.append(hook)

    def cancel(self) -> None:
        """Stop the schedule after the current frame. Idempotent."""
        if not self._stop_requested:
            logger.debug("frame schedule cancelled at frame %d", self._frame_number)
        self._stop_requested = True

    def _context(self, now: float) -> FrameContext:
        delta = 0.0 if self._last_frame is None else now - self._last_frame
        return FrameContext(
            frame_number=self._frame_number,
            now=now,
            delta=delta,
            request_stop=self.cancel,
        )

    def _frame(self) -> None:
        now = self._clock.now()
        self._frame_number += 1
        ctx = self._context(now)
        self._last_frame = now
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                break

    def step(self) -> None:
        self._stop_requested = False
        self._frame()

    def run(self, n: int) -> None:
        self._begin()
        for i in range(n):
            self._frame()
            if self._stop_requested:
                break
            if i < n - 1:
                self._clock.wait(self._interval)
        self._end()

    def run_forever(self) -> None:
        self._begin()
        while not self._stop_requested:
            start = self._clock.now()
            self._frame()
            if self._stop_requested:
                break
            elapsed = self._clock.now() - start
            self._clock.wait(self._interval - elapsed)
        self._end()

    def _begin(self) -> None:
        self._stop_requested = False
        self._running = True
        ctx = self._context(self._clock.now())
        for hook in self._start_hooks:
            hook(ctx)

    def _end(self) -> None:
        self._running = False
        ctx = self._context(self._clock.now())
        for hook in self._stop_hooks:
            hook(ctx)
