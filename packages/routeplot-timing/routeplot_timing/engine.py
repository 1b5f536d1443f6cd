"""Animation timing engine: maps wall-clock time onto path progress.

The engine is a small state machine (stopped, playing, paused, waiting)
driven by ``tick``. Every public transition publishes a signal on the
engine's ``SignalBus`` and flushes it before returning.
"""
from __future__ import annotations

import logging
import math
from typing import Any

from routeplot.clock import Clock, MonotonicClock
from routeplot.types import InvalidInputError, InvalidModeError

from routeplot_timing.config import MODES, TimingConfig
from routeplot_timing.signals import SignalBus
from routeplot_timing.state import AnimationState
from routeplot_timing.waypoints import WaitPredicate

logger = logging.getLogger(__name__)


class AnimationEngine:
    """Advances playback time and reports progress.

    Args:
        config: Timing tunables; defaults to ``TimingConfig()``.
        clock: Millisecond time source used when a call omits ``now``.
        bus: Signal bus for notifications; a private one is created if
            omitted.
    """

    def __init__(
        self,
        config: TimingConfig | None = None,
        clock: Clock | None = None,
        bus: SignalBus | None = None,
    ) -> None:
        self.config = config if config is not None else TimingConfig()
        self.clock: Clock = clock if clock is not None else MonotonicClock()
        self.bus = bus if bus is not None else SignalBus()
        self.state = AnimationState(
            duration=self.config.default_duration_ms,
            playback_speed=self.config.default_playback_speed,
            speed=self.config.default_speed,
        )
        self._last_tick: float | None = None
        self._path_length: float | None = None
        self._wait_predicate: WaitPredicate | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def status(self) -> str:
        return self.state.status

    @property
    def progress(self) -> float:
        return self.state.progress

    @property
    def effective_progress(self) -> float:
        return self.state.effective_progress

    @property
    def current_time(self) -> float:
        return self.state.current_time

    @property
    def duration(self) -> float:
        return self.state.duration

    @property
    def is_complete(self) -> bool:
        return self.state.progress >= 1.0

    @property
    def path_length(self) -> float | None:
        return self._path_length

    def snapshot(self) -> dict[str, Any]:
        return self.state.to_dict()

    def duration_for_length(self, length: float) -> float:
        """Duration in ms for ``length`` px at the current speed.

        Outside constant-speed mode the current duration is returned.
        """
        s = self.state
        if s.mode == "constant-speed" and s.speed > 0:
            return length / s.speed * 1000.0
        return s.duration

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _now(self, now: float | None) -> float:
        return self.clock.now() if now is None else now

    def _emit(self, signal_name: str, **data: Any) -> None:
        self.bus.publish(signal_name, **data)
        self.bus.flush()

    def set_wait_predicate(self, predicate: WaitPredicate | None) -> None:
        """Register the callable asked about each progress crossing."""
        self._wait_predicate = predicate

    def play(self, now: float | None = None) -> None:
        s = self.state
        if s.is_playing:
            return
        if self.is_complete:
            s.set_progress(0.0)
        s.is_playing = True
        s.is_paused = False
        self._last_tick = self._now(now)
        logger.info("play at %.1f ms", s.current_time)
        self._emit("play", current_time=s.current_time)

    def pause(self) -> None:
        s = self.state
        if not s.is_playing:
            return
        if s.is_waiting_at_waypoint:
            logger.info("waypoint %d wait cancelled by pause", s.pause_waypoint_index)
            s.clear_wait()
        s.is_playing = False
        s.is_paused = True
        logger.info("pause at %.1f ms", s.current_time)
        self._emit("pause", current_time=s.current_time)

    def toggle(self, now: float | None = None) -> None:
        if self.state.is_playing:
            self.pause()
        else:
            self.play(now)

    def stop(self) -> None:
        s = self.state
        s.is_playing = False
        s.is_paused = False
        s.clear_wait()
        s.current_time = 0.0
        s.progress = 0.0
        self._last_tick = None
        logger.info("stop")
        self._emit("stop")

    def reset(self) -> None:
        """Return to a fresh stopped state for a new path; speed is kept."""
        self.state.reset(
            duration=self.config.default_duration_ms,
            playback_speed=self.config.default_playback_speed,
        )
        self._last_tick = None
        self._path_length = None
        self._wait_predicate = None
        self._emit("reset")

    def seek(self, time: float) -> None:
        s = self.state
        s.set_time(time)
        if s.is_waiting_at_waypoint:
            s.waypoint_progress_snapshot = s.progress
        self._emit("seek", current_time=s.current_time, progress=s.progress)

    def seek_progress(self, progress: float) -> None:
        s = self.state
        s.set_progress(progress)
        if s.is_waiting_at_waypoint:
            s.waypoint_progress_snapshot = s.progress
        self._emit("seek", current_time=s.current_time, progress=s.progress)

    def set_duration(self, duration: float) -> None:
        """Change the duration while keeping the progress fraction."""
        if not math.isfinite(duration) or duration < 0:
            raise InvalidInputError(f"duration must be a non-negative number, got {duration}")
        s = self.state
        fraction = s.progress
        s.duration = duration
        s.set_progress(fraction)
        self._emit("duration_change", duration=duration)

    def set_speed(self, speed: float) -> None:
        """Set marker speed in px/s, rounded to the configured step.

        In constant-speed mode with a known path length the duration is
        recomputed, keeping the progress fraction.
        """
        if not math.isfinite(speed) or speed <= 0:
            raise InvalidInputError(f"speed must be positive, got {speed}")
        step = self.config.speed_step
        rounded = max(step, math.floor(speed / step + 0.5) * step)
        self.state.speed = rounded
        if self.state.mode == "constant-speed" and self._path_length is not None:
            self.set_duration(self.duration_for_length(self._path_length))
        self._emit("speed_change", speed=rounded)

    def set_playback_speed(self, multiplier: float) -> None:
        lo = self.config.min_playback_speed
        hi = self.config.max_playback_speed
        self.state.playback_speed = max(lo, min(hi, multiplier))
        self._emit("playback_speed_change", playback_speed=self.state.playback_speed)

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise InvalidModeError("animation mode", mode, MODES)
        self.state.mode = mode
        if mode == "constant-speed" and self._path_length is not None:
            self.set_duration(self.duration_for_length(self._path_length))
        self._emit("mode_change", mode=mode)

    def set_path_length(self, length: float) -> None:
        """Record the current path length; constant-speed mode derives duration from it."""
        if not math.isfinite(length) or length < 0:
            raise InvalidInputError(f"path length must be a non-negative number, got {length}")
        self._path_length = length
        if self.state.mode == "constant-speed":
            self.set_duration(self.duration_for_length(length))

    def start_waypoint_wait(
        self,
        index: int,
        duration: float,
        progress: float | None = None,
        now: float | None = None,
    ) -> None:
        """Hold playback at waypoint ``index`` for ``duration`` ms.

        ``progress`` pins playback to the waypoint's exact position before
        the snapshot is taken.
        """
        s = self.state
        if not s.is_playing or s.is_waiting_at_waypoint:
            return
        if progress is not None:
            s.set_progress(progress)
        start = self._now(now)
        s.is_waiting_at_waypoint = True
        s.pause_waypoint_index = index
        s.pause_start_time = start
        s.pause_end_time = start + duration
        s.waypoint_progress_snapshot = s.progress
        logger.info("waiting %.0f ms at waypoint %d", duration, index)
        self._emit(
            "waypoint_wait_start", index=index, duration=duration, progress=s.progress,
        )

    def _end_wait(self) -> None:
        s = self.state
        index = s.pause_waypoint_index
        end = s.pause_end_time
        s.clear_wait()
        self._last_tick = end
        logger.info("wait at waypoint %d finished", index)
        self.bus.publish("waypoint_wait_end", index=index)

    def _complete(self) -> None:
        s = self.state
        s.current_time = s.duration
        s.progress = 1.0
        s.is_playing = False
        s.is_paused = True
        logger.info("complete after %.1f ms", s.duration)
        self.bus.publish("complete", duration=s.duration)

    def tick(self, now: float | None = None) -> None:
        """Advance playback to ``now`` (ms)."""
        now = self._now(now)
        s = self.state
        if not s.is_playing:
            self._last_tick = now
            return

        if s.is_waiting_at_waypoint:
            if now < s.pause_end_time:
                self._last_tick = now
                return
            self._end_wait()

        if s.duration <= 0:
            s.current_time = 0.0
            s.progress = 0.0
            self._last_tick = now
            self.bus.flush()
            return

        last = self._last_tick if self._last_tick is not None else now
        delta = min(max(now - last, 0.0), self.config.max_delta_ms) * s.playback_speed
        self._last_tick = now

        previous = s.progress
        s.current_time += delta
        if s.current_time >= s.duration:
            self._complete()
        else:
            s.progress = s.current_time / s.duration
            if self._wait_predicate is not None:
                request = self._wait_predicate(previous, s.progress)
                if request is not None:
                    self.bus.flush()
                    self.start_waypoint_wait(
                        request.index, request.duration, request.progress, now,
                    )
        self.bus.flush()
