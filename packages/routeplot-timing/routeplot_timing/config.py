"""Timing configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from routeplot.types import InvalidConfigError

MODES = ("constant-speed", "constant-time")


@dataclass(frozen=True)
class TimingConfig:
    """Immutable tunables for the animation timing engine.

    Attributes:
        frame_interval_ms: Target scheduler interval (60 fps).
        max_delta_ms: Largest real-time step applied in one tick; absorbs
            suspend/resume jumps.
        default_duration_ms: Duration of a fresh animation.
        default_speed: Marker speed in px/s for constant-speed mode.
        default_playback_speed: Initial playback multiplier.
        speed_step: Granularity that ``set_speed`` rounds to.
        min_playback_speed: Lower clamp for the playback multiplier.
        max_playback_speed: Upper clamp for the playback multiplier.
    """

    frame_interval_ms: float = 1000.0 / 60
    max_delta_ms: float = 100.0
    default_duration_ms: float = 10000.0
    default_speed: float = 400.0
    default_playback_speed: float = 1.0
    speed_step: float = 5.0
    min_playback_speed: float = 0.1
    max_playback_speed: float = 10.0

    def __post_init__(self) -> None:
        if self.frame_interval_ms <= 0:
            raise InvalidConfigError("frame_interval_ms must be positive")
        if self.max_delta_ms <= 0:
            raise InvalidConfigError("max_delta_ms must be positive")
        if self.default_duration_ms < 0:
            raise InvalidConfigError("default_duration_ms must not be negative")
        if self.default_speed <= 0:
            raise InvalidConfigError("default_speed must be positive")
        if self.speed_step <= 0:
            raise InvalidConfigError("speed_step must be positive")
        if not 0 < self.min_playback_speed <= self.max_playback_speed:
            raise InvalidConfigError(
                "playback speed bounds must satisfy 0 < min <= max"
            )
        if not self.min_playback_speed <= self.default_playback_speed <= self.max_playback_speed:
            raise InvalidConfigError("default_playback_speed is outside its bounds")
