"""Waypoint and path data types."""
from __future__ import annotations

import math
from dataclasses import dataclass

from routeplot.types import InvalidInputError, InvalidModeError, NonFiniteCoordinateError

PATH_SHAPES = ("line", "squiggle", "randomised")


@dataclass(frozen=True)
class Waypoint:
    """A user-placed control point.

    ``path_shape`` describes the segment that starts at this waypoint.
    ``pause_duration`` is in milliseconds and only honored on major
    waypoints. ``tension`` overrides the path-wide default when set.
    """

    x: float
    y: float
    is_major: bool = True
    pause_duration: float = 0.0
    tension: float | None = None
    path_shape: str = "line"

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise NonFiniteCoordinateError(
                f"Waypoint coordinates must be finite, got ({self.x}, {self.y})"
            )
        if self.path_shape not in PATH_SHAPES:
            raise InvalidModeError("path shape", self.path_shape, PATH_SHAPES)
        if self.pause_duration < 0:
            raise InvalidInputError("pause_duration must not be negative")

    @property
    def has_pause(self) -> bool:
        return self.is_major and self.pause_duration > 0

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class PathPoint:
    x: float
    y: float
    original_x: float
    original_y: float
    cumulative_distance: float
    normalized_distance: float
    curvature: float = 0.0
    speed_multiplier: float = 1.0
    segment_index: int = 0
    path_shape: str = "line"

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Path:
    """Final renderable path.

    ``total_length`` is measured over pre-jitter coordinates.
    ``waypoint_progress[i]`` is the progress value at which waypoint ``i``
    is reached.
    """

    points: tuple[PathPoint, ...] = ()
    total_length: float = 0.0
    waypoint_progress: tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points


EMPTY_PATH = Path()
