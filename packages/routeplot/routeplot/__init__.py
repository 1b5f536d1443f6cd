"""routeplot - Frame scheduling and shared errors for waypoint path animation."""

from routeplot.clock import Clock, ManualClock, MonotonicClock
from routeplot.scheduler import FrameScheduler
from routeplot.types import (
    FrameContext,
    InsufficientWaypointsError,
    InvalidConfigError,
    InvalidInputError,
    InvalidModeError,
    NonFiniteCoordinateError,
    OffloadError,
    OffloadTimeoutError,
    OffloadUnavailableError,
    RouteplotError,
)

__all__ = [
    "FrameScheduler",
    "FrameContext",
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "RouteplotError",
    "InvalidInputError",
    "InsufficientWaypointsError",
    "NonFiniteCoordinateError",
    "InvalidModeError",
    "InvalidConfigError",
    "OffloadError",
    "OffloadTimeoutError",
    "OffloadUnavailableError",
]
