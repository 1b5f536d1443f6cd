"""Shared types and the error taxonomy for routeplot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class FrameContext:
    frame_number: int
    now: float
    delta: float
    request_stop: Callable[[], None]


class RouteplotError(Exception):
    """Base class for every error raised by routeplot packages."""


class InvalidInputError(RouteplotError, ValueError):
    """Raised when caller-supplied data cannot produce valid geometry or timing."""


class InsufficientWaypointsError(InvalidInputError):
    """Raised when an operation needs at least two waypoints."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"At least 2 waypoints required, got {count}")


class NonFiniteCoordinateError(InvalidInputError):
    """Raised when a coordinate is NaN or infinite."""


class InvalidModeError(InvalidInputError):
    """Raised for an unknown mode, shape, or other enumerated string."""

    def __init__(self, kind: str, value: object, allowed: tuple[str, ...]) -> None:
        self.kind = kind
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Invalid {kind} {value!r}, expected one of {', '.join(allowed)}"
        )


class InvalidConfigError(InvalidInputError):
    """Raised when a configuration bundle holds an out-of-range value."""


class OffloadError(RouteplotError):
    """Raised when a background path computation fails."""


class OffloadTimeoutError(OffloadError):
    """Raised when a background path computation exceeds its timeout."""

    def __init__(self, request_id: int, timeout: float) -> None:
        self.request_id = request_id
        self.timeout = timeout
        super().__init__(f"Path request {request_id} timed out after {timeout}s")


class OffloadUnavailableError(OffloadError):
    """Raised when the background executor cannot accept work."""


System = Callable[[FrameContext], None]
