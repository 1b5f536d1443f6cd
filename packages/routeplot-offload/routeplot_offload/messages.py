"""Request and response messages crossing the offload boundary."""
from __future__ import annotations

from dataclasses import dataclass, field

from routeplot_geometry.config import PathConfig
from routeplot_geometry.types import Path, Waypoint


@dataclass(frozen=True)
class PathRequest:
    """Snapshot of the inputs for one path computation.

    Waypoints are held as a tuple of frozen dataclasses, so later edits by
    the caller never reach an in-flight request.
    """

    request_id: int
    waypoints: tuple[Waypoint, ...]
    config: PathConfig = field(default_factory=PathConfig)


@dataclass(frozen=True)
class PathResponse:
    """Outcome of a request, matched to it by ``request_id``."""

    request_id: int
    path: Path | None = None
    error: Exception | None = None
    elapsed: float = 0.0
    backend: str = "inline"

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None
