"""Waypoint pause lookup and the engine's wait predicate."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from routeplot_geometry.types import Path, Waypoint


@dataclass(frozen=True, slots=True)
class WaitRequest:
    index: int
    duration: float
    progress: float


WaitPredicate = Callable[[float, float], WaitRequest | None]


class WaypointPauses:
    """Answers which waypoint pauses are crossed as progress advances.

    Only major waypoints with a positive pause count. The first waypoint
    and the last waypoint never trigger a wait: playback starts at the
    first and completion takes over at the last.
    """

    def __init__(self, waypoints: Sequence[Waypoint], progress: Sequence[float]) -> None:
        self._pauses = [wp.pause_duration if wp.has_pause else 0.0 for wp in waypoints]
        self._progress = list(progress)
        count = min(len(self._pauses), len(self._progress))
        self._candidates = [
            i for i in range(1, count - 1) if self._pauses[i] > 0
        ]

    @classmethod
    def from_path(cls, waypoints: Sequence[Waypoint], path: Path) -> WaypointPauses:
        return cls(waypoints, path.waypoint_progress)

    def __len__(self) -> int:
        return len(self._candidates)

    def pause_for(self, index: int) -> float:
        """Pause length in ms at waypoint ``index``; 0 when there is none."""
        if 0 <= index < len(self._pauses):
            return self._pauses[index]
        return 0.0

    def progress_of(self, index: int) -> float:
        return self._progress[index]

    def __call__(self, previous: float, current: float) -> WaitRequest | None:
        for i in self._candidates:
            at = self._progress[i]
            if previous < at <= current:
                return WaitRequest(index=i, duration=self._pauses[i], progress=at)
        return None
