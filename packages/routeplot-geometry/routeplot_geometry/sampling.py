"""Position and heading lookups over a finished ``Path``.

Progress lookups are index based: output points are spaced evenly in
curvature-weighted distance, so advancing progress at a constant rate
moves through corners more slowly. Distance lookups use the pre-jitter
cumulative arc length. Every function returns ``None`` for an empty path.
"""
from __future__ import annotations

import bisect
import math

from routeplot_geometry import vec
from routeplot_geometry.types import Path
from routeplot_geometry.vec import Vec2

TANGENT_EPSILON = 0.1


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def _index_at_progress(path: Path, progress: float) -> tuple[int, float]:
    last = len(path.points) - 1
    scaled = _clamp01(progress) * last
    index = min(int(math.floor(scaled)), last)
    return index, scaled - index


def _lerp_points(path: Path, index: int, t: float) -> Vec2:
    p1 = path.points[index]
    if t <= 0.0 or index >= len(path.points) - 1:
        return (p1.x, p1.y)
    p2 = path.points[index + 1]
    return vec.lerp((p1.x, p1.y), (p2.x, p2.y), t)


def point_at_progress(path: Path, progress: float) -> Vec2 | None:
    if path.is_empty:
        return None
    index, t = _index_at_progress(path, progress)
    return _lerp_points(path, index, t)


def distance_at_progress(path: Path, progress: float) -> float | None:
    """Arc length reached at ``progress``, consistent with ``point_at_progress``."""
    if path.is_empty:
        return None
    index, t = _index_at_progress(path, progress)
    start = path.points[index].cumulative_distance
    if t <= 0.0 or index >= len(path.points) - 1:
        return start
    end = path.points[index + 1].cumulative_distance
    return start + (end - start) * t


def _bracket(path: Path, distance: float) -> tuple[int, float]:
    """Index and fraction of the point pair containing ``distance``."""
    points = path.points
    if distance <= 0.0:
        return 0, 0.0
    if distance >= path.total_length:
        return len(points) - 1, 0.0
    cum = [p.cumulative_distance for p in points]
    right = bisect.bisect_left(cum, distance)
    left = right - 1
    span = cum[right] - cum[left]
    if span == 0.0:
        return left, 0.0
    return left, (distance - cum[left]) / span


def point_at_distance(path: Path, distance: float) -> Vec2 | None:
    if path.is_empty:
        return None
    index, t = _bracket(path, distance)
    return _lerp_points(path, index, t)


def progress_at_distance(path: Path, distance: float) -> float | None:
    """Inverse of ``distance_at_progress``."""
    if path.is_empty:
        return None
    if len(path.points) == 1:
        return 0.0
    index, t = _bracket(path, distance)
    return _clamp01((index + t) / (len(path.points) - 1))


def tangent_at_distance(
    path: Path, distance: float, epsilon: float = TANGENT_EPSILON,
) -> float | None:
    """Heading in radians at ``distance`` from a central difference."""
    if path.is_empty:
        return None
    before = point_at_distance(path, distance - epsilon)
    after = point_at_distance(path, distance + epsilon)
    if before is None or after is None or before == after:
        return 0.0
    return vec.heading(before, after)


def pose_at_progress(path: Path, progress: float) -> tuple[float, float, float] | None:
    """Position and heading ``(x, y, radians)`` at ``progress``."""
    point = point_at_progress(path, progress)
    if point is None:
        return None
    distance = distance_at_progress(path, progress)
    heading = tangent_at_distance(path, distance)
    return (point[0], point[1], heading)
