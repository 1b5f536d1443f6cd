"""Centripetal Catmull-Rom interpolation through ordered waypoints.

Each waypoint pair is a cubic Hermite segment whose tangents are the
non-uniform Catmull-Rom tangents for knot intervals ``|p_j - p_i| ** alpha``.
Tangents are scaled by ``2 * tension`` so tension 0.5 gives the standard
centripetal curve. End segments reuse the boundary waypoint as the missing
neighbour.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from routeplot.types import InsufficientWaypointsError

from routeplot_geometry import vec
from routeplot_geometry.config import PathConfig
from routeplot_geometry.types import Waypoint
from routeplot_geometry.vec import Vec2

logger = logging.getLogger(__name__)

_EPSILON = 1e-9


@dataclass(frozen=True)
class SplinePath:
    """Dense raw samples of an interpolated waypoint sequence.

    ``segments[k]`` is the waypoint pair index sample ``k`` belongs to.
    Waypoint ``i`` sits exactly at sample ``i * points_per_segment``.
    """

    points: tuple[Vec2, ...]
    segments: tuple[int, ...]
    points_per_segment: int
    waypoint_count: int

    def __len__(self) -> int:
        return len(self.points)

    def waypoint_index(self, i: int) -> int:
        return i * self.points_per_segment


def _interval(a: Vec2, b: Vec2, alpha: float) -> float:
    d = vec.distance(a, b)
    if d < _EPSILON:
        return 0.0
    return d ** alpha


def _tangents(
    p0: Vec2, p1: Vec2, p2: Vec2, p3: Vec2, alpha: float, tension: float,
) -> tuple[Vec2, Vec2] | None:
    """Return the Hermite tangents at p1 and p2, or None for a zero-length segment."""
    d12 = _interval(p1, p2, alpha)
    if d12 == 0.0:
        return None
    d01 = _interval(p0, p1, alpha) or d12
    d23 = _interval(p2, p3, alpha) or d12

    chord = vec.scale(vec.sub(p2, p1), 1.0 / d12)
    m1 = vec.add(
        vec.sub(
            vec.scale(vec.sub(p1, p0), 1.0 / d01),
            vec.scale(vec.sub(p2, p0), 1.0 / (d01 + d12)),
        ),
        chord,
    )
    m2 = vec.add(
        vec.sub(chord, vec.scale(vec.sub(p3, p1), 1.0 / (d12 + d23))),
        vec.scale(vec.sub(p3, p2), 1.0 / d23),
    )
    k = d12 * 2.0 * tension
    return vec.scale(m1, k), vec.scale(m2, k)


def hermite(p1: Vec2, p2: Vec2, m1: Vec2, m2: Vec2, u: float) -> Vec2:
    u2 = u * u
    u3 = u2 * u
    h00 = 2 * u3 - 3 * u2 + 1
    h10 = u3 - 2 * u2 + u
    h01 = -2 * u3 + 3 * u2
    h11 = u3 - u2
    return (
        h00 * p1[0] + h10 * m1[0] + h01 * p2[0] + h11 * m2[0],
        h00 * p1[1] + h10 * m1[1] + h01 * p2[1] + h11 * m2[1],
    )


def sample_segment(
    p0: Vec2,
    p1: Vec2,
    p2: Vec2,
    p3: Vec2,
    samples: int,
    tension: float,
    alpha: float = 0.5,
) -> list[Vec2]:
    """Evaluate the p1 -> p2 segment at ``samples + 1`` evenly spaced parameters.

    The first and last samples are exactly p1 and p2.
    """
    tangents = _tangents(p0, p1, p2, p3, alpha, tension)
    if tangents is None:
        return [p1] * (samples + 1)
    m1, m2 = tangents
    out = [hermite(p1, p2, m1, m2, j / samples) for j in range(samples)]
    out.append(p2)
    return out


def interpolate(
    waypoints: Sequence[Waypoint], config: PathConfig | None = None,
) -> SplinePath:
    """Interpolate a smooth curve passing through every waypoint.

    Raises:
        InsufficientWaypointsError: Fewer than two waypoints were given.
    """
    if len(waypoints) < 2:
        raise InsufficientWaypointsError(len(waypoints))
    if config is None:
        config = PathConfig()

    n = len(waypoints)
    pps = config.points_per_segment
    positions = [wp.position for wp in waypoints]
    points: list[Vec2] = []
    segments: list[int] = []

    for i in range(n - 1):
        p0 = positions[max(i - 1, 0)]
        p1 = positions[i]
        p2 = positions[i + 1]
        p3 = positions[min(i + 2, n - 1)]
        tension = waypoints[i].tension
        if tension is None:
            tension = config.tension
        samples = sample_segment(p0, p1, p2, p3, pps, tension, config.alpha)
        if i > 0:
            samples = samples[1:]
        points.extend(samples)
        segments.extend([i] * len(samples))

    logger.debug("interpolated %d waypoints into %d samples", n, len(points))
    return SplinePath(
        points=tuple(points),
        segments=tuple(segments),
        points_per_segment=pps,
        waypoint_count=n,
    )
