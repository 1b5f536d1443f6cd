"""Arc-length reparameterization with corner slowing.

Raw spline samples bunch up or spread out depending on the local curve
parameterization. Resampling turns them into points spaced evenly either in
plain arc length (``uniform``) or in curvature-weighted distance
(``curvature``), where each raw step counts as ``length / velocity_factor``
so tight corners receive more output points and a constant progress rate
visibly slows through them.
"""
from __future__ import annotations

import bisect
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from routeplot_geometry import vec
from routeplot_geometry.config import PathConfig
from routeplot_geometry.curvature import turning_angles
from routeplot_geometry.easing import EASINGS
from routeplot_geometry.spline import SplinePath
from routeplot_geometry.types import Path, PathPoint
from routeplot_geometry.vec import Vec2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resampled:
    """Evenly spaced positions before distances are attached.

    ``speeds[i]`` is the lowest velocity factor among the raw samples
    passed between output point ``i - 1`` and output point ``i``.
    ``waypoint_progress`` is expressed in output-index space, the same
    space ``point_at_progress`` reads.
    """

    points: tuple[Vec2, ...]
    segments: tuple[int, ...]
    speeds: tuple[float, ...]
    waypoint_progress: tuple[float, ...] = ()


def velocity_factor(curvature: float, config: PathConfig) -> float:
    """Map curvature onto a speed factor in ``[min_corner_speed, 1]``."""
    min_speed = config.min_corner_speed
    norm = min(curvature / config.max_curvature, 1.0)
    eased = EASINGS[config.corner_easing](norm)
    return max(min_speed, 1.0 - eased * (1.0 - min_speed))


def cumulative_lengths(points: Sequence[Vec2]) -> list[float]:
    out = [0.0] * len(points)
    for i in range(1, len(points)):
        out[i] = out[i - 1] + vec.distance(points[i - 1], points[i])
    return out


def _waypoint_progress(raw: SplinePath, weights: Sequence[float]) -> tuple[float, ...]:
    total = weights[-1] if weights else 0.0
    if total <= 0:
        return tuple(0.0 for _ in range(raw.waypoint_count))
    return tuple(
        min(weights[raw.waypoint_index(i)] / total, 1.0)
        for i in range(raw.waypoint_count)
    )


def _passthrough(raw: SplinePath) -> Resampled:
    return Resampled(
        points=raw.points,
        segments=raw.segments,
        speeds=tuple(1.0 for _ in raw.points),
        waypoint_progress=tuple(0.0 for _ in range(raw.waypoint_count)),
    )


def _single(raw: SplinePath) -> Resampled:
    return Resampled(
        points=(raw.points[0],),
        segments=(raw.segments[0],),
        speeds=(1.0,),
        waypoint_progress=tuple(0.0 for _ in range(raw.waypoint_count)),
    )


def resample_uniform(raw: SplinePath, spacing: float) -> Resampled:
    """Emit points at exact arc-length multiples of ``spacing``.

    The final raw point is always emitted, so the last gap may be shorter.
    """
    if len(raw.points) < 2:
        return _passthrough(raw)
    cum = cumulative_lengths(raw.points)
    total = cum[-1]
    if total <= 0:
        return _single(raw)

    points = [raw.points[0]]
    segments = [raw.segments[0]]
    k = 1
    target = spacing
    while target < total - 1e-9:
        j = bisect.bisect_left(cum, target)
        t = (target - cum[j - 1]) / (cum[j] - cum[j - 1])
        points.append(vec.lerp(raw.points[j - 1], raw.points[j], t))
        segments.append(raw.segments[j])
        k += 1
        target = k * spacing
    points.append(raw.points[-1])
    segments.append(raw.segments[-1])

    # Every gap is ``spacing`` except the last, which runs to ``total``.
    last = len(points) - 1
    tail_start = (last - 1) * spacing
    tail = total - tail_start
    progress = []
    for i in range(raw.waypoint_count):
        d = cum[raw.waypoint_index(i)]
        if d <= tail_start:
            index = d / spacing
        else:
            index = (last - 1) + min((d - tail_start) / tail, 1.0)
        progress.append(min(index / last, 1.0))

    logger.debug("uniform resample: %d raw -> %d points", len(raw.points), len(points))
    return Resampled(
        points=tuple(points),
        segments=tuple(segments),
        speeds=tuple(1.0 for _ in points),
        waypoint_progress=tuple(progress),
    )


def resample_weighted(
    raw: SplinePath,
    spacing: float,
    config: PathConfig,
    curvatures: Sequence[float] | None = None,
) -> Resampled:
    """Resample evenly in curvature-weighted distance.

    ``curvatures`` holds one value per raw point; it is computed when not
    supplied.
    """
    if len(raw.points) < 2:
        return _passthrough(raw)
    if curvatures is None:
        curvatures = turning_angles(raw.points)

    factors = [velocity_factor(c, config) for c in curvatures]
    weights = [0.0] * len(raw.points)
    for i in range(1, len(raw.points)):
        step = vec.distance(raw.points[i - 1], raw.points[i])
        weights[i] = weights[i - 1] + step / factors[i]
    total = weights[-1]
    if total <= 0:
        return _single(raw)

    count = max(1, math.floor(total / spacing + 1e-9))
    points: list[Vec2] = []
    segments: list[int] = []
    speeds: list[float] = []
    reached = 0
    for i in range(count + 1):
        target = i / count * total
        j = bisect.bisect_left(weights, target)
        if j == 0:
            points.append(raw.points[0])
            segments.append(raw.segments[0])
            speeds.append(factors[0])
            continue
        j = min(j, len(weights) - 1)
        t = (target - weights[j - 1]) / (weights[j] - weights[j - 1])
        points.append(vec.lerp(raw.points[j - 1], raw.points[j], t))
        segments.append(raw.segments[j])
        speeds.append(min(factors[reached + 1:j + 1]) if j > reached else factors[j])
        reached = j

    logger.debug(
        "weighted resample: %d raw -> %d points (weighted length %.2f)",
        len(raw.points), len(points), total,
    )
    return Resampled(
        points=tuple(points),
        segments=tuple(segments),
        speeds=tuple(speeds),
        waypoint_progress=_waypoint_progress(raw, weights),
    )


def finalize(resampled: Resampled) -> Path:
    """Attach cumulative and normalized distance plus curvature to each point."""
    positions = resampled.points
    cum = cumulative_lengths(positions)
    total = cum[-1] if cum else 0.0
    curvature = turning_angles(positions)

    points = []
    last = len(positions) - 1
    for i, (x, y) in enumerate(positions):
        if total > 0:
            normalized = 1.0 if i == last else min(cum[i] / total, 1.0)
        else:
            normalized = 0.0
        points.append(PathPoint(
            x=x,
            y=y,
            original_x=x,
            original_y=y,
            cumulative_distance=cum[i],
            normalized_distance=normalized,
            curvature=curvature[i],
            speed_multiplier=resampled.speeds[i],
            segment_index=resampled.segments[i],
        ))
    return Path(
        points=tuple(points),
        total_length=total,
        waypoint_progress=resampled.waypoint_progress,
    )
