"""Per-segment path shapes: line, squiggle and randomised jitter."""
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import replace

from routeplot_geometry import vec
from routeplot_geometry.config import PathConfig
from routeplot_geometry.types import Path, PathPoint, Waypoint
from routeplot_geometry.vec import Vec2

SQUIGGLE_AMPLITUDE = 0.15


def segment_controllers(waypoints: Sequence[Waypoint]) -> list[int | None]:
    """Index of the major waypoint controlling each segment.

    A segment is controlled by the nearest major waypoint at or before its
    start. Segments preceded only by minor waypoints have no controller.
    """
    controllers: list[int | None] = []
    last_major: int | None = None
    for i in range(len(waypoints) - 1):
        if waypoints[i].is_major:
            last_major = i
        controllers.append(last_major)
    return controllers


def segment_shapes(waypoints: Sequence[Waypoint]) -> list[str]:
    return [
        "line" if c is None else waypoints[c].path_shape
        for c in segment_controllers(waypoints)
    ]


def path_seed(waypoints: Sequence[Waypoint]) -> float:
    """Stable seed derived from waypoint positions."""
    return sum(wp.x * 1000 + wp.y for wp in waypoints)


def _fract(value: float) -> float:
    return value - math.floor(value)


def jitter_offset(seed: float, index: int, amount: float) -> Vec2:
    """Deterministic offset in ``[-amount, amount]`` on both axes."""
    s = seed + index * 100
    rx = _fract(math.sin(s) * 10000) * 2 - 1
    ry = _fract(math.cos(s) * 10000) * 2 - 1
    return (rx * amount, ry * amount)


def squiggle_control(
    p1: Vec2, p2: Vec2, index: int, amplitude: float = SQUIGGLE_AMPLITUDE,
) -> Vec2:
    """Quadratic control point for drawing a squiggle between two path points."""
    mid = vec.midpoint(p1, p2)
    perp = vec.scale(vec.perpendicular(vec.sub(p2, p1)), amplitude)
    wave = math.sin(index * 0.5) * 0.5
    return vec.add(mid, vec.scale(perp, wave))


def apply_shapes(
    path: Path, waypoints: Sequence[Waypoint], config: PathConfig | None = None,
) -> Path:
    """Annotate every point with its segment shape and jitter randomised ones.

    Distances are left untouched; jitter moves only ``x``/``y`` and keeps
    the pre-jitter position in ``original_x``/``original_y``.
    """
    if path.is_empty or len(waypoints) < 2:
        return path
    if config is None:
        config = PathConfig()

    shapes = segment_shapes(waypoints)
    seed = path_seed(waypoints) if "randomised" in shapes else 0.0
    last_segment = len(shapes) - 1

    points: list[PathPoint] = []
    for i, point in enumerate(path.points):
        shape = shapes[min(point.segment_index, last_segment)]
        if shape == "randomised":
            dx, dy = jitter_offset(seed, i, config.jitter_amount)
            points.append(replace(
                point,
                x=point.original_x + dx,
                y=point.original_y + dy,
                path_shape=shape,
            ))
        else:
            points.append(replace(point, path_shape=shape))
    return replace(path, points=tuple(points))
