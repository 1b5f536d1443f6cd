"""Waypoints to final path: spline, curvature, resample, shapes."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from routeplot_geometry.config import PathConfig
from routeplot_geometry.curvature import CurvatureCache, turning_angles
from routeplot_geometry.reparam import finalize, resample_uniform, resample_weighted
from routeplot_geometry.shapes import apply_shapes
from routeplot_geometry.spline import interpolate
from routeplot_geometry.types import EMPTY_PATH, Path, Waypoint

logger = logging.getLogger(__name__)


def build_path(
    waypoints: Sequence[Waypoint],
    config: PathConfig | None = None,
    cache: CurvatureCache | None = None,
) -> Path:
    """Build the renderable path through ``waypoints``.

    Fewer than two waypoints yield an empty path. The result depends only
    on the arguments; passing a cache never changes it.
    """
    if len(waypoints) < 2:
        return EMPTY_PATH
    if config is None:
        config = PathConfig()

    raw = interpolate(waypoints, config)
    if config.resampling == "uniform":
        resampled = resample_uniform(raw, config.target_spacing)
    else:
        if cache is not None:
            curvatures = cache.curvatures(raw.points)
        else:
            curvatures = turning_angles(raw.points)
        resampled = resample_weighted(raw, config.target_spacing, config, curvatures)

    path = apply_shapes(finalize(resampled), waypoints, config)
    logger.debug(
        "built path: %d waypoints, %d points, length %.2f",
        len(waypoints), len(path.points), path.total_length,
    )
    return path


class PathBuilder:
    """Builds paths with a curvature cache shared across calls."""

    def __init__(self, config: PathConfig | None = None) -> None:
        self.config = config if config is not None else PathConfig()
        self.cache = CurvatureCache(self.config.cache_size)

    def build(
        self, waypoints: Sequence[Waypoint], config: PathConfig | None = None,
    ) -> Path:
        return build_path(waypoints, config or self.config, self.cache)

    def clear_cache(self) -> None:
        self.cache.clear()
