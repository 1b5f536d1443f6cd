"""Path generation configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from routeplot.types import InvalidConfigError, InvalidModeError

from routeplot_geometry.easing import EASINGS

RESAMPLING_MODES = ("curvature", "uniform")


@dataclass(frozen=True)
class PathConfig:
    """Immutable tunables for the waypoint-to-path pipeline.

    Attributes:
        tension: Default spline tension; 0.5 is the standard centripetal curve.
        points_per_segment: Raw spline samples per waypoint pair.
        target_spacing: Output spacing in path units (pixels for canvas input).
        max_curvature: Curvature at which corner slowing saturates.
        min_corner_speed: Velocity factor floor at the tightest corners.
        jitter_amount: Offset magnitude for the ``randomised`` shape.
        alpha: Knot parameterization exponent (0.5 = centripetal).
        resampling: ``"curvature"`` for corner slowing, ``"uniform"`` for
            plain arc-length spacing.
        corner_easing: Name of the easing curve applied to the curvature
            penalty.
        cache_size: Maximum entries held by a curvature cache.
    """

    tension: float = 0.1
    points_per_segment: int = 100
    target_spacing: float = 2.0
    max_curvature: float = 0.03
    min_corner_speed: float = 0.2
    jitter_amount: float = 3.0
    alpha: float = 0.5
    resampling: str = "curvature"
    corner_easing: str = "ease_in"
    cache_size: int = 32

    def __post_init__(self) -> None:
        if self.points_per_segment < 1:
            raise InvalidConfigError("points_per_segment must be at least 1")
        if self.target_spacing <= 0:
            raise InvalidConfigError("target_spacing must be positive")
        if self.max_curvature <= 0:
            raise InvalidConfigError("max_curvature must be positive")
        if not 0 < self.min_corner_speed <= 1:
            raise InvalidConfigError("min_corner_speed must be in (0, 1]")
        if self.jitter_amount < 0:
            raise InvalidConfigError("jitter_amount must not be negative")
        if not 0 <= self.alpha <= 1:
            raise InvalidConfigError("alpha must be in [0, 1]")
        if self.cache_size < 0:
            raise InvalidConfigError("cache_size must not be negative")
        if self.resampling not in RESAMPLING_MODES:
            raise InvalidModeError("resampling", self.resampling, RESAMPLING_MODES)
        if self.corner_easing not in EASINGS:
            raise InvalidModeError(
                "corner_easing", self.corner_easing, tuple(EASINGS),
            )
