"""routeplot-geometry - Waypoint interpolation, corner slowing, and path sampling."""

from routeplot_geometry.config import PathConfig
from routeplot_geometry.curvature import CurvatureCache, turning_angles
from routeplot_geometry.easing import EASINGS
from routeplot_geometry.pipeline import PathBuilder, build_path
from routeplot_geometry.reparam import (
    finalize,
    resample_uniform,
    resample_weighted,
    velocity_factor,
)
from routeplot_geometry.sampling import (
    distance_at_progress,
    point_at_distance,
    point_at_progress,
    pose_at_progress,
    progress_at_distance,
    tangent_at_distance,
)
from routeplot_geometry.shapes import apply_shapes, squiggle_control
from routeplot_geometry.spline import SplinePath, interpolate
from routeplot_geometry.transform import Bounds, CoordinateTransform
from routeplot_geometry.types import Path, PathPoint, Waypoint

__all__ = [
    "Waypoint",
    "PathPoint",
    "Path",
    "PathConfig",
    "EASINGS",
    "SplinePath",
    "interpolate",
    "turning_angles",
    "CurvatureCache",
    "velocity_factor",
    "resample_uniform",
    "resample_weighted",
    "finalize",
    "apply_shapes",
    "squiggle_control",
    "build_path",
    "PathBuilder",
    "point_at_progress",
    "point_at_distance",
    "tangent_at_distance",
    "pose_at_progress",
    "progress_at_distance",
    "distance_at_progress",
    "CoordinateTransform",
    "Bounds",
]
