"""Tests for waypoint validation and path configuration."""
import dataclasses
import math

import pytest

from routeplot.types import (
    InvalidConfigError,
    InvalidInputError,
    InvalidModeError,
    NonFiniteCoordinateError,
)
from routeplot_geometry import Path, PathConfig, Waypoint


class TestWaypoint:
    def test_defaults(self):
        wp = Waypoint(0.25, 0.75)
        assert wp.is_major is True
        assert wp.pause_duration == 0.0
        assert wp.tension is None
        assert wp.path_shape == "line"
        assert wp.position == (0.25, 0.75)

    def test_non_finite_coordinate_rejected(self):
        with pytest.raises(NonFiniteCoordinateError):
            Waypoint(math.nan, 0.0)
        with pytest.raises(NonFiniteCoordinateError):
            Waypoint(0.0, math.inf)

    def test_unknown_shape_rejected(self):
        with pytest.raises(InvalidModeError) as exc_info:
            Waypoint(0.0, 0.0, path_shape="zigzag")
        assert exc_info.value.value == "zigzag"

    def test_negative_pause_rejected(self):
        with pytest.raises(InvalidInputError):
            Waypoint(0.0, 0.0, pause_duration=-1.0)

    def test_has_pause_only_on_major(self):
        assert Waypoint(0, 0, pause_duration=500).has_pause is True
        assert Waypoint(0, 0, is_major=False, pause_duration=500).has_pause is False
        assert Waypoint(0, 0).has_pause is False

    def test_frozen(self):
        wp = Waypoint(1.0, 2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            wp.x = 5.0  # type: ignore[misc]

    def test_errors_are_value_errors(self):
        """Bad input can be caught as a plain ValueError."""
        with pytest.raises(ValueError):
            Waypoint(math.nan, 0.0)


class TestPathConfig:
    def test_defaults(self):
        config = PathConfig()
        assert config.tension == 0.1
        assert config.points_per_segment == 100
        assert config.target_spacing == 2.0
        assert config.min_corner_speed == 0.2
        assert config.jitter_amount == 3.0
        assert config.resampling == "curvature"
        assert config.corner_easing == "ease_in"

    def test_replace_derives_variant(self):
        config = dataclasses.replace(PathConfig(), tension=0.5)
        assert config.tension == 0.5

    def test_unknown_resampling_rejected(self):
        with pytest.raises(InvalidModeError):
            PathConfig(resampling="random")

    def test_unknown_easing_rejected(self):
        with pytest.raises(InvalidModeError):
            PathConfig(corner_easing="bounce")

    @pytest.mark.parametrize("field,value", [
        ("points_per_segment", 0),
        ("target_spacing", 0.0),
        ("max_curvature", -1.0),
        ("min_corner_speed", 0.0),
        ("min_corner_speed", 1.5),
        ("jitter_amount", -0.1),
        ("alpha", 2.0),
        ("cache_size", -1),
    ])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(InvalidConfigError):
            PathConfig(**{field: value})


class TestPath:
    def test_empty_path(self):
        path = Path()
        assert path.is_empty
        assert len(path) == 0
        assert path.total_length == 0.0
        assert path.waypoint_progress == ()
