"""Tests for centripetal Catmull-Rom interpolation."""
import pytest

from routeplot.types import InsufficientWaypointsError
from routeplot_geometry import PathConfig, Waypoint, interpolate
from routeplot_geometry.spline import sample_segment


def _wps(*coords, **kwargs):
    return [Waypoint(x, y, **kwargs) for x, y in coords]


class TestInterpolate:
    def test_requires_two_waypoints(self):
        with pytest.raises(InsufficientWaypointsError) as exc_info:
            interpolate(_wps((0, 0)))
        assert exc_info.value.count == 1

    def test_requires_any_waypoints(self):
        with pytest.raises(InsufficientWaypointsError):
            interpolate([])

    def test_sample_count(self):
        """n waypoints produce (n - 1) * points_per_segment + 1 samples."""
        config = PathConfig(points_per_segment=20)
        raw = interpolate(_wps((0, 0), (100, 0), (100, 100), (0, 100)), config)
        assert len(raw) == 3 * 20 + 1
        assert len(raw.segments) == len(raw.points)

    def test_passes_through_every_waypoint(self):
        """Waypoint i sits exactly at raw sample i * points_per_segment."""
        coords = [(0, 0), (120, 40), (80, 160), (200, 200), (260, 90)]
        config = PathConfig(points_per_segment=25)
        raw = interpolate(_wps(*coords), config)
        for i, (x, y) in enumerate(coords):
            px, py = raw.points[raw.waypoint_index(i)]
            assert px == pytest.approx(x)
            assert py == pytest.approx(y)

    def test_segment_indices(self):
        config = PathConfig(points_per_segment=4)
        raw = interpolate(_wps((0, 0), (10, 0), (20, 5)), config)
        assert raw.segments == (0, 0, 0, 0, 0, 1, 1, 1, 1)

    def test_straight_line_stays_on_chord(self):
        """Two points at tension 0.5 stay on the chord, symmetric about the middle."""
        config = PathConfig(tension=0.5, points_per_segment=10)
        raw = interpolate(_wps((0, 0), (50, 0)), config)
        assert all(y == pytest.approx(0.0) for _, y in raw.points)
        assert raw.points[5][0] == pytest.approx(25.0)
        assert raw.points[2][0] == pytest.approx(50.0 - raw.points[8][0])

    def test_straight_line_low_tension_is_monotonic(self):
        raw = interpolate(_wps((0, 0), (50, 0)), PathConfig(points_per_segment=30))
        xs = [p[0] for p in raw.points]
        assert all(b >= a for a, b in zip(xs, xs[1:]))

    def test_waypoint_tension_override(self):
        """A waypoint's tension overrides the default for its segment only."""
        coords = [(0, 0), (100, 0), (100, 100)]
        config = PathConfig(points_per_segment=10)
        plain = interpolate(_wps(*coords), config)
        overridden = interpolate(
            [Waypoint(0, 0), Waypoint(100, 0, tension=0.9), Waypoint(100, 100)],
            config,
        )
        assert plain.points[:11] == overridden.points[:11]
        assert plain.points[15] != overridden.points[15]

    def test_duplicate_waypoints_do_not_break(self):
        """A zero-length segment repeats its start point."""
        config = PathConfig(points_per_segment=5)
        raw = interpolate(_wps((10, 10), (10, 10), (30, 10)), config)
        assert raw.points[:6] == ((10, 10),) * 6
        assert raw.points[-1] == pytest.approx((30, 10))
        for x, y in raw.points:
            assert x == x and y == y


class TestSampleSegment:
    def test_endpoints_exact(self):
        samples = sample_segment((0, 0), (10, 0), (20, 10), (30, 10), 8, 0.5)
        assert len(samples) == 9
        assert samples[0] == (10, 0)
        assert samples[-1] == (20, 10)

    def test_zero_length(self):
        samples = sample_segment((0, 0), (5, 5), (5, 5), (9, 9), 3, 0.5)
        assert samples == [(5, 5)] * 4
