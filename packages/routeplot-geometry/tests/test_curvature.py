"""Tests for turning-angle curvature and the curvature cache."""
import pytest

from routeplot_geometry import CurvatureCache, turning_angles
from routeplot_geometry.curvature import path_key, turning_angle


class TestTurningAngle:
    def test_straight_is_zero(self):
        assert turning_angle((0, 0), (1, 0), (2, 0)) == 0.0

    def test_right_angle_is_half(self):
        assert turning_angle((0, 0), (1, 0), (1, 1)) == pytest.approx(0.5)

    def test_reversal_is_one(self):
        """A full reversal reads as maximal curvature, not straight."""
        assert turning_angle((0, 0), (1, 0), (0, 0)) == pytest.approx(1.0)

    def test_direction_does_not_matter(self):
        left = turning_angle((0, 0), (1, 0), (1, 1))
        right = turning_angle((0, 0), (1, 0), (1, -1))
        assert left == pytest.approx(right)

    def test_duplicate_point_is_zero(self):
        assert turning_angle((0, 0), (0, 0), (5, 5)) == 0.0


class TestTurningAngles:
    def test_endpoints_zero(self):
        values = turning_angles([(0, 0), (1, 0), (1, 1), (2, 1)])
        assert values[0] == 0.0
        assert values[-1] == 0.0
        assert values[1] == pytest.approx(0.5)
        assert values[2] == pytest.approx(0.5)

    def test_repeated_samples_read_the_corner(self):
        values = turning_angles([(0, 0), (1, 0), (1, 0), (1, 0), (1, 1)])
        assert values[1:4] == pytest.approx([0.5, 0.5, 0.5])
        assert values[0] == 0.0
        assert values[-1] == 0.0

    def test_all_identical_points(self):
        assert turning_angles([(2, 2)] * 4) == [0.0] * 4

    def test_short_inputs(self):
        assert turning_angles([]) == []
        assert turning_angles([(1, 1)]) == [0.0]
        assert turning_angles([(1, 1), (2, 2)]) == [0.0, 0.0]


class TestPathKey:
    def test_uses_first_middle_last_and_length(self):
        pts = [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]
        assert path_key(pts) == (5, (0, 0), (2, 2), (4, 4))

    def test_empty(self):
        assert path_key([])[0] == 0


class TestCurvatureCache:
    def test_miss_then_hit(self):
        cache = CurvatureCache(max_size=4)
        pts = [(0, 0), (1, 0), (1, 1)]
        first = cache.curvatures(pts)
        second = cache.curvatures(pts)
        assert first == second
        assert cache.misses == 1
        assert cache.hits == 1

    def test_returned_list_is_a_copy(self):
        cache = CurvatureCache()
        pts = [(0, 0), (1, 0), (1, 1)]
        cache.curvatures(pts)[1] = 99.0
        assert cache.curvatures(pts)[1] == pytest.approx(0.5)

    def test_key_collision_recomputes(self):
        """Paths sharing first/middle/last points still get their own values."""
        cache = CurvatureCache()
        a = [(0, 0), (1, 0), (2, 0), (3, 5), (4, 0)]
        b = [(0, 0), (1, 3), (2, 0), (3, 0), (4, 0)]
        assert path_key(a) == path_key(b)
        cache.curvatures(a)
        assert cache.curvatures(b) == turning_angles(b)
        assert cache.misses == 2

    def test_evicts_least_recently_used(self):
        cache = CurvatureCache(max_size=2)
        a = [(0, 0), (1, 0), (2, 0)]
        b = [(0, 0), (1, 1), (2, 0)]
        c = [(0, 0), (1, 2), (2, 0)]
        cache.curvatures(a)
        cache.curvatures(b)
        cache.curvatures(a)
        cache.curvatures(c)
        assert len(cache) == 2
        cache.curvatures(a)
        assert cache.hits == 2
        cache.curvatures(b)
        assert cache.misses == 4

    def test_zero_size_never_stores(self):
        cache = CurvatureCache(max_size=0)
        pts = [(0, 0), (1, 0), (1, 1)]
        cache.curvatures(pts)
        cache.curvatures(pts)
        assert len(cache) == 0
        assert cache.hits == 0

    def test_clear(self):
        cache = CurvatureCache()
        cache.curvatures([(0, 0), (1, 0), (1, 1)])
        cache.clear()
        assert len(cache) == 0
        assert cache.misses == 0
