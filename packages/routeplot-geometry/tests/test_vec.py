"""Tests for plane vector helpers."""
import math

import pytest

from routeplot_geometry import vec


class TestArithmetic:
    def test_add(self):
        assert vec.add((1.0, 2.0), (3.0, 4.0)) == (4.0, 6.0)

    def test_sub(self):
        assert vec.sub((5.0, 7.0), (2.0, 3.0)) == (3.0, 4.0)

    def test_scale(self):
        assert vec.scale((2.0, -3.0), 2.0) == (4.0, -6.0)

    def test_dot(self):
        assert vec.dot((1.0, 2.0), (3.0, 4.0)) == 11.0

    def test_cross_sign(self):
        """Cross product is positive for a counter-clockwise turn."""
        assert vec.cross((1.0, 0.0), (0.0, 1.0)) == 1.0
        assert vec.cross((0.0, 1.0), (1.0, 0.0)) == -1.0


class TestMagnitude:
    def test_magnitude(self):
        assert vec.magnitude((3.0, 4.0)) == 5.0

    def test_normalize(self):
        n = vec.normalize((3.0, 4.0))
        assert n[0] == pytest.approx(0.6)
        assert n[1] == pytest.approx(0.8)

    def test_normalize_zero(self):
        """Normalizing a zero vector returns it unchanged."""
        assert vec.normalize((0.0, 0.0)) == (0.0, 0.0)

    def test_distance(self):
        assert vec.distance((1.0, 1.0), (4.0, 5.0)) == 5.0


class TestInterpolation:
    def test_lerp_endpoints(self):
        assert vec.lerp((0.0, 0.0), (10.0, 20.0), 0.0) == (0.0, 0.0)
        assert vec.lerp((0.0, 0.0), (10.0, 20.0), 1.0) == (10.0, 20.0)

    def test_lerp_middle(self):
        assert vec.lerp((0.0, 0.0), (10.0, 20.0), 0.25) == (2.5, 5.0)

    def test_midpoint(self):
        assert vec.midpoint((0.0, 0.0), (4.0, 6.0)) == (2.0, 3.0)

    def test_perpendicular(self):
        assert vec.perpendicular((1.0, 0.0)) == (-0.0, 1.0)

    def test_heading(self):
        assert vec.heading((0.0, 0.0), (0.0, 5.0)) == pytest.approx(math.pi / 2)
        assert vec.heading((0.0, 0.0), (-1.0, 0.0)) == pytest.approx(math.pi)
