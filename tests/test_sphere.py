"""Unit tests for sphere intersection.

Tests cover:
- Sphere construction and validation
- Quadratic root solving
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Interval bounds (inclusive, near and far limits)
"""

import math

import numpy as np
import pytest

from tracelight.core.ray import dot, length, make_ray
from tracelight.errors import ConfigurationError
from tracelight.geometry import T_MIN, Interval, Sphere, make_sphere, solve_quadratic


class TestSphereBasics:
    """Tests for Sphere dataclass and basic operations."""

    def test_make_sphere(self, gray):
        """Test make_sphere convenience function."""
        sphere = make_sphere((1.0, 2.0, 3.0), 0.5, gray)
        np.testing.assert_allclose(sphere.center, [1.0, 2.0, 3.0])
        assert sphere.radius == 0.5
        assert sphere.material is gray

    def test_center_converted_to_vector(self, gray):
        """Test a tuple center is stored as a float64 vector."""
        sphere = Sphere((0, 0, -1), 1, gray)
        assert isinstance(sphere.center, np.ndarray)
        assert sphere.center.dtype == np.float64
        assert isinstance(sphere.radius, float)

    @pytest.mark.parametrize("radius", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_radius_rejected(self, gray, radius):
        """Test non-positive or non-finite radii raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Sphere((0.0, 0.0, 0.0), radius, gray)

    def test_configuration_error_is_value_error(self, gray):
        """Test ConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Sphere((0.0, 0.0, 0.0), -0.5, gray)


class TestSolveQuadratic:
    """Tests for the numerically robust quadratic solver."""

    def test_two_roots_sorted(self):
        """Test (t - 1)(t - 3) = t^2 - 4t + 3 yields (1, 3)."""
        roots = solve_quadratic(1.0, -4.0, 3.0)
        assert roots == pytest.approx((1.0, 3.0))

    def test_roots_sorted_for_positive_b(self):
        """Test roots are ascending when b is positive."""
        roots = solve_quadratic(1.0, 4.0, 3.0)
        assert roots == pytest.approx((-3.0, -1.0))

    def test_no_real_roots(self):
        """Test a negative discriminant yields no roots."""
        assert solve_quadratic(1.0, 0.0, 1.0) == ()

    def test_double_root(self):
        """Test a zero discriminant yields one root."""
        assert solve_quadratic(1.0, -2.0, 1.0) == pytest.approx((1.0,))

    def test_zero_a(self):
        """Test a zero quadratic coefficient yields no roots."""
        assert solve_quadratic(0.0, 1.0, 1.0) == ()

    def test_cancellation_prone_roots(self):
        """Test the small root stays accurate when b^2 >> 4ac."""
        roots = solve_quadratic(1.0, -1e8, 1.0)
        assert roots[0] == pytest.approx(1e-8, rel=1e-6)
        assert roots[1] == pytest.approx(1e8, rel=1e-6)


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self, gray):
        """Test ray hitting sphere head-on from outside."""
        sphere = Sphere((0.0, 0.0, 0.0), 1.0, gray)
        record = sphere.hit(make_ray((0, 0, 5), (0, 0, -1)))

        assert record is not None
        # Should hit at z=1 (front of sphere), so t=4
        assert record.t == pytest.approx(4.0)
        np.testing.assert_allclose(record.point, [0.0, 0.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(record.normal, [0.0, 0.0, 1.0], atol=1e-12)
        assert record.front_face
        assert record.material is gray

    @pytest.mark.parametrize(
        "origin, center, radius",
        [
            ((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), 0.5),
            ((1.0, 2.0, 3.0), (4.0, 6.0, 3.0), 2.0),
            ((-3.0, 0.5, 2.0), (7.0, -1.0, -4.0), 1.25),
        ],
    )
    def test_hit_distance_matches_center_distance(self, gray, origin, center, radius):
        """Test a ray aimed at the center hits at t = |origin - center| - radius."""
        sphere = Sphere(center, radius, gray)
        direction = np.subtract(center, origin)
        unit_direction = direction / np.linalg.norm(direction)

        record = sphere.hit(make_ray(origin, unit_direction))

        expected = np.linalg.norm(direction) - radius
        assert record is not None
        assert record.t == pytest.approx(expected, rel=1e-9)

    def test_hit_with_unnormalized_direction(self, gray):
        """Test t scales inversely with the direction length."""
        sphere = Sphere((0.0, 0.0, -1.0), 0.5, gray)
        record = sphere.hit(make_ray((0, 0, 0), (0, 0, -2)))
        assert record.t == pytest.approx(0.25)
        np.testing.assert_allclose(record.point, [0.0, 0.0, -0.5], atol=1e-12)

    @pytest.mark.parametrize(
        "origin, direction",
        [
            ((5.0, 0.0, 0.0), (0.0, 0.0, -1.0)),
            ((0.0, 2.0, 0.0), (1.0, 0.0, 0.0)),
            ((0.0, 0.0, 5.0), (0.0, 0.0, 1.0)),
        ],
    )
    def test_hit_sphere_miss(self, gray, origin, direction):
        """Test rays whose path never touches the sphere (or points away) miss."""
        sphere = Sphere((0.0, 0.0, 0.0), 1.0, gray)
        assert sphere.hit(make_ray(origin, direction)) is None

    def test_hit_sphere_inside(self, gray):
        """Test ray starting inside sphere hits the far side (back face)."""
        sphere = Sphere((0.0, 0.0, 0.0), 1.0, gray)
        ray = make_ray((0, 0, 0), (0, 0, 1))
        record = sphere.hit(ray)

        assert record is not None
        assert record.t == pytest.approx(1.0)
        assert not record.front_face
        # Normal flipped to face the ray
        np.testing.assert_allclose(record.normal, [0.0, 0.0, -1.0], atol=1e-12)
        assert dot(ray.direction, record.normal) <= 0.0

    def test_zero_direction_misses(self, gray):
        """Test a zero-length direction never hits."""
        sphere = Sphere((0.0, 0.0, 0.0), 1.0, gray)
        assert sphere.hit(make_ray((0, 0, 5), (0, 0, 0))) is None

    def test_normal_is_unit_length(self, gray):
        """Test the stored normal has unit length for an oblique hit."""
        sphere = Sphere((0.0, 0.0, -3.0), 2.0, gray)
        record = sphere.hit(make_ray((0, 0, 0), (0.2, 0.3, -1.0)))
        assert record is not None
        assert length(record.normal) == pytest.approx(1.0)


class TestFrontFaceOrientation:
    """Tests for front-face detection and normal orientation."""

    def test_front_face_iff_negative_dot(self, gray, rng):
        """Test front_face matches the sign of dot(direction, outward normal)."""
        sphere = Sphere((0.0, 0.0, 0.0), 1.0, gray)
        for _ in range(200):
            origin = rng.uniform(-3.0, 3.0, size=3)
            direction = rng.uniform(-1.0, 1.0, size=3)
            ray = make_ray(origin, direction)
            record = sphere.hit(ray)
            if record is None:
                continue
            outward = (record.point - sphere.center) / sphere.radius
            assert record.front_face == (dot(ray.direction, outward) < 0.0)
            assert dot(ray.direction, record.normal) <= 0.0


class TestIntervalBounds:
    """Tests for the t-range passed to hit."""

    def test_default_interval(self):
        """Test the default interval is [T_MIN, inf]."""
        interval = Interval()
        assert interval.min == T_MIN == 0.001
        assert interval.max == math.inf

    def test_interval_inclusive(self):
        """Test both bounds are inclusive."""
        interval = Interval(1.0, 2.0)
        assert interval.contains(1.0)
        assert interval.contains(2.0)
        assert not interval.contains(2.0 + 1e-12)

    def test_hit_beyond_t_max_rejected(self, gray):
        """Test a hit further than t_max is ignored."""
        sphere = Sphere((0.0, 0.0, -10.0), 1.0, gray)
        assert sphere.hit(make_ray((0, 0, 0), (0, 0, -1)), Interval(T_MIN, 5.0)) is None

    def test_hit_at_t_max_accepted(self, gray):
        """Test a hit exactly at t_max is accepted."""
        sphere = Sphere((0.0, 0.0, -4.0), 1.0, gray)
        record = sphere.hit(make_ray((0, 0, 0), (0, 0, -1)), Interval(T_MIN, 3.0))
        assert record is not None
        assert record.t == 3.0

    def test_near_root_below_t_min_uses_far_root(self, gray):
        """Test the far root is used when the near root is below t_min."""
        sphere = Sphere((0.0, 0.0, -1.0), 0.5, gray)
        record = sphere.hit(make_ray((0, 0, 0), (0, 0, -1)), Interval(0.6, math.inf))
        assert record is not None
        assert record.t == pytest.approx(1.5)
        assert not record.front_face
