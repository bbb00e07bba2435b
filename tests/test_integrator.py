"""Unit tests for the path tracing integrator.

Tests cover:
- Sky gradient for escaped rays
- Depth budget (depth 0 is black, bounces stop at the budget)
- Absorption and attenuation products
- Color averaging
- Per-pixel and per-row rendering
"""

import numpy as np
import pytest

from tracelight.core.integrator import (
    BLACK,
    MAX_DEPTH,
    SKY_BLUE,
    average_colors,
    ray_color,
    render_pixel,
    render_row,
    sky_color,
)
from tracelight.core.ray import Ray, make_ray, vec3
from tracelight.geometry import Sphere
from tracelight.materials import Material, Scatter
from tracelight.scene.intersection import HittableList


class PassThrough(Material):
    """Halves the light and lets the ray continue in the same direction."""

    def __init__(self):
        self.calls = 0

    def scatter(self, rng, ray_in, hit):
        self.calls += 1
        return Scatter(
            attenuation=vec3(0.5, 0.5, 0.5),
            ray=Ray(origin=hit.point, direction=ray_in.direction),
        )


HORIZON = vec3(0.75, 0.85, 1.0)


class TestSkyColor:
    """Tests for the background gradient."""

    def test_straight_up_is_sky_blue(self):
        """Test looking straight up gives the zenith color."""
        np.testing.assert_allclose(sky_color(make_ray((0, 0, 0), (0, 1, 0))), SKY_BLUE)

    def test_straight_down_is_white(self):
        """Test looking straight down gives white."""
        np.testing.assert_allclose(sky_color(make_ray((0, 0, 0), (0, -3, 0))), [1.0, 1.0, 1.0])

    def test_horizon_is_halfway(self):
        """Test a horizontal ray blends halfway between white and blue."""
        np.testing.assert_allclose(sky_color(make_ray((5, 5, 5), (0, 0, -2))), HORIZON)


class TestRayColor:
    """Tests for ray_color."""

    def test_depth_zero_is_black(self, rng, unit_sphere_world, empty_world):
        """Test depth 0 returns exactly black regardless of ray or scene."""
        for world in (unit_sphere_world, empty_world):
            for direction in [(0, 0, -1), (0, 1, 0), (1, -1, 0.5)]:
                color = ray_color(rng, 0, make_ray((0, 0, 0), direction), world)
                np.testing.assert_array_equal(color, [0.0, 0.0, 0.0])

    def test_depth_zero_never_traces(self, rng):
        """Test depth 0 does not query the scene or scatter."""
        material = PassThrough()
        world = HittableList([Sphere((0.0, 0.0, -1.0), 0.5, material)])
        ray_color(rng, 0, make_ray((0, 0, 0), (0, 0, -1)), world)
        assert material.calls == 0

    def test_negative_depth_rejected(self, rng, empty_world):
        """Test a negative depth raises ValueError."""
        with pytest.raises(ValueError):
            ray_color(rng, -1, make_ray((0, 0, 0), (0, 0, -1)), empty_world)

    def test_miss_returns_sky(self, rng, empty_world):
        """Test an escaped ray returns the sky color."""
        color = ray_color(rng, 1, make_ray((0, 0, 0), (0, 1, 0)), empty_world)
        np.testing.assert_allclose(color, SKY_BLUE)

    def test_absorbed_is_black(self, rng, absorbing):
        """Test an absorbed ray returns black."""
        world = HittableList([Sphere((0.0, 0.0, -1.0), 0.5, absorbing)])
        color = ray_color(rng, 5, make_ray((0, 0, 0), (0, 0, -1)), world)
        np.testing.assert_array_equal(color, BLACK)

    def test_attenuation_multiplies_per_bounce(self, rng):
        """Test each bounce multiplies the color by the attenuation."""
        world = HittableList([Sphere((0.0, 0.0, -1.0), 0.5, PassThrough())])
        # Enters and leaves the sphere: two scatters, then the horizon
        color = ray_color(rng, 3, make_ray((0, 0, 0), (0, 0, -1)), world)
        np.testing.assert_allclose(color, 0.25 * HORIZON)

    def test_bounce_budget_exhausted_is_black(self, rng):
        """Test a path still bouncing when the budget runs out returns black."""
        material = PassThrough()
        world = HittableList([Sphere((0.0, 0.0, -1.0), 0.5, material)])
        color = ray_color(rng, 2, make_ray((0, 0, 0), (0, 0, -1)), world)
        np.testing.assert_array_equal(color, BLACK)
        assert material.calls == 2

    def test_result_not_aliased(self, rng, absorbing):
        """Test returned colors can be modified without affecting later calls."""
        world = HittableList([Sphere((0.0, 0.0, -1.0), 0.5, absorbing)])
        color = ray_color(rng, 1, make_ray((0, 0, 0), (0, 0, -1)), world)
        color += 1.0
        np.testing.assert_array_equal(BLACK, [0.0, 0.0, 0.0])

    def test_lambertian_color_bounded_by_sky(self, rng, unit_sphere_world):
        """Test a gray diffuse path never exceeds the brightest sky color."""
        for _ in range(100):
            color = ray_color(rng, MAX_DEPTH, make_ray((0, 0, 0), (0, 0, -1)), unit_sphere_world)
            assert np.all(color >= 0.0)
            assert np.all(color <= 0.5 + 1e-12)


class TestAverageColors:
    """Tests for per-pixel sample averaging."""

    def test_identical_colors_unchanged(self):
        """Test averaging N identical colors returns that color."""
        color = vec3(0.1, 0.7, 0.3)
        for n in (1, 2, 7, 100):
            np.testing.assert_allclose(average_colors([color] * n), color, rtol=1e-12)

    def test_mean(self):
        """Test the component-wise arithmetic mean."""
        result = average_colors([vec3(0.0, 0.0, 1.0), vec3(1.0, 0.5, 0.0)])
        np.testing.assert_allclose(result, [0.5, 0.25, 0.5])

    def test_accepts_generator(self):
        """Test any iterable of colors is accepted."""
        result = average_colors(vec3(i, i, i) for i in range(5))
        np.testing.assert_allclose(result, [2.0, 2.0, 2.0])

    def test_empty_rejected(self):
        """Test averaging nothing raises ValueError."""
        with pytest.raises(ValueError):
            average_colors([])


class TestRenderPixel:
    """Tests for pixel and row rendering."""

    def test_empty_world_pixel_is_sky(self, rng, tiny_camera, empty_world):
        """Test a pixel of an empty world averages sky colors."""
        color = render_pixel(tiny_camera, empty_world, rng, 4, 0, 16)
        assert np.all(color <= 1.0)
        assert np.all(color >= SKY_BLUE - 1e-12)
        # Top row looks up, so it is bluer than the horizon
        assert color[0] < HORIZON[0]

    def test_pixel_deterministic_for_seed(self, tiny_camera, unit_sphere_world):
        """Test the same seed gives the same pixel."""
        a = render_pixel(tiny_camera, unit_sphere_world, np.random.default_rng(5), 3, 2, 8, 10)
        b = render_pixel(tiny_camera, unit_sphere_world, np.random.default_rng(5), 3, 2, 8, 10)
        np.testing.assert_array_equal(a, b)

    def test_zero_depth_pixel_is_black(self, rng, tiny_camera, empty_world):
        """Test a zero bounce budget renders black."""
        color = render_pixel(tiny_camera, empty_world, rng, 0, 0, 4, max_depth=0)
        np.testing.assert_array_equal(color, [0.0, 0.0, 0.0])

    def test_render_row_shape(self, rng, tiny_camera, unit_sphere_world):
        """Test a row has one color per column."""
        row = render_row(tiny_camera, unit_sphere_world, rng, 1, 2, 5)
        assert row.shape == (tiny_camera.image_width, 3)
        assert np.all(np.isfinite(row))
