"""Pytest configuration for tracelight tests.

This module provides shared fixtures for all test modules: a seeded random
generator, common materials, small worlds and cameras.
"""

import numpy as np
import pytest

from tracelight.camera import Camera, CameraConfig
from tracelight.core.ray import Ray
from tracelight.geometry.sphere import Sphere
from tracelight.materials import Lambertian, Material, Scatter
from tracelight.scene.intersection import HittableList


class AbsorbingMaterial(Material):
    """Material that absorbs every ray it scatters."""

    def scatter(self, rng, ray_in, hit):
        return Scatter(attenuation=np.zeros(3))


class CountingMaterial(Material):
    """Material that records how many times it scattered and passes rays on unchanged."""

    def __init__(self):
        self.calls = 0

    def scatter(self, rng, ray_in, hit):
        self.calls += 1
        return Scatter(
            attenuation=np.ones(3),
            ray=Ray(origin=hit.point, direction=ray_in.direction),
        )


@pytest.fixture
def rng():
    """A seeded random generator so sampling tests are repeatable."""
    return np.random.default_rng(42)


@pytest.fixture
def gray():
    """A 50% gray Lambertian material."""
    return Lambertian((0.5, 0.5, 0.5))


@pytest.fixture
def absorbing():
    """A material that absorbs every ray."""
    return AbsorbingMaterial()


@pytest.fixture
def unit_sphere_world(gray):
    """A single gray sphere of radius 0.5 at (0, 0, -1)."""
    return HittableList([Sphere((0.0, 0.0, -1.0), 0.5, gray)])


@pytest.fixture
def empty_world():
    """A world with no objects: every ray sees the sky."""
    return HittableList()


@pytest.fixture
def tiny_camera():
    """A small pinhole camera at the origin looking down -z."""
    return Camera(
        CameraConfig(
            image_width=8,
            aspect_ratio=2.0,
            vfov=90.0,
            look_from=(0.0, 0.0, 0.0),
            look_at=(0.0, 0.0, -1.0),
            defocus_angle=0.0,
            focus_distance=1.0,
        )
    )
