"""Lambertian (ideal diffuse) material implementation.

This module implements ideal diffuse reflection, where incident light is
scattered in all directions with a cosine-weighted distribution around the
surface normal.

The scattered direction is the surface normal plus a random unit vector.
Points on the unit sphere tangent to the hit point are distributed so that
the resulting directions follow cos(theta) / pi, which is exactly the
Lambertian distribution, so the attenuation is simply the albedo.

Example:
    >>> import numpy as np
    >>> from tracelight.materials.lambertian import Lambertian
    >>> material = Lambertian(albedo=(0.5, 0.5, 0.5))
    >>> result = material.scatter(np.random.default_rng(0), ray, hit)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

from tracelight.core.ray import Ray, Vec3, near_zero, random_unit_vector
from tracelight.materials.base import Material, Scatter, validate_albedo

if TYPE_CHECKING:
    from tracelight.geometry.hittable import HitRecord


class Lambertian(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.
    """

    def __init__(self, albedo: Sequence[float] | Vec3) -> None:
        self.albedo = validate_albedo(albedo)

    def scatter(self, rng: np.random.Generator, ray_in: Ray, hit: HitRecord) -> Scatter:
        """Sample a diffuse scattered ray.

        Never absorbs: a ray is always returned.

        Args:
            rng: The random generator owned by the calling task.
            ray_in: The incoming ray (unused, diffuse scattering ignores it).
            hit: The intersection record.

        Returns:
            A Scatter with attenuation equal to the albedo.
        """
        scatter_direction = hit.normal + random_unit_vector(rng)

        # Catch degenerate scatter directions (random vector opposite the normal)
        if near_zero(scatter_direction):
            scatter_direction = hit.normal

        return Scatter(
            attenuation=self.albedo,
            ray=Ray(origin=hit.point, direction=scatter_direction),
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo.tolist()})"
