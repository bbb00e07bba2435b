"""Metal (specular reflective) material implementation.

This module implements specular reflection with optional fuzziness. Perfect
metals (fuzz=0) produce mirror-like reflections, while fuzzier metals perturb
the reflected ray within a sphere of radius ``fuzz``.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal.

A perturbed ray that ends up pointing into the surface is still returned;
such paths simply continue and are resolved by the next intersection.

Example:
    >>> from tracelight.materials.metal import Metal
    >>> gold = Metal(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

from tracelight.core.ray import Ray, Vec3, normalize, random_in_unit_sphere, reflect
from tracelight.materials.base import Material, Scatter, validate_albedo

if TYPE_CHECKING:
    from tracelight.geometry.hittable import HitRecord


class Metal(Material):
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: The perturbation radius. Stored as given and clamped to [0, 1]
            when scattering (0 = perfect mirror, 1 = maximum fuzz).
    """

    def __init__(self, albedo: Sequence[float] | Vec3, fuzz: float = 0.0) -> None:
        self.albedo = validate_albedo(albedo)
        self.fuzz = float(fuzz)

    @property
    def effective_fuzz(self) -> float:
        """The fuzz factor clamped into [0, 1]."""
        return min(max(self.fuzz, 0.0), 1.0)

    def scatter(self, rng: np.random.Generator, ray_in: Ray, hit: HitRecord) -> Scatter:
        """Reflect the incoming ray about the normal and add fuzz.

        Args:
            rng: The random generator owned by the calling task.
            ray_in: The incoming ray.
            hit: The intersection record.

        Returns:
            A Scatter with attenuation equal to the albedo. Always has a ray.
        """
        reflected = normalize(reflect(ray_in.direction, hit.normal))
        direction = reflected + self.effective_fuzz * random_in_unit_sphere(rng)

        return Scatter(
            attenuation=self.albedo,
            ray=Ray(origin=hit.point, direction=direction),
        )

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo.tolist()}, fuzz={self.fuzz})"
