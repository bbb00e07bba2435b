"""Dielectric (glass/water) material implementation.

This module implements transparent materials like glass and water with
refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when refraction_ratio * sin(theta) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
Dielectrics never absorb and never tint: attenuation is always white.

Example:
    >>> from tracelight.materials.dielectric import Dielectric
    >>> glass = Dielectric(ior=1.5)
    >>> air_bubble = Dielectric(ior=1.0 / 1.5)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from tracelight.core.ray import (
    Ray,
    Vec3,
    dot,
    normalize,
    reflect,
    refract,
    schlick_reflectance,
    vec3,
)
from tracelight.errors import ConfigurationError
from tracelight.materials.base import Material, Scatter

if TYPE_CHECKING:
    from tracelight.geometry.hittable import HitRecord

# Dielectrics don't absorb light
WHITE = vec3(1.0, 1.0, 1.0)


class Dielectric(Material):
    """Dielectric (glass/water) material.

    Attributes:
        ior: Index of refraction relative to the enclosing medium. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    def __init__(self, ior: float = 1.5) -> None:
        if not math.isfinite(ior) or ior <= 0.0:
            raise ConfigurationError(f"Index of refraction must be positive, got {ior}")
        self.ior = float(ior)

    def refraction_ratio(self, front_face: bool) -> float:
        """Ratio of indices for a ray entering (front face) or leaving the material."""
        return 1.0 / self.ior if front_face else self.ior

    def will_reflect(self, unit_direction: Vec3, hit: HitRecord) -> bool:
        """Check whether total internal reflection forces a reflection."""
        cos_theta = min(-dot(unit_direction, hit.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        return self.refraction_ratio(hit.front_face) * sin_theta > 1.0

    def fresnel_reflectance(self, unit_direction: Vec3, hit: HitRecord) -> float:
        """Schlick reflectance for the incidence angle of this hit."""
        cos_theta = min(-dot(unit_direction, hit.normal), 1.0)
        return schlick_reflectance(cos_theta, self.refraction_ratio(hit.front_face))

    def scatter(self, rng: np.random.Generator, ray_in: Ray, hit: HitRecord) -> Scatter:
        """Reflect or refract the incoming ray.

        Total internal reflection always reflects. Otherwise a uniform draw is
        compared against the Schlick reflectance: below it reflects, else
        refracts. An index-matched boundary (ratio exactly 1) has no
        interface, so the ray always passes straight through.

        Args:
            rng: The random generator owned by the calling task.
            ray_in: The incoming ray.
            hit: The intersection record.

        Returns:
            A Scatter with white attenuation. Always has a ray.
        """
        ratio = self.refraction_ratio(hit.front_face)
        unit_direction = normalize(ray_in.direction)

        if self.will_reflect(unit_direction, hit):
            direction = reflect(unit_direction, hit.normal)
        elif ratio == 1.0:
            direction = unit_direction
        elif rng.random() < self.fresnel_reflectance(unit_direction, hit):
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, ratio)

        return Scatter(attenuation=WHITE, ray=Ray(origin=hit.point, direction=direction))

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior})"
