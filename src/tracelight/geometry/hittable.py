"""Hit records, parameter intervals and the hittable contract.

Every intersectable object implements ``hit(ray, t_range)`` and returns a
``HitRecord`` for the nearest intersection whose parameter lies in the
inclusive interval ``t_range``, or ``None`` on a miss.

The stored normal always faces against the incoming ray; ``front_face``
records whether the ray approached the outward-facing side.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tracelight.core.ray import Ray, Vec3, dot

if TYPE_CHECKING:
    from tracelight.materials.base import Material

# Minimum ray parameter for a valid hit, avoids self-intersection ("shadow acne")
T_MIN = 0.001


@dataclass(frozen=True)
class Interval:
    """An inclusive range [min, max] of ray parameters.

    Attributes:
        min: Lower bound (inclusive).
        max: Upper bound (inclusive), may be infinite.
    """

    min: float = T_MIN
    max: float = math.inf

    def contains(self, t: float) -> bool:
        """Check whether min <= t <= max."""
        return self.min <= t <= self.max

    def with_max(self, new_max: float) -> Interval:
        """Return a copy of this interval with a new upper bound."""
        return Interval(self.min, new_max)


@dataclass(frozen=True, eq=False)
class HitRecord:
    """Record of a ray-object intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The unit surface normal at the intersection point, oriented
            against the incoming ray (dot(ray.direction, normal) <= 0).
        t: The parameter value along the ray where intersection occurred.
        front_face: True if the ray hit the outward-facing side.
        material: The material of the surface at the hit point.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        outward_normal: Vec3,
        material: Material,
    ) -> HitRecord:
        """Build a hit record, flipping the outward normal to face the ray.

        Args:
            ray: The ray that produced the hit.
            t: The ray parameter of the hit.
            outward_normal: The unit geometric normal pointing out of the surface.
            material: The material at the hit point.

        Returns:
            A HitRecord whose normal faces against the ray.
        """
        front_face = dot(ray.direction, outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(
            point=ray.at(t),
            normal=normal,
            t=t,
            front_face=front_face,
            material=material,
        )


class Hittable(ABC):
    """Anything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_range: Interval = Interval()) -> HitRecord | None:
        """Return the nearest hit with t inside t_range, or None on a miss."""
