"""Sphere primitive with robust ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + b*t + c = 0

where:
    a = dot(direction, direction)
    b = 2 * dot(direction, oc)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The roots are computed with the numerically stable form from Ray Tracing
Gems (Chapter 7), which avoids catastrophic cancellation when b^2 is nearly
equal to 4ac:
    q = -(b + sign(b) * sqrt(discriminant)) / 2
    t0 = q / a
    t1 = c / q

Example:
    >>> from tracelight.core.ray import make_ray
    >>> from tracelight.geometry.sphere import Sphere
    >>> from tracelight.materials import Lambertian
    >>> sphere = Sphere(center=(0.0, 0.0, -1.0), radius=0.5, material=Lambertian((0.5, 0.5, 0.5)))
    >>> record = sphere.hit(make_ray((0, 0, 0), (0, 0, -1)))
    >>> record.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from tracelight.core.ray import Ray, Vec3, as_vec3, dot, length_squared
from tracelight.errors import ConfigurationError
from tracelight.geometry.hittable import HitRecord, Hittable, Interval

if TYPE_CHECKING:
    from tracelight.materials.base import Material


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, ...]:
    """Solve a*t^2 + b*t + c = 0 for its real roots.

    Args:
        a: Quadratic coefficient.
        b: Linear coefficient.
        c: Constant term.

    Returns:
        An empty tuple when there are no real roots (or a == 0), a single root
        when the discriminant is zero, otherwise both roots in ascending order.
    """
    if a == 0.0:
        return ()

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return ()
    if discriminant == 0.0:
        return (-b / (2.0 * a),)

    sqrt_d = math.sqrt(discriminant)
    # Use the sign of b to avoid subtracting nearly equal quantities
    q = -0.5 * (b + math.copysign(sqrt_d, b))
    t0 = q / a
    t1 = c / q
    if t0 > t1:
        t0, t1 = t1, t0
    return (t0, t1)


@dataclass(frozen=True, eq=False)
class Sphere(Hittable):
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        material: The material of the whole surface.

    Raises:
        ConfigurationError: If the radius is not a positive finite number.
    """

    center: Vec3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius) or self.radius <= 0.0:
            raise ConfigurationError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "radius", float(self.radius))

    def hit(self, ray: Ray, t_range: Interval = Interval()) -> HitRecord | None:
        """Test for ray-sphere intersection.

        Roots are considered in ascending order and the first one that lies
        inside ``t_range`` (inclusive) is returned, so a ray starting inside
        the sphere hits the far side.

        Args:
            ray: The ray to test. The direction need not be normalized.
            t_range: The inclusive range of acceptable t values.

        Returns:
            A HitRecord for the nearest valid intersection, or None on a miss.
        """
        oc = ray.origin - self.center
        a = length_squared(ray.direction)
        b = 2.0 * dot(ray.direction, oc)
        c = length_squared(oc) - self.radius * self.radius

        for t in solve_quadratic(a, b, c):
            if t_range.contains(t):
                # Outward normal: points from center to hit point
                outward_normal = (ray.at(t) - self.center) / self.radius
                return HitRecord.from_outward_normal(ray, t, outward_normal, self.material)
        return None


def make_sphere(
    center: Sequence[float] | Vec3,
    radius: float,
    material: Material,
) -> Sphere:
    """Create a sphere from center, radius and material.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        material: The surface material.

    Returns:
        A new Sphere instance.
    """
    return Sphere(center=as_vec3(center), radius=radius, material=material)
