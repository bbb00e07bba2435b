"""Scene-level intersection testing.

This module provides the scene aggregate: an ordered list of hittable
objects that resolves the closest hit along a ray.

Intersection is brute force. Each object is tested with the upper bound of
the interval shrunk to the closest hit found so far, so an object can only
report a hit that is nearer than every earlier one.

Example:
    >>> from tracelight.geometry.sphere import Sphere
    >>> from tracelight.materials import Lambertian
    >>> from tracelight.scene.intersection import HittableList
    >>> gray = Lambertian((0.5, 0.5, 0.5))
    >>> world = HittableList()
    >>> world.add(Sphere((0.0, 0.0, -1.0), 0.5, gray))
    >>> world.add(Sphere((0.0, -100.5, -1.0), 100.0, gray))
    >>> record = world.hit(ray)
"""

from __future__ import annotations

from typing import Iterable, Iterator

from tracelight.core.ray import Ray
from tracelight.geometry.hittable import HitRecord, Hittable, Interval


class HittableList(Hittable):
    """An ordered collection of hittable objects.

    Objects are aggregated, not copied; each remains independently owned.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        """Append an object to the scene."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove every object from the scene."""
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, t_range: Interval = Interval()) -> HitRecord | None:
        """Test the ray against all objects in the scene.

        Args:
            ray: The ray to test.
            t_range: The inclusive range of acceptable t values.

        Returns:
            The closest HitRecord within t_range, or None if nothing was hit.
        """
        closest: HitRecord | None = None
        for obj in self.objects:
            upper = closest.t if closest is not None else t_range.max
            record = obj.hit(ray, t_range.with_max(upper))
            if record is not None:
                closest = record
        return closest

    def __repr__(self) -> str:
        return f"HittableList({len(self.objects)} objects)"
