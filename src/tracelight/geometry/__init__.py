"""Geometry module for shape primitives and intersection.

This module provides the hittable contract and the sphere primitive:

Components:
    hittable: HitRecord, Interval and the Hittable base class
    sphere: Sphere primitive with ray-sphere intersection

Ray-object intersection follows the pattern:
    record = shape.hit(ray, Interval(t_min, t_max))  # HitRecord or None

There are no acceleration structures; scenes test every object in turn
(see tracelight.scene.intersection.HittableList).
"""

from .hittable import T_MIN, HitRecord, Hittable, Interval
from .sphere import Sphere, make_sphere, solve_quadratic

__all__ = [
    "T_MIN",
    "HitRecord",
    "Hittable",
    "Interval",
    "Sphere",
    "make_sphere",
    "solve_quadratic",
]
