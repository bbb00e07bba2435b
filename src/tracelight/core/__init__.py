"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector helpers and random sampling
    integrator: Light transport (ray_color) and per-pixel sample averaging
    renderer: Parallel render loop producing an Image
    image: Read-only linear RGB image buffer

The core module implements Monte Carlo path tracing with a fixed bounce
budget, jittered sampling for anti-aliasing, and one random generator per
render task.
"""

from .ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    lerp,
    make_ray,
    near_zero,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_on_hemisphere,
    random_unit_vector,
    random_vector,
    ray_at,
    reflect,
    refract,
    schlick_reflectance,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from tracelight.core.integrator or tracelight.core.renderer.

__all__ = [
    "Ray",
    "Vec3",
    "ray_at",
    "make_ray",
    "vec3",
    "as_vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "lerp",
    "reflect",
    "refract",
    "schlick_reflectance",
    "near_zero",
    "random_vector",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_on_hemisphere",
    "random_in_unit_disk",
]
