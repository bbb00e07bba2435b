"""Ray data structure and vector utilities for Monte Carlo ray tracing.

This module provides the fundamental Ray dataclass and the vector utility
functions used by geometry, materials and the camera. Points, directions and
colors are all NumPy float64 arrays of shape (3,).

Random sampling helpers take an explicit ``numpy.random.Generator`` so that
every render task can own its generator; nothing in this module touches
global random state.

Example:
    >>> import numpy as np
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray.at(5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors (points, directions and RGB colors)
Vec3 = npt.NDArray[np.float64]

# Components below this magnitude are treated as zero by near_zero()
NEAR_ZERO_THRESHOLD = 1e-8


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector.

    Args:
        x: First component.
        y: Second component.
        z: Third component.

    Returns:
        A float64 array of shape (3,).
    """
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value: Sequence[float] | Vec3) -> Vec3:
    """Convert a 3-sequence to a vector, validating its shape.

    Args:
        value: Any sequence of three numbers, or an existing vector.

    Returns:
        A new float64 array of shape (3,).

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.array(value, dtype=np.float64)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {result.shape}")
    return result


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            unit length; intersection and scattering handle any length.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Compute the point origin + t * direction."""
        return self.origin + t * self.direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.at(t)


def make_ray(origin: Sequence[float] | Vec3, direction: Sequence[float] | Vec3) -> Ray:
    """Create a ray from origin and direction, converting both to vectors.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector.

    Returns:
        A new Ray instance.
    """
    return Ray(origin=as_vec3(origin), direction=as_vec3(direction))


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    n = length(v)
    if n == 0.0:
        return np.zeros(3, dtype=np.float64)
    return v / n


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product a . b."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return vec3(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def lerp(start: Vec3, end: Vec3, t: float) -> Vec3:
    """Linearly interpolate between two vectors: (1 - t) * start + t * end."""
    return (1.0 - t) * start + t * end


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Computes d - 2(d . n)n. The result has the same length as the incident
    vector when the normal is unit length.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def refract(unit_incident: Vec3, normal: Vec3, eta_ratio: float) -> Vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    Splits the refracted ray into the components perpendicular and parallel
    to the normal:
        r_perp = eta_ratio * (d + cos_theta * n)
        r_par = -sqrt(|1 - |r_perp|^2|) * n

    The caller is responsible for handling total internal reflection; this
    function always returns a vector.

    Args:
        unit_incident: The incoming direction (must be normalized).
        normal: The surface normal facing against the incident ray (normalized).
        eta_ratio: Ratio of refractive indices, incident over transmitted.

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(-dot(unit_incident, normal), 1.0)
    r_perp = eta_ratio * (unit_incident + cos_theta * normal)
    r_par = -math.sqrt(abs(1.0 - length_squared(r_perp))) * normal
    return r_perp + r_par


def schlick_reflectance(cosine: float, refraction_ratio: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        refraction_ratio: Ratio of refractive indices at the boundary.

    Returns:
        The approximate reflectance r0 + (1 - r0)(1 - cosine)^5.
    """
    r0 = ((1.0 - refraction_ratio) / (1.0 + refraction_ratio)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


def near_zero(v: Vec3, threshold: float = NEAR_ZERO_THRESHOLD) -> bool:
    """Check if every component of a vector is below the threshold in magnitude.

    Useful for detecting degenerate scatter directions.
    """
    return bool(np.all(np.abs(v) < threshold))


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_vector(rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> Vec3:
    """Draw a vector with each component uniform in [low, high)."""
    return rng.uniform(low, high, size=3)


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random nonzero point inside the unit sphere.

    Uses rejection sampling: draws each component uniform in [-1, 1) until the
    squared length lies in (0, 1).

    Args:
        rng: The random generator owned by the calling task.

    Returns:
        A random point p with 0 < |p|^2 < 1.
    """
    while True:
        p = rng.uniform(-1.0, 1.0, size=3)
        len_sq = length_squared(p)
        if 0.0 < len_sq < 1.0 and not near_zero(p):
            return p


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere.

    This is the normalized version of random_in_unit_sphere().
    """
    return normalize(random_in_unit_sphere(rng))


def random_on_hemisphere(rng: np.random.Generator, normal: Vec3) -> Vec3:
    """Generate a random unit vector in the hemisphere around a normal.

    Args:
        rng: The random generator owned by the calling task.
        normal: The surface normal defining the hemisphere orientation.

    Returns:
        A random unit vector whose dot product with the normal is positive.
    """
    on_sphere = random_unit_vector(rng)
    if dot(on_sphere, normal) > 0.0:
        return on_sphere
    return -on_sphere


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used for sampling ray origins on the camera's defocus disk.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, size=2)
        if x * x + y * y < 1.0:
            return vec3(x, y, 0.0)
