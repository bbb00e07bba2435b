"""Base material interface and scatter result.

A material decides what happens to a ray that hits its surface: it either
continues as a new ray carrying an attenuation color, or it is absorbed.

Each material provides:
    - scatter(rng, ray_in, hit): sample the continuation of an incoming ray

The random generator is passed in by the caller so that each render task
uses its own generator and materials hold no mutable state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from tracelight.core.ray import Ray, Vec3, as_vec3
from tracelight.errors import ConfigurationError

if TYPE_CHECKING:
    from tracelight.geometry.hittable import HitRecord


@dataclass(frozen=True, eq=False)
class Scatter:
    """Outcome of a material interacting with an incoming ray.

    Attributes:
        attenuation: Per-channel color multiplier for light along the new ray.
        ray: The outgoing ray, or None if the ray was absorbed.
    """

    attenuation: Vec3
    ray: Ray | None = None

    @property
    def absorbed(self) -> bool:
        """True if the path terminates at this surface."""
        return self.ray is None


class Material(ABC):
    """Abstract surface material."""

    @abstractmethod
    def scatter(self, rng: np.random.Generator, ray_in: Ray, hit: HitRecord) -> Scatter:
        """Scatter an incoming ray at a hit point.

        Args:
            rng: The random generator owned by the calling task.
            ray_in: The incoming ray.
            hit: The intersection record (normal faces against ray_in).

        Returns:
            The attenuation and optional outgoing ray.
        """


def validate_albedo(albedo: Sequence[float] | Vec3) -> Vec3:
    """Convert an albedo to a vector, checking every channel is in [0, 1].

    Args:
        albedo: The reflectance color as (R, G, B).

    Returns:
        The albedo as a float64 vector.

    Raises:
        ConfigurationError: If any component is outside [0, 1] or the albedo
            does not have three components.
    """
    try:
        color = as_vec3(albedo)
    except ValueError as exc:
        raise ConfigurationError(f"Albedo must have 3 components: {exc}") from exc

    for i, component in enumerate(color):
        if not 0.0 <= component <= 1.0:
            raise ConfigurationError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return color
