"""Materials module for light scattering models.

This module implements the material models a ray can interact with:

Components:
    base: Material interface and the Scatter result
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides:
    - scatter(rng, ray_in, hit): an attenuation color and an optional
      outgoing ray (None means the ray was absorbed)
"""

from .base import Material, Scatter, validate_albedo
from .dielectric import Dielectric
from .lambertian import Lambertian
from .metal import Metal

__all__ = [
    "Material",
    "Scatter",
    "validate_albedo",
    "Lambertian",
    "Metal",
    "Dielectric",
]
