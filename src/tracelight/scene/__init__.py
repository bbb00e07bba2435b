"""Scene module for scene description and intersection.

This module provides scene management:

Components:
    intersection: HittableList, the nearest-hit aggregate over hittables
    manager: SceneManager for materials, spheres and serialization
    presets: Ready-made scenes with matching camera configurations

Intersection is brute force over a flat list of objects.
"""

from .intersection import HittableList
from .manager import MaterialInfo, MaterialType, SceneConfig, SceneManager, SphereInfo
from .presets import (
    create_final_scene,
    create_single_sphere_scene,
    create_three_spheres_scene,
)

__all__ = [
    "HittableList",
    "MaterialInfo",
    "MaterialType",
    "SceneConfig",
    "SceneManager",
    "SphereInfo",
    "create_final_scene",
    "create_single_sphere_scene",
    "create_three_spheres_scene",
]
