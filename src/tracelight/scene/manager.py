"""Scene manager for coordinating primitives and materials.

This module provides a high-level scene building API on top of the plain
scene aggregate. It keeps a description of every material and sphere so
that scenes can be listed, serialized to plain dictionaries, loaded back,
and finally turned into a HittableList for rendering.

The SceneManager maintains:
- A unified material_id space across all material types
- Mapping from material_id to (material_type, parameters)
- High-level methods for adding spheres with materials in one call
- Scene serialization/configuration support

Example:
    >>> from tracelight.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> mat_id = scene.add_lambertian_material(albedo=(0.8, 0.3, 0.3))
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5, material_id=mat_id)
    >>> world = scene.build_world()
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from loguru import logger

from tracelight.errors import ConfigurationError
from tracelight.geometry.sphere import Sphere
from tracelight.materials import Dielectric, Lambertian, Material, Metal, validate_albedo
from tracelight.scene.intersection import HittableList


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    The lower-case name is used as the ``type`` key in scene configurations.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The unified material ID.
        material_type: The type of material (Lambertian, Metal, Dielectric).
        params: The material parameters as provided during creation.
    """

    material_id: int
    material_type: MaterialType
    params: dict[str, Any]


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index of the sphere in the scene.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)


def _as_triple(values: Any, name: str) -> tuple[float, float, float]:
    """Convert a 3-sequence to a tuple of floats."""
    try:
        x, y, z = (float(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must have 3 numeric components, got {values!r}") from exc
    return (x, y, z)


class SceneManager:
    """Scene builder coordinating spheres and materials.

    Attributes:
        materials: List of MaterialInfo for all registered materials.
        spheres: List of SphereInfo for all spheres in the scene.

    Example:
        >>> scene = SceneManager()
        >>> # Add materials
        >>> red_diffuse = scene.add_lambertian_material(albedo=(0.8, 0.1, 0.1))
        >>> gold_metal = scene.add_metal_material(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
        >>> glass = scene.add_dielectric_material(ior=1.5)
        >>> # Add objects with materials
        >>> scene.add_sphere((0, 0, -1), 0.5, red_diffuse)
        >>> scene.add_sphere((1, 0, -1), 0.5, gold_metal)
        >>> scene.add_sphere((-1, 0, -1), 0.5, glass)
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []

    def clear(self) -> None:
        """Clear the entire scene (spheres and materials)."""
        self.materials.clear()
        self.spheres.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def _register_material(self, material_type: MaterialType, params: dict[str, Any]) -> int:
        material_id = len(self.materials)
        self.materials.append(
            MaterialInfo(material_id=material_id, material_type=material_type, params=params)
        )
        return material_id

    def add_lambertian_material(self, albedo: tuple[float, float, float]) -> int:
        """Add a Lambertian (diffuse) material to the scene.

        Args:
            albedo: The diffuse reflectance color as (R, G, B) tuple.
                Each component must be in [0, 1].

        Returns:
            The unified material ID for this material.

        Raises:
            ConfigurationError: If any albedo component is outside [0, 1].
        """
        albedo = _as_triple(albedo, "Albedo")
        validate_albedo(albedo)
        return self._register_material(MaterialType.LAMBERTIAN, {"albedo": albedo})

    def add_metal_material(
        self,
        albedo: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> int:
        """Add a metal (specular reflective) material to the scene.

        Args:
            albedo: The reflective color as (R, G, B) tuple.
                Each component must be in [0, 1].
            fuzz: The reflection fuzz. Default is 0 (perfect mirror).
                Values outside [0, 1] are clamped when scattering.

        Returns:
            The unified material ID for this material.

        Raises:
            ConfigurationError: If any albedo component is outside [0, 1].
        """
        albedo = _as_triple(albedo, "Albedo")
        validate_albedo(albedo)
        return self._register_material(
            MaterialType.METAL, {"albedo": albedo, "fuzz": float(fuzz)}
        )

    def add_dielectric_material(self, ior: float = 1.5) -> int:
        """Add a dielectric (glass/water) material to the scene.

        Args:
            ior: Index of refraction. Default is 1.5 (typical glass).
                Common values: Air=1.0, Water=1.33, Glass=1.5, Diamond=2.4

        Returns:
            The unified material ID for this material.

        Raises:
            ConfigurationError: If the IOR is not positive.
        """
        if not math.isfinite(ior) or ior <= 0.0:
            raise ConfigurationError(f"Index of refraction must be positive, got {ior}")
        return self._register_material(MaterialType.DIELECTRIC, {"ior": float(ior)})

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return len(self.materials)

    def get_material_info(self, material_id: int) -> MaterialInfo | None:
        """Get information about a material, or None for an unknown ID."""
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center of the sphere.
            radius: The radius of the sphere (must be positive).
            material_id: The ID of a previously added material.

        Returns:
            The index of the added sphere.

        Raises:
            ConfigurationError: If the radius is not positive or the material
                ID is unknown.
        """
        if self.get_material_info(material_id) is None:
            raise ConfigurationError(
                f"Unknown material ID {material_id} "
                f"(scene has {len(self.materials)} materials)"
            )
        if not math.isfinite(radius) or radius <= 0.0:
            raise ConfigurationError(f"Sphere radius must be positive, got {radius}")

        sphere_index = len(self.spheres)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=_as_triple(center, "Sphere center"),
                radius=float(radius),
                material_id=material_id,
            )
        )
        return sphere_index

    def add_lambertian_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
    ) -> int:
        """Add a sphere with a new Lambertian material.

        Returns:
            The index of the added sphere.
        """
        material_id = self.add_lambertian_material(albedo)
        return self.add_sphere(center, radius, material_id)

    def add_metal_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> int:
        """Add a sphere with a new metal material.

        Returns:
            The index of the added sphere.
        """
        material_id = self.add_metal_material(albedo, fuzz)
        return self.add_sphere(center, radius, material_id)

    def add_dielectric_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        ior: float = 1.5,
    ) -> int:
        """Add a sphere with a new dielectric material.

        Returns:
            The index of the added sphere.
        """
        material_id = self.add_dielectric_material(ior)
        return self.add_sphere(center, radius, material_id)

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return len(self.spheres)

    # =========================================================================
    # World Construction
    # =========================================================================

    def build_material(self, material_id: int) -> Material:
        """Instantiate the material object for a material ID.

        Raises:
            ConfigurationError: If the material ID is unknown.
        """
        info = self.get_material_info(material_id)
        if info is None:
            raise ConfigurationError(f"Unknown material ID {material_id}")

        if info.material_type == MaterialType.LAMBERTIAN:
            return Lambertian(info.params["albedo"])
        if info.material_type == MaterialType.METAL:
            return Metal(info.params["albedo"], info.params.get("fuzz", 0.0))
        return Dielectric(info.params["ior"])

    def build_world(self) -> HittableList:
        """Build the renderable scene aggregate.

        Spheres sharing a material ID share one material instance.

        Returns:
            A HittableList containing one Sphere per registered sphere, in
            insertion order.
        """
        materials = [self.build_material(info.material_id) for info in self.materials]
        world = HittableList(
            Sphere(center=info.center, radius=info.radius, material=materials[info.material_id])
            for info in self.spheres
        )
        logger.debug(
            "Built world with {} spheres and {} materials", len(world), len(materials)
        )
        return world

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Returns:
            A SceneConfig containing all materials and spheres.
        """
        config = SceneConfig()

        for mat in self.materials:
            mat_config: dict[str, Any] = {"type": mat.material_type.name.lower()}
            for key, value in mat.params.items():
                mat_config[key] = list(value) if isinstance(value, tuple) else value
            config.materials.append(mat_config)

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material_id": sphere.material_id,
                }
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Args:
            config: The scene configuration to load.

        Raises:
            ConfigurationError: If the configuration contains invalid data.
        """
        self.clear()

        # Load materials first (needed for spheres)
        for mat_config in config.materials:
            mat_type = str(mat_config.get("type", "")).lower()
            if mat_type == "lambertian":
                self.add_lambertian_material(mat_config.get("albedo", (0.5, 0.5, 0.5)))
            elif mat_type == "metal":
                self.add_metal_material(
                    mat_config.get("albedo", (0.8, 0.8, 0.8)),
                    mat_config.get("fuzz", 0.0),
                )
            elif mat_type == "dielectric":
                self.add_dielectric_material(mat_config.get("ior", 1.5))
            else:
                raise ConfigurationError(f"Unknown material type: {mat_type!r}")

        for sphere_config in config.spheres:
            self.add_sphere(
                sphere_config.get("center", (0.0, 0.0, 0.0)),
                sphere_config.get("radius", 1.0),
                sphere_config.get("material_id", 0),
            )

        logger.debug(
            "Loaded scene with {} materials and {} spheres",
            len(self.materials),
            len(self.spheres),
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Returns:
            A dictionary representation of the scene.
        """
        config = self.to_config()
        return {"materials": config.materials, "spheres": config.spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'materials' and 'spheres' keys.
        """
        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
        )
        self.from_config(config)

    def __repr__(self) -> str:
        return (
            f"SceneManager(materials={len(self.materials)}, spheres={len(self.spheres)})"
        )
