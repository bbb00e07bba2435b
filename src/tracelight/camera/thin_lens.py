"""Thin-lens camera model for perspective ray generation.

This module implements a positionable camera that generates primary rays for
rendering. The camera supports:
- Look-at positioning (look_from, look_at, vup)
- Vertical field of view in degrees
- Arbitrary aspect ratios
- Jittered sampling for anti-aliasing
- Depth of field through a defocus disk (defocus_angle > 0)

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport sits on the plane of perfect focus, ``focus_distance`` in front
of the camera. Pixel (0, 0) is the upper-left pixel; rows go top to bottom.

Example:
    >>> import numpy as np
    >>> from tracelight.camera.thin_lens import Camera, CameraConfig
    >>>
    >>> # Camera looking at origin from z=3
    >>> camera = Camera(CameraConfig(
    ...     image_width=400,
    ...     aspect_ratio=16.0 / 9.0,
    ...     look_from=(0.0, 0.0, 3.0),
    ...     look_at=(0.0, 0.0, 0.0),
    ...     vfov=60.0,
    ...     defocus_angle=0.0,
    ... ))
    >>> ray = camera.get_ray(np.random.default_rng(0), 200, 112)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from tracelight.core.ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    length,
    normalize,
    random_in_unit_disk,
)
from tracelight.errors import ConfigurationError

# Vectors shorter than this cannot define a camera basis
DEGENERATE_LENGTH = 1e-12

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """Configuration for a thin-lens camera.

    Defaults reproduce the reference render of the random-spheres scene.

    Attributes:
        image_width: Output image width in pixels.
        aspect_ratio: Width divided by height of the output image.
        vfov: Vertical field of view in degrees.
        look_from: Camera position in world space (x, y, z).
        look_at: Point the camera is looking at in world space (x, y, z).
        vup: Up direction hint for camera orientation (typically (0, 1, 0)).
        defocus_angle: Variation angle of rays through each pixel in degrees.
            Zero gives a pinhole camera with everything in focus.
        focus_distance: Distance from look_from to the plane of perfect focus.

    Raises:
        ConfigurationError: If any value cannot produce a valid camera.
    """

    image_width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    vfov: float = 20.0
    look_from: tuple[float, float, float] = (13.0, 2.0, 3.0)
    look_at: tuple[float, float, float] = (0.0, 0.0, 0.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    defocus_angle: float = 0.6
    focus_distance: float = 10.0

    def __post_init__(self) -> None:
        if int(self.image_width) != self.image_width or self.image_width <= 0:
            raise ConfigurationError(
                f"Image width must be a positive integer, got {self.image_width}"
            )
        if not math.isfinite(self.aspect_ratio) or self.aspect_ratio <= 0.0:
            raise ConfigurationError(
                f"Aspect ratio must be a positive finite number, got {self.aspect_ratio}"
            )
        if not 0.0 < self.vfov < 180.0:
            raise ConfigurationError(
                f"Vertical field of view must be in (0, 180) degrees, got {self.vfov}"
            )
        if not math.isfinite(self.focus_distance) or self.focus_distance <= 0.0:
            raise ConfigurationError(
                f"Focus distance must be positive, got {self.focus_distance}"
            )
        if not 0.0 <= self.defocus_angle < 180.0:
            raise ConfigurationError(
                f"Defocus angle must be in [0, 180) degrees, got {self.defocus_angle}"
            )

    @property
    def image_height(self) -> int:
        """Image height derived from width and aspect ratio (at least 1).

        The quotient is floored in exact rational arithmetic, so ratios such
        as 7/3 given as floats do not lose a row to rounding.
        """
        aspect = Fraction(self.aspect_ratio).limit_denominator()
        return max(1, math.floor(self.image_width / aspect))


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """A thin-lens camera with precomputed viewport geometry.

    All derived geometry is computed once at construction and never changes,
    so a camera can be shared read-only between render workers.

    Attributes:
        config: The configuration the camera was built from.
        image_width: Image width in pixels.
        image_height: Image height in pixels.
        center: The camera position (look_from).
        u: Camera right vector.
        v: Camera up vector.
        w: Camera backward vector (opposite the view direction).
        pixel00_loc: World-space center of the upper-left pixel.
        pixel_delta_u: Offset from one pixel to the next to the right.
        pixel_delta_v: Offset from one pixel to the next below.
        defocus_disk_u: Horizontal radius vector of the defocus disk.
        defocus_disk_v: Vertical radius vector of the defocus disk.
    """

    def __init__(self, config: CameraConfig | None = None) -> None:
        """Derive the camera basis and viewport from a configuration.

        Args:
            config: Camera configuration. Uses CameraConfig() when None.

        Raises:
            ConfigurationError: If look_from and look_at coincide, or vup is
                parallel to the view direction.
        """
        self.config = config if config is not None else CameraConfig()
        cfg = self.config

        self.image_width = int(cfg.image_width)
        self.image_height = cfg.image_height

        look_from = as_vec3(cfg.look_from)
        look_at = as_vec3(cfg.look_at)
        vup = as_vec3(cfg.vup)
        self.center = look_from

        # Viewport dimensions on the focus plane
        theta = math.radians(cfg.vfov)
        viewport_height = 2.0 * math.tan(theta / 2.0) * cfg.focus_distance
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # w points from look_at toward look_from (backward)
        view = look_from - look_at
        if length(view) < DEGENERATE_LENGTH:
            raise ConfigurationError(
                f"look_from {cfg.look_from} and look_at {cfg.look_at} must be distinct points"
            )
        self.w = normalize(view)

        # u points right (perpendicular to w and vup)
        right = cross(vup, self.w)
        if length(right) < DEGENERATE_LENGTH:
            raise ConfigurationError(
                f"Up vector {cfg.vup} must not be zero or parallel to the view direction"
            )
        self.u = normalize(right)

        # v points up in the camera's frame
        self.v = cross(self.w, self.u)

        # Viewport edges: across the horizontal edge, and down the vertical edge
        viewport_u = viewport_width * self.u
        viewport_v = -viewport_height * self.v

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (
            self.center - cfg.focus_distance * self.w - viewport_u / 2.0 - viewport_v / 2.0
        )
        self.pixel00_loc = viewport_upper_left + 0.5 * (self.pixel_delta_u + self.pixel_delta_v)

        defocus_radius = cfg.focus_distance * math.tan(math.radians(cfg.defocus_angle / 2.0))
        self.defocus_disk_u = defocus_radius * self.u
        self.defocus_disk_v = defocus_radius * self.v

    @property
    def defocus_enabled(self) -> bool:
        """True if rays originate on a defocus disk rather than a single point."""
        return self.config.defocus_angle > 0.0

    def pixel_center(self, i: int, j: int) -> Vec3:
        """World-space center of pixel (i, j).

        Args:
            i: Column index (0 = left).
            j: Row index (0 = top).
        """
        return self.pixel00_loc + i * self.pixel_delta_u + j * self.pixel_delta_v

    def defocus_disk_sample(self, rng: np.random.Generator) -> Vec3:
        """Return a random point on the camera defocus disk."""
        p = random_in_unit_disk(rng)
        return self.center + p[0] * self.defocus_disk_u + p[1] * self.defocus_disk_v

    def get_ray(self, rng: np.random.Generator, i: int, j: int) -> Ray:
        """Generate a jittered sample ray for pixel (i, j).

        The ray starts at the camera center (pinhole) or at a random point on
        the defocus disk, and passes through a random point within half a
        pixel step of the pixel center in each direction.

        Args:
            rng: The random generator owned by the calling task.
            i: Column index (0 = left).
            j: Row index (0 = top).

        Returns:
            A Ray from the lens toward the jittered pixel sample. The direction
            is not normalized.
        """
        if self.defocus_enabled:
            ray_origin = self.defocus_disk_sample(rng)
        else:
            ray_origin = self.center

        offset_u, offset_v = rng.random(2) - 0.5
        pixel_sample = (
            self.pixel_center(i, j)
            + offset_u * self.pixel_delta_u
            + offset_v * self.pixel_delta_v
        )
        return Ray(origin=ray_origin, direction=pixel_sample - ray_origin)

    def get_center_ray(self, i: int, j: int) -> Ray:
        """Generate the deterministic ray from the camera center through a pixel center."""
        return Ray(origin=self.center, direction=self.pixel_center(i, j) - self.center)

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get the derived camera geometry for debugging.

        Returns:
            Dictionary with center, u, v, w, pixel00_loc, pixel_delta_u,
            pixel_delta_v, defocus_disk_u and defocus_disk_v.
        """
        names = (
            "center",
            "u",
            "v",
            "w",
            "pixel00_loc",
            "pixel_delta_u",
            "pixel_delta_v",
            "defocus_disk_u",
            "defocus_disk_v",
        )
        return {name: tuple(float(x) for x in getattr(self, name)) for name in names}

    def __repr__(self) -> str:
        return (
            f"Camera(width={self.image_width}, height={self.image_height}, "
            f"vfov={self.config.vfov}, defocus_angle={self.config.defocus_angle})"
        )
