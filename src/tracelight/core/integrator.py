"""Path tracing integrator for Monte Carlo light transport.

This module implements the light transport loop: rays are traced from the
camera through the scene, bounce off surfaces according to their material,
and pick up the sky color when they escape.

The path color is the product of every attenuation along the path times the
sky color the path finally escapes to. A path that is absorbed, or that runs
out of bounces, contributes black.

Key features:
    - Polymorphic material dispatch through Material.scatter
    - Fixed maximum path length (no Russian roulette)
    - Vertical white-to-blue sky gradient as the only light source
    - Per-pixel averaging of jittered samples for anti-aliasing

Example:
    >>> import numpy as np
    >>> from tracelight.camera import Camera, CameraConfig
    >>> from tracelight.core.integrator import render_pixel
    >>> from tracelight.scene.presets import create_single_sphere_scene
    >>>
    >>> scene, camera_config = create_single_sphere_scene()
    >>> camera = Camera(camera_config)
    >>> world = scene.build_world()
    >>> color = render_pixel(camera, world, np.random.default_rng(0), 200, 112, 10)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import numpy as np
import numpy.typing as npt

from tracelight.core.ray import Ray, Vec3, lerp, normalize, vec3
from tracelight.geometry.hittable import T_MIN, Hittable, Interval

if TYPE_CHECKING:
    from tracelight.camera.thin_lens import Camera

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# Valid parameter range for scene queries
HIT_RANGE = Interval(T_MIN, float("inf"))

WHITE = vec3(1.0, 1.0, 1.0)
BLACK = vec3(0.0, 0.0, 0.0)

# Sky color at the zenith; the horizon is white
SKY_BLUE = vec3(0.5, 0.7, 1.0)


# =============================================================================
# Path Tracing Core
# =============================================================================


def sky_color(ray: Ray) -> Vec3:
    """Background color seen by a ray that escapes the scene.

    Blends linearly from white (looking straight down) to sky blue (looking
    straight up) based on the y component of the unit direction.
    """
    unit_direction = normalize(ray.direction)
    a = 0.5 * (unit_direction[1] + 1.0)
    return lerp(WHITE, SKY_BLUE, a)


def ray_color(rng: np.random.Generator, depth: int, ray: Ray, world: Hittable) -> Vec3:
    """Estimate the color carried back along a ray.

    Equivalent to the recursive definition

        ray_color(0, ...) = black
        ray_color(d, r)   = sky(r)                               on a miss
                          = black                                if absorbed
                          = attenuation * ray_color(d - 1, r')   otherwise

    evaluated as a loop that carries the product of attenuations.

    Args:
        rng: The random generator owned by the calling task.
        depth: Remaining bounce budget. Zero returns black without tracing.
        ray: The ray to trace.
        world: The scene to trace against.

    Returns:
        The linear RGB color estimate for this path.

    Raises:
        ValueError: If depth is negative.
    """
    if depth < 0:
        raise ValueError(f"Depth must be non-negative, got {depth}")

    throughput = WHITE.copy()
    remaining = depth

    while remaining > 0:
        hit = world.hit(ray, HIT_RANGE)
        if hit is None:
            return throughput * sky_color(ray)

        scatter = hit.material.scatter(rng, ray, hit)
        if scatter.ray is None:
            return BLACK.copy()

        throughput = throughput * scatter.attenuation
        ray = scatter.ray
        remaining -= 1

    return BLACK.copy()


def average_colors(colors: Iterable[Vec3]) -> Vec3:
    """Compute the arithmetic mean of a collection of colors.

    Args:
        colors: Any iterable of RGB colors.

    Returns:
        The component-wise mean.

    Raises:
        ValueError: If no colors are given.
    """
    total = np.zeros(3, dtype=np.float64)
    count = 0
    for color in colors:
        total += color
        count += 1
    if count == 0:
        raise ValueError("Cannot average an empty collection of colors")
    return total / count


def render_pixel(
    camera: Camera,
    world: Hittable,
    rng: np.random.Generator,
    i: int,
    j: int,
    samples_per_pixel: int,
    max_depth: int = MAX_DEPTH,
) -> Vec3:
    """Render one pixel by averaging jittered sample paths.

    Args:
        camera: The camera generating sample rays.
        world: The scene to trace against.
        rng: The random generator owned by the calling task.
        i: Column index (0 = left).
        j: Row index (0 = top).
        samples_per_pixel: Number of sample rays (must be positive).
        max_depth: Bounce budget for each sample path.

    Returns:
        The averaged linear RGB color of the pixel.
    """
    return average_colors(
        ray_color(rng, max_depth, camera.get_ray(rng, i, j), world)
        for _ in range(samples_per_pixel)
    )


def render_row(
    camera: Camera,
    world: Hittable,
    rng: np.random.Generator,
    j: int,
    samples_per_pixel: int,
    max_depth: int = MAX_DEPTH,
) -> npt.NDArray[np.float64]:
    """Render every pixel of image row j, left to right.

    Returns:
        Array of shape (image_width, 3) with the linear colors of the row.
    """
    row = np.empty((camera.image_width, 3), dtype=np.float64)
    for i in range(camera.image_width):
        row[i] = render_pixel(camera, world, rng, i, j, samples_per_pixel, max_depth)
    return row
