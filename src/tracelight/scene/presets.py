"""Preset scene configurations.

This module provides factory functions for ready-made scenes. Each factory
returns the populated SceneManager together with a CameraConfig framing the
scene, so a preset can be rendered directly:

- create_single_sphere_scene: one diffuse sphere resting on a ground sphere
- create_three_spheres_scene: glass, diffuse and metal spheres in a row
- create_final_scene: the random-spheres cover scene (the CameraConfig
  defaults are tuned for it)

Example:
    >>> from tracelight.camera import Camera
    >>> from tracelight.scene.presets import create_final_scene
    >>>
    >>> scene, camera_config = create_final_scene(seed=7)
    >>> camera = Camera(camera_config)
    >>> world = scene.build_world()
"""

import math

import numpy as np
from loguru import logger

from tracelight.camera.thin_lens import CameraConfig
from tracelight.scene.manager import SceneManager

# Ground sphere shared by all presets: a huge sphere below the scene
GROUND_CENTER = (0.0, -100.5, -1.0)
GROUND_RADIUS = 100.0

# Small spheres of the final scene are placed on this grid
FINAL_GRID_RANGE = range(-11, 11)
FINAL_SMALL_RADIUS = 0.2

# Probability thresholds when choosing the material of a small sphere
DIFFUSE_PROBABILITY = 0.8
METAL_PROBABILITY = 0.15


def create_single_sphere_scene(
    albedo: tuple[float, float, float] = (0.5, 0.5, 0.5),
    image_width: int = 400,
) -> tuple[SceneManager, CameraConfig]:
    """Create a single diffuse sphere of radius 0.5 at (0, 0, -1).

    The sphere rests on a large ground sphere of the same material and is
    viewed by a pinhole camera at the origin looking down -z.

    Args:
        albedo: Albedo of both spheres.
        image_width: Output image width in pixels.

    Returns:
        A tuple of (scene, camera_config).
    """
    scene = SceneManager()
    diffuse = scene.add_lambertian_material(albedo)
    scene.add_sphere((0.0, 0.0, -1.0), 0.5, diffuse)
    scene.add_sphere(GROUND_CENTER, GROUND_RADIUS, diffuse)

    camera_config = CameraConfig(
        image_width=image_width,
        vfov=90.0,
        look_from=(0.0, 0.0, 0.0),
        look_at=(0.0, 0.0, -1.0),
        defocus_angle=0.0,
        focus_distance=1.0,
    )
    return scene, camera_config


def create_three_spheres_scene(image_width: int = 400) -> tuple[SceneManager, CameraConfig]:
    """Create a row of three spheres: glass (left), diffuse (center), metal (right).

    The glass sphere contains a smaller inverted-index sphere, giving a
    hollow glass bubble.

    Args:
        image_width: Output image width in pixels.

    Returns:
        A tuple of (scene, camera_config).
    """
    scene = SceneManager()

    ground = scene.add_lambertian_material((0.8, 0.8, 0.0))
    center = scene.add_lambertian_material((0.1, 0.2, 0.5))
    glass = scene.add_dielectric_material(1.5)
    bubble = scene.add_dielectric_material(1.0 / 1.5)
    gold = scene.add_metal_material((0.8, 0.6, 0.2), fuzz=1.0)

    scene.add_sphere(GROUND_CENTER, GROUND_RADIUS, ground)
    scene.add_sphere((0.0, 0.0, -1.2), 0.5, center)
    scene.add_sphere((-1.0, 0.0, -1.0), 0.5, glass)
    scene.add_sphere((-1.0, 0.0, -1.0), 0.4, bubble)
    scene.add_sphere((1.0, 0.0, -1.0), 0.5, gold)

    look_from = (-2.0, 2.0, 1.0)
    look_at = (0.0, 0.0, -1.0)
    camera_config = CameraConfig(
        image_width=image_width,
        vfov=20.0,
        look_from=look_from,
        look_at=look_at,
        defocus_angle=10.0,
        focus_distance=math.dist(look_from, look_at),
    )
    return scene, camera_config


def create_final_scene(
    seed: int | None = None,
    image_width: int = 400,
) -> tuple[SceneManager, CameraConfig]:
    """Create the random-spheres cover scene.

    Small spheres are scattered on a 22x22 grid with random jitter and a
    randomly chosen material (80% diffuse, 15% metal, 5% glass), around three
    large spheres: glass in the middle, diffuse brown behind it, and a mirror
    metal in front.

    Args:
        seed: Seed for the layout generator. The same seed always yields the
            same scene.
        image_width: Output image width in pixels.

    Returns:
        A tuple of (scene, camera_config).
    """
    rng = np.random.default_rng(seed)
    scene = SceneManager()

    ground = scene.add_lambertian_material((0.5, 0.5, 0.5))
    scene.add_sphere((0.0, -1000.0, 0.0), 1000.0, ground)

    # Keep the small spheres clear of the big metal sphere
    clearing_center = np.array((4.0, FINAL_SMALL_RADIUS, 0.0))

    for a in FINAL_GRID_RANGE:
        for b in FINAL_GRID_RANGE:
            choose_mat = rng.random()
            center = np.array(
                (a + 0.9 * rng.random(), FINAL_SMALL_RADIUS, b + 0.9 * rng.random())
            )
            if np.linalg.norm(center - clearing_center) <= 0.9:
                continue

            if choose_mat < DIFFUSE_PROBABILITY:
                albedo = rng.random(3) * rng.random(3)
                material = scene.add_lambertian_material(tuple(albedo))
            elif choose_mat < DIFFUSE_PROBABILITY + METAL_PROBABILITY:
                albedo = rng.uniform(0.5, 1.0, size=3)
                fuzz = rng.uniform(0.0, 0.5)
                material = scene.add_metal_material(tuple(albedo), fuzz)
            else:
                material = scene.add_dielectric_material(1.5)

            scene.add_sphere(tuple(center), FINAL_SMALL_RADIUS, material)

    glass = scene.add_dielectric_material(1.5)
    scene.add_sphere((0.0, 1.0, 0.0), 1.0, glass)

    brown = scene.add_lambertian_material((0.4, 0.2, 0.1))
    scene.add_sphere((-4.0, 1.0, 0.0), 1.0, brown)

    mirror = scene.add_metal_material((0.7, 0.6, 0.5), fuzz=0.0)
    scene.add_sphere((4.0, 1.0, 0.0), 1.0, mirror)

    logger.debug("Final scene has {} spheres", scene.get_sphere_count())

    return scene, CameraConfig(image_width=image_width)
