"""Parallel renderer turning a scene and camera into an Image.

This module provides the render loop around the integrator:
- Row-sized units of work (one task per image row)
- In-process rendering, or a process pool for more than one worker
- One random generator per row task, spawned from a single SeedSequence
- Progress callbacks for UI updates

Every row task owns a generator built from ``SeedSequence(seed).spawn(height)``
so no generator is ever shared between tasks. Because the generator of a row
depends only on the seed and the row index, a render with a fixed seed
produces the same image whatever the worker count or completion order.

Finished rows are tagged with their index and written back by index, so the
buffer is always row-major from the top-left even though a process pool
completes rows in any order.

Example:
    >>> from tracelight.camera import Camera
    >>> from tracelight.core.renderer import Renderer, RenderSettings
    >>> from tracelight.scene.presets import create_three_spheres_scene
    >>>
    >>> scene, camera_config = create_three_spheres_scene()
    >>> renderer = Renderer(Camera(camera_config), RenderSettings(samples_per_pixel=10, workers=4))
    >>> image = renderer.render(scene.build_world())
"""

from __future__ import annotations

import time
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
from loguru import logger

from tracelight.camera.thin_lens import Camera
from tracelight.core.image import Image
from tracelight.core.integrator import MAX_DEPTH, render_row
from tracelight.errors import ConfigurationError
from tracelight.geometry.hittable import Hittable

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class RenderSettings:
    """Sampling and scheduling parameters for a render.

    Attributes:
        samples_per_pixel: Number of jittered sample paths averaged per pixel.
        max_depth: Bounce budget of each sample path.
        workers: Number of worker processes. 1 renders in the calling process.
        seed: Root seed for the per-row generators. None draws fresh entropy,
            which is logged so the render can be reproduced.

    Raises:
        ConfigurationError: If any value is out of range.
    """

    samples_per_pixel: int = 500
    max_depth: int = MAX_DEPTH
    workers: int = 1
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.samples_per_pixel < 1:
            raise ConfigurationError(
                f"Samples per pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ConfigurationError(f"Max depth must be non-negative, got {self.max_depth}")
        if self.workers < 1:
            raise ConfigurationError(f"Worker count must be at least 1, got {self.workers}")
        if self.seed is not None and self.seed < 0:
            raise ConfigurationError(f"Seed must be non-negative, got {self.seed}")


# =============================================================================
# Worker Process State
# =============================================================================

# Per-process scene state, set once by _init_worker
_worker_state: dict[str, Any] = {}


def _init_worker(camera: Camera, world: Hittable, settings: RenderSettings) -> None:
    """Store the read-only render inputs in a worker process."""
    _worker_state["camera"] = camera
    _worker_state["world"] = world
    _worker_state["settings"] = settings


def _render_row_task(
    row: int, seed_sequence: np.random.SeedSequence
) -> tuple[int, npt.NDArray[np.float64]]:
    """Render one row in a worker process, returning it tagged with its index."""
    settings: RenderSettings = _worker_state["settings"]
    rng = np.random.default_rng(seed_sequence)
    colors = render_row(
        _worker_state["camera"],
        _worker_state["world"],
        rng,
        row,
        settings.samples_per_pixel,
        settings.max_depth,
    )
    return row, colors


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders a scene through a camera into an Image.

    Attributes:
        camera: The camera generating primary rays.
        settings: Sampling and scheduling parameters.
    """

    def __init__(self, camera: Camera, settings: RenderSettings | None = None) -> None:
        """Initialize the renderer.

        Args:
            camera: The camera generating primary rays.
            settings: Render settings. Uses RenderSettings() when None.
        """
        self.camera = camera
        self.settings = settings if settings is not None else RenderSettings()

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.camera.image_width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.camera.image_height

    def _row_seeds(self) -> list[np.random.SeedSequence]:
        root = np.random.SeedSequence(self.settings.seed)
        if self.settings.seed is None:
            logger.info("Render seed entropy: {}", root.entropy)
        return root.spawn(self.height)

    def render(self, world: Hittable, callback: ProgressCallback | None = None) -> Image:
        """Render the world into a new image.

        Blocks until every row is finished. Exceptions raised while rendering
        a row propagate unchanged. With a process pool, rows that have not
        started when the first error arrives are cancelled.

        Args:
            world: The scene to render.
            callback: Optional callback called after each finished row in the
                calling process. Receives (rows_done, total_rows).

        Returns:
            The rendered linear RGB image.

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> image = renderer.render(world, callback=progress)
        """
        settings = self.settings
        logger.info(
            "Rendering {}x{} image: {} spp, max depth {}, {} worker(s)",
            self.width,
            self.height,
            settings.samples_per_pixel,
            settings.max_depth,
            settings.workers,
        )
        start = time.perf_counter()

        buffer = np.zeros((self.height, self.width, 3), dtype=np.float64)
        seeds = self._row_seeds()

        if settings.workers == 1:
            self._render_serial(world, seeds, buffer, callback)
        else:
            self._render_parallel(world, seeds, buffer, callback)

        elapsed = time.perf_counter() - start
        logger.info("Render finished in {:.2f}s", elapsed)
        return Image(buffer)

    def _render_serial(
        self,
        world: Hittable,
        seeds: list[np.random.SeedSequence],
        buffer: npt.NDArray[np.float64],
        callback: ProgressCallback | None,
    ) -> None:
        settings = self.settings
        for row, seed_sequence in enumerate(seeds):
            rng = np.random.default_rng(seed_sequence)
            buffer[row] = render_row(
                self.camera,
                world,
                rng,
                row,
                settings.samples_per_pixel,
                settings.max_depth,
            )
            self._row_done(row, row + 1, callback)

    def _render_parallel(
        self,
        world: Hittable,
        seeds: list[np.random.SeedSequence],
        buffer: npt.NDArray[np.float64],
        callback: ProgressCallback | None,
    ) -> None:
        with ProcessPoolExecutor(
            max_workers=self.settings.workers,
            initializer=_init_worker,
            initargs=(self.camera, world, self.settings),
        ) as executor:
            futures = [
                executor.submit(_render_row_task, row, seed_sequence)
                for row, seed_sequence in enumerate(seeds)
            ]
            try:
                for done, future in enumerate(as_completed(futures), start=1):
                    row, colors = future.result()
                    buffer[row] = colors
                    self._row_done(row, done, callback)
            except BaseException:
                # Rows not yet started are dropped; only running rows are awaited
                executor.shutdown(wait=False, cancel_futures=True)
                raise

    def _row_done(self, row: int, done: int, callback: ProgressCallback | None) -> None:
        logger.debug("Row {} finished ({}/{})", row, done, self.height)
        if callback is not None:
            callback(done, self.height)

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples={self.settings.samples_per_pixel}, workers={self.settings.workers})"
        )
