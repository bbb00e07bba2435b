#!/usr/bin/env python3
"""Render a preset sphere scene.

This script demonstrates end-to-end rendering with the tracelight path
tracer. It builds one of the preset scenes, sets up the camera, renders it
with the requested number of worker processes and writes the result as PPM
or PNG.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene NAME        final, three-spheres or single-sphere (default: final)
    --width WIDTH       Image width in pixels (default: 400)
    --samples SAMPLES   Number of samples per pixel (default: 500)
    --max-depth DEPTH   Maximum bounces per path (default: 50)
    --workers N         Worker processes, 1 renders in-process (default: 1)
    --seed SEED         Seed for the render and the scene layout
    --gamma GAMMA       Gamma applied before quantization (default: 2.0)
    --output OUTPUT     Output file (.ppm or .png); PPM on stdout if omitted
    --quiet             Suppress progress output
    --log-level LEVEL   Log level for stderr (default: INFO)

Example:
    python -m examples.render_scene --scene three-spheres --width 200 --samples 50 --workers 4 --output spheres.png
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path

from loguru import logger

SCENES = ("final", "three-spheres", "single-sphere")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a preset sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=SCENES,
        default="final",
        help="Preset scene to render (default: final)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=500,
        help="Number of samples per pixel (default: 500)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=50,
        help="Maximum bounces per path (default: 50)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help=f"Worker processes (default: 1, this machine has {os.cpu_count()} CPUs)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the render and the scene layout (default: random)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=2.0,
        help="Gamma applied before quantization, 1.0 for linear (default: 2.0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path ending in .ppm or .png (default: PPM on stdout)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Log level for stderr (default: INFO)",
    )
    return parser.parse_args()


def configure_logging(level: str, quiet: bool) -> None:
    """Send log records to stderr so stdout stays free for image data."""
    logger.remove()
    logger.add(sys.stderr, level="WARNING" if quiet else level.upper())


def render_scene(
    scene_name: str = "final",
    width: int = 400,
    num_samples: int = 500,
    max_depth: int = 50,
    workers: int = 1,
    seed: int | None = None,
    gamma: float = 2.0,
    output_path: str | None = None,
    quiet: bool = False,
) -> Path | None:
    """Render a preset scene and save it.

    Args:
        scene_name: One of SCENES.
        width: Image width in pixels.
        num_samples: Number of samples per pixel.
        max_depth: Maximum bounces per path.
        workers: Number of worker processes.
        seed: Seed for the render and the scene layout.
        gamma: Gamma applied before quantization.
        output_path: Output file path (.ppm or .png). None writes PPM to stdout.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file, or None when written to stdout.
    """
    from tracelight.camera import Camera
    from tracelight.core.renderer import Renderer, RenderSettings
    from tracelight.preview.display import validate_gamma
    from tracelight.preview.export import save_png, write_ppm
    from tracelight.scene.presets import (
        create_final_scene,
        create_single_sphere_scene,
        create_three_spheres_scene,
    )

    validate_gamma(gamma)

    if scene_name == "final":
        scene, camera_config = create_final_scene(seed=seed, image_width=width)
    elif scene_name == "three-spheres":
        scene, camera_config = create_three_spheres_scene(image_width=width)
    else:
        scene, camera_config = create_single_sphere_scene(image_width=width)

    logger.info("Scene '{}': {}", scene_name, scene)

    camera = Camera(camera_config)
    settings = RenderSettings(
        samples_per_pixel=num_samples,
        max_depth=max_depth,
        workers=workers,
        seed=seed,
    )
    renderer = Renderer(camera, settings)

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (done / total) * 100 if total > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                file=sys.stderr,
                flush=True,
            )

    image = renderer.render(scene.build_world(), callback=progress_callback)

    if not quiet:
        print(file=sys.stderr)  # Newline after progress

    if output_path is None:
        write_ppm(image, sys.stdout, gamma=gamma)
        return None

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".png":
        save_png(image, output_file, gamma=gamma)
    else:
        write_ppm(image, output_file, gamma=gamma)

    logger.info("Saved to: {}", output_file.absolute())
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    configure_logging(args.log_level, args.quiet)

    try:
        render_scene(
            scene_name=args.scene,
            width=args.width,
            num_samples=args.samples,
            max_depth=args.max_depth,
            workers=args.workers,
            seed=args.seed,
            gamma=args.gamma,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except ValueError as e:
        logger.error("Error: {}", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
