"""Preview module for output and visualization.

This module handles rendering output and preview:

Components:
    display: Gamma correction and Matplotlib-based preview display
    export: PPM/PNG image export utilities

Example:
    >>> from tracelight.preview import show_preview, write_ppm
    >>> image = renderer.render(world)
    >>> write_ppm(image, "output.ppm", gamma=2.0)
    >>> show_preview(image)
"""

from tracelight.preview.display import (
    DEFAULT_GAMMA,
    apply_gamma,
    show_preview,
    validate_gamma,
)
from tracelight.preview.export import (
    compute_rmse,
    format_ppm,
    image_to_uint8,
    save_png,
    write_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "apply_gamma",
    "validate_gamma",
    "DEFAULT_GAMMA",
    # Export functions
    "format_ppm",
    "write_ppm",
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]
