"""Image export utilities for rendered images.

This module provides functions for saving rendered images to files with
configurable gamma correction.

Supported formats:
    - PPM (plain-text P3, 8 bits per channel)
    - PNG (8-bit via Pillow)

Both formats share one channel encoding: clamp the linear value to [0, 1],
apply gamma, then round 255 * value to the nearest integer with halves
rounded up.

Example:
    >>> from tracelight.preview.export import save_png, write_ppm
    >>> image = renderer.render(world)
    >>> write_ppm(image, "output.ppm")
    >>> save_png(image, "output.png", gamma=1.0)
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, TextIO, Union

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from tracelight.preview.display import DEFAULT_GAMMA, apply_gamma

if TYPE_CHECKING:
    from tracelight.core.image import Image

# Largest channel value written to the PPM header
MAX_COLOR = 255

PathOrStream = Union[str, "os.PathLike[str]", TextIO]


def image_to_uint8(
    image: Image,
    *,
    gamma: float = DEFAULT_GAMMA,
) -> npt.NDArray[np.uint8]:
    """Convert a linear image to 8-bit channels for display/export.

    Args:
        image: The rendered image.
        gamma: Gamma correction value (default 2.0). 1.0 for linear output.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.

    Raises:
        ConfigurationError: If gamma is not positive.
    """
    encoded = apply_gamma(image.pixels, gamma)
    return np.floor(encoded * MAX_COLOR + 0.5).astype(np.uint8)


def format_ppm(image: Image, *, gamma: float = DEFAULT_GAMMA) -> str:
    """Serialize an image as plain-text PPM (P3).

    The output is the header lines ``P3``, ``<width> <height>`` and ``255``,
    followed by one ``R G B`` line per pixel in row-major order from the
    top-left pixel.

    Args:
        image: The rendered image.
        gamma: Gamma correction value (default 2.0).

    Returns:
        The PPM document, ending with a newline.
    """
    channels = image_to_uint8(image, gamma=gamma).reshape(-1, 3)
    lines = [f"P3\n{image.width} {image.height}\n{MAX_COLOR}"]
    lines.extend(f"{r} {g} {b}" for r, g, b in channels.tolist())
    return "\n".join(lines) + "\n"


def write_ppm(
    image: Image,
    target: PathOrStream,
    *,
    gamma: float = DEFAULT_GAMMA,
) -> None:
    """Write an image as plain-text PPM (P3) to a file path or text stream.

    Args:
        image: The rendered image.
        target: Output file path, or an open text stream such as sys.stdout.
        gamma: Gamma correction value (default 2.0).
    """
    document = format_ppm(image, gamma=gamma)
    if isinstance(target, (str, os.PathLike)):
        with open(target, "w", encoding="ascii") as f:
            f.write(document)
    else:
        target.write(document)


def save_png(
    image: Image,
    filepath: str | os.PathLike[str],
    *,
    gamma: float = DEFAULT_GAMMA,
) -> None:
    """Save an image as an 8-bit PNG file.

    Args:
        image: The rendered image.
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (default 2.0).
    """
    image_uint8 = image_to_uint8(image, gamma=gamma)

    # Save using Pillow
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
