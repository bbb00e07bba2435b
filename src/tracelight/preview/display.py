"""Matplotlib-based preview display for rendered images.

This module provides functions for displaying rendered images using Matplotlib,
with configurable gamma correction.

Features:
    - Interactive preview window
    - Gamma correction (square root by default, 1.0 for linear)
    - Image size display

Example:
    >>> from tracelight.preview.display import show_preview
    >>> image = renderer.render(world)
    >>> show_preview(image, gamma=2.0)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from tracelight.errors import ConfigurationError

if TYPE_CHECKING:
    from tracelight.core.image import Image

# Square-root encoding of linear values
DEFAULT_GAMMA = 2.0


def validate_gamma(gamma: float) -> float:
    """Check that a gamma exponent is positive and finite.

    Raises:
        ConfigurationError: If gamma is not a positive finite number.
    """
    if not math.isfinite(gamma) or gamma <= 0.0:
        raise ConfigurationError(f"Gamma must be a positive finite number, got {gamma}")
    return float(gamma)


def apply_gamma(
    image: npt.NDArray[np.float64],
    gamma: float = DEFAULT_GAMMA,
) -> npt.NDArray[np.float64]:
    """Apply gamma correction for display.

    Clamps linear values to [0, 1] and encodes them as value^(1/gamma).

    Args:
        image: Linear image array of any shape.
        gamma: Gamma value (default 2.0, the square root). 1.0 leaves the
            clamped values linear.

    Returns:
        Gamma corrected image in [0, 1].

    Raises:
        ConfigurationError: If gamma is not positive.
    """
    gamma = validate_gamma(gamma)

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    result = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)

    if gamma == 1.0:
        return result

    # Apply gamma encoding: out = in^(1/gamma)
    return np.power(result, 1.0 / gamma)


def show_preview(
    image: Image,
    *,
    gamma: float = DEFAULT_GAMMA,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4.5),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: The rendered image to display.
        gamma: Gamma correction value (default 2.0).
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.

    Example:
        >>> image = renderer.render(world)
        >>> show_preview(image, gamma=2.0, block=False)
    """
    import matplotlib.pyplot as plt

    display_image = apply_gamma(image.pixels, gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {image.width}x{image.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
