"""Rendered image buffer.

An Image holds the linear RGB result of a render as a NumPy array of shape
(height, width, 3), row-major from the top-left pixel. The buffer is filled
once by the renderer and is read-only afterwards.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import numpy.typing as npt

from tracelight.core.ray import Vec3


class Image:
    """A read-only linear RGB raster.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Read-only float64 array of shape (height, width, 3).
    """

    def __init__(self, pixels: npt.ArrayLike) -> None:
        """Wrap a pixel array, freezing a private copy of it.

        Args:
            pixels: Array-like of shape (height, width, 3).

        Raises:
            ValueError: If the array does not have shape (height, width, 3)
                with positive height and width.
        """
        data = np.array(pixels, dtype=np.float64)
        if data.ndim != 3 or data.shape[2] != 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Expected pixel array of shape (height, width, 3), got {data.shape}")
        data.setflags(write=False)
        self.pixels = data

    @property
    def width(self) -> int:
        """Get the image width."""
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        """Get the image height."""
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> Vec3:
        """Get the color of the pixel in column x, row y (0, 0 is top-left)."""
        return self.pixels[y, x]

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the pixel array."""
        return self.pixels.copy()

    def __iter__(self) -> Iterator[Vec3]:
        """Iterate over pixel colors in row-major order from the top-left."""
        return iter(self.pixels.reshape(-1, 3))

    def __len__(self) -> int:
        return self.width * self.height

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"
