"""Camera module for view and ray generation.

This module provides the camera model for generating primary rays:

Components:
    thin_lens: Positionable camera with optional depth of field

Camera responsibilities:
    - Derive the viewport and pixel grid from the view parameters once
    - Apply anti-aliasing jitter for sub-pixel sampling
    - Sample ray origins on the defocus disk for depth of field
    - Fail fast on degenerate configurations

Pixel coordinates:
    i in [0, image_width): left to right across the image
    j in [0, image_height): top to bottom across the image
"""

from .thin_lens import Camera, CameraConfig

__all__ = [
    "Camera",
    "CameraConfig",
]
