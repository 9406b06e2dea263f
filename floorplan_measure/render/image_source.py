"""
Image Source Module

Wraps an already decoded raster image for the session and renderer.
Decoding from files or bytes is the caller's job.
"""

import logging
from dataclasses import dataclass
from typing import Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DrawableImage:
    """
    Decoded image pixels plus intrinsic size.

    Compared and hashed by identity; the pixel array is not hashable.
    """
    pixels: np.ndarray
    width: int
    height: int

    @classmethod
    def from_source(cls, image: Union[np.ndarray, Image.Image, "DrawableImage"]) -> "DrawableImage":
        """
        Build a DrawableImage from a numpy array or a PIL image.

        PIL images are converted to BGR arrays to match OpenCV.

        Args:
            image: HxW, HxWx3 or HxWx4 array, or a PIL image

        Returns:
            DrawableImage

        Raises:
            ValueError: If the array shape is not an image
        """
        if isinstance(image, DrawableImage):
            return image

        if isinstance(image, Image.Image):
            rgb = np.asarray(image.convert("RGB"))
            pixels = np.ascontiguousarray(rgb[:, :, ::-1])
        elif isinstance(image, np.ndarray):
            pixels = image
        else:
            raise ValueError(f"Unsupported image type: {type(image).__name__}")

        if pixels.ndim not in (2, 3) or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Not an image array: shape {pixels.shape}")

        if pixels.ndim == 3 and pixels.shape[2] not in (3, 4):
            raise ValueError(f"Unsupported channel count: {pixels.shape[2]}")

        height, width = pixels.shape[:2]
        logger.debug(f"Image source: {width}x{height}")

        return cls(pixels=pixels, width=int(width), height=int(height))
