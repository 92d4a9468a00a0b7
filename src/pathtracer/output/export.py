"""Image export utilities for rendered images.

Rendered pixels arrive as fixed-point RGB triples in raster order (see
``core.parallel.render_pixels``). This module gathers them into NumPy arrays
and saves them through Pillow.

Supported formats:
    - PNG (8-bit via Pillow)

Example:
    >>> pixels = render_pixels(scene, camera, settings)
    >>> image = pixels_to_array(pixels, settings.width, settings.height)
    >>> save_png_from_array(image, "output.png", max_color=settings.max_color)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import chain
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.color import DEFAULT_MAX_COLOR

logger = logging.getLogger(__name__)


def pixels_to_array(
    pixels: Iterable[tuple[int, int, int]],
    width: int,
    height: int,
) -> npt.NDArray[np.int64]:
    """Collect raster-order RGB triples into an image array.

    Args:
        pixels: Exactly width * height triples, top row first.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Integer array of shape (height, width, 3).

    Raises:
        ValueError: If the number of pixels does not match the image size.
    """
    flat = np.fromiter(chain.from_iterable(pixels), dtype=np.int64)
    expected = width * height * 3
    if flat.size != expected:
        raise ValueError(
            f"Expected {width * height} pixels, got {flat.size / 3:g}"
        )
    return flat.reshape(height, width, 3)


def image_to_uint8(
    image: npt.NDArray[np.integer],
    max_color: int = DEFAULT_MAX_COLOR,
) -> npt.NDArray[np.uint8]:
    """Rescale a fixed-point image with ``max_color`` levels to 8 bits.

    Args:
        image: Integer image with values in [0, max_color - 1].
        max_color: Number of levels per channel in the input.

    Returns:
        8-bit image array of the same shape.
    """
    if max_color == 256:
        return image.astype(np.uint8)
    scaled = image.astype(np.int64) * 255 // (max_color - 1)
    return scaled.astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.integer],
    filepath: str | Path,
    *,
    max_color: int = DEFAULT_MAX_COLOR,
) -> Path:
    """Save a fixed-point image array as an 8-bit PNG file.

    Args:
        image: Integer image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        max_color: Number of levels per channel in the input.

    Returns:
        The path of the written file.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_to_uint8(image, max_color))
    pil_image.save(path)
    logger.info("Saved PNG image: %s", path)
    return path


def save_png(
    pixels: Iterable[tuple[int, int, int]],
    filepath: str | Path,
    width: int,
    height: int,
    *,
    max_color: int = DEFAULT_MAX_COLOR,
) -> Path:
    """Save raster-order RGB triples as a PNG file."""
    image = pixels_to_array(pixels, width, height)
    return save_png_from_array(image, filepath, max_color=max_color)


def compute_rmse(
    image_a: npt.NDArray[np.number],
    image_b: npt.NDArray[np.number],
) -> float:
    """Root mean squared error between two images of the same shape.

    Used to compare renders, for example fixed-point images from two seeded
    runs. Integer inputs are compared in float64.

    Raises:
        ValueError: If the shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Cannot compare images of shape {image_a.shape} and {image_b.shape}")
    diff = np.subtract(image_a, image_b, dtype=np.float64)
    return float(np.sqrt(np.mean(np.square(diff))))
