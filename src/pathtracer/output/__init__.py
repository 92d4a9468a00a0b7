"""Output module for writing rendered images.

Components:
    ppm: Streaming plain-text PPM (P3) writer
    export: NumPy conversion and PNG export via Pillow
"""

from .export import compute_rmse, image_to_uint8, pixels_to_array, save_png, save_png_from_array
from .ppm import PpmWriter, write_ppm

__all__ = [
    "PpmWriter",
    "write_ppm",
    "pixels_to_array",
    "image_to_uint8",
    "save_png",
    "save_png_from_array",
    "compute_rmse",
]
