"""Camera module for view and ray generation.

Components:
    thin_lens: Perspective camera with depth of field

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera, ThinLensCamera, get_ray, setup_camera

__all__ = [
    "Camera",
    "ThinLensCamera",
    "setup_camera",
    "get_ray",
]
