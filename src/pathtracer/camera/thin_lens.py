"""Thin-lens camera model for perspective projection with depth of field.

The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Depth of field through a circular aperture

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The focus plane passes through the lookat point: the viewport is scaled by
the focus distance |lookat - lookfrom|, so geometry at the target is sharp and
everything else is blurred in proportion to the aperture.

Camera setup happens once. The resulting Camera is immutable and shared by
all render threads.

Example:
    >>> camera = setup_camera(
    ...     ThinLensCamera(
    ...         lookfrom=(0.0, 0.0, 3.0),
    ...         lookat=(0.0, 0.0, 0.0),
    ...         vup=(0.0, 1.0, 0.0),
    ...         vfov=60.0,
    ...         aspect_ratio=16.0 / 9.0,
    ...         aperture=0.1,
    ...     )
    ... )
    >>> ray = get_ray(camera, 0.5, 0.5, np.random.default_rng())
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray, Vec3, as_vec3, cross, length, random_in_unit_disk

# Below this length the up vector is treated as parallel to the view direction
_DEGENERATE_BASIS = 1e-12

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class ThinLensCamera:
    """Configuration for a thin-lens camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at; also the focus point.
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 gives a pinhole camera.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0


@dataclass(frozen=True, eq=False)
class Camera:
    """Precomputed camera state used for ray generation.

    Attributes:
        origin: Camera position.
        u: Right direction of the camera basis.
        v: Up direction of the camera basis.
        w: Backward direction (opposite the view direction).
        horizontal: Full viewport width vector at the focus plane.
        vertical: Full viewport height vector at the focus plane.
        lower_left: Lower-left corner of the viewport at the focus plane.
        lens_radius: Half the aperture.
    """

    origin: Vec3
    u: Vec3
    v: Vec3
    w: Vec3
    horizontal: Vec3
    vertical: Vec3
    lower_left: Vec3
    lens_radius: float

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get camera vectors as plain tuples, for debugging and tests."""
        names = ("origin", "u", "v", "w", "horizontal", "vertical", "lower_left")
        return {name: tuple(float(c) for c in getattr(self, name)) for name in names}


# =============================================================================
# Camera Setup
# =============================================================================


def setup_camera(config: ThinLensCamera) -> Camera:
    """Compute the camera basis and viewport from a configuration.

    Args:
        config: Camera configuration with position, orientation, FOV and
            aperture.

    Returns:
        An immutable Camera ready for ray generation.

    Raises:
        ValueError: If lookfrom equals lookat, or vup is parallel to the view
            direction.
    """
    theta = math.radians(config.vfov)
    h = math.tan(theta / 2.0)
    viewport_height = 2.0 * h
    viewport_width = config.aspect_ratio * viewport_height

    lookfrom = np.array(config.lookfrom, dtype=np.float64)
    lookat = np.array(config.lookat, dtype=np.float64)
    vup = np.array(config.vup, dtype=np.float64)

    # w points from lookat toward lookfrom (backward)
    w = lookfrom - lookat
    focus_dist = length(w)
    if focus_dist == 0.0:
        raise ValueError("Camera lookfrom and lookat must be different points")
    w = w / focus_dist

    u = cross(vup, w)
    u_len = length(u)
    if u_len < _DEGENERATE_BASIS:
        raise ValueError("Camera up vector must not be parallel to the view direction")
    u = u / u_len

    v = cross(w, u)

    horizontal = focus_dist * viewport_width * u
    vertical = focus_dist * viewport_height * v
    lower_left = lookfrom - horizontal / 2.0 - vertical / 2.0 - focus_dist * w

    return Camera(
        origin=as_vec3(lookfrom),
        u=as_vec3(u),
        v=as_vec3(v),
        w=as_vec3(w),
        horizontal=as_vec3(horizontal),
        vertical=as_vec3(vertical),
        lower_left=as_vec3(lower_left),
        lens_radius=config.aperture / 2.0,
    )


# =============================================================================
# Ray Generation
# =============================================================================


def get_ray(camera: Camera, s: float, t: float, rng: np.random.Generator) -> Ray:
    """Generate a primary ray through normalized image coordinates (s, t).

    The ray origin is jittered over the lens disk:
    - s = 0: left edge of image, s = 1: right edge
    - t = 0: bottom edge of image, t = 1: top edge

    Args:
        camera: The camera to generate the ray from.
        s: Horizontal coordinate in [0, 1] (left to right).
        t: Vertical coordinate in [0, 1] (bottom to top).
        rng: Random generator for the lens sample.

    Returns:
        A Ray from a point on the lens toward the focus-plane point (s, t).
    """
    rd = camera.lens_radius * random_in_unit_disk(rng)
    offset = camera.u * rd[0] + camera.v * rd[1]
    direction = camera.lower_left + s * camera.horizontal + t * camera.vertical - camera.origin - offset
    return Ray(origin=camera.origin + offset, direction=direction)
