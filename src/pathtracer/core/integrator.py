"""Recursive radiance estimator for Monte Carlo path tracing.

The integrator follows each camera ray through the scene, bouncing off
surfaces according to their materials, until the ray escapes to the sky,
gets absorbed, or runs out of bounce budget:

    radiance(ray, depth) =
        black                                         if depth == 0
        background(ray)                               if the ray misses
        black                                         if the surface absorbs
        attenuation * radiance(scattered, depth - 1)  otherwise

The bounce limit is a deliberate bias: paths still alive at the limit
contribute nothing.

The background is a vertical gradient from white (looking straight down) to
the sky color (looking straight up). It is the only light source.

Example:
    >>> rng = np.random.default_rng(0)
    >>> ray = get_ray(camera, 0.5, 0.5, rng)
    >>> color = radiance(ray, scene, MAX_DEPTH, rng)
"""

from __future__ import annotations

import numpy as np

from pathtracer.camera.thin_lens import Camera, get_ray
from pathtracer.core.color import BLACK, SKY_BLUE, WHITE
from pathtracer.core.ray import Ray, Vec3, normalize
from pathtracer.materials.scatter import scatter
from pathtracer.scene.intersection import T_MAX, T_MIN, Scene, intersect_scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 30


def background(ray: Ray, sky_color: Vec3 = SKY_BLUE) -> Vec3:
    """Color of a ray that escapes the scene.

    Linear blend of white and the sky color by t = 0.5 * (unit_y + 1).

    Args:
        ray: The escaping ray.
        sky_color: Color at the top of the gradient.

    Returns:
        The background radiance.
    """
    t = 0.5 * (float(normalize(ray.direction)[1]) + 1.0)
    return (1.0 - t) * WHITE + t * sky_color


def radiance(
    ray: Ray,
    scene: Scene,
    depth: int,
    rng: np.random.Generator,
    sky_color: Vec3 = SKY_BLUE,
) -> Vec3:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        scene: The scene to trace against.
        depth: Remaining bounce budget. 0 yields black.
        rng: Random generator for scattering decisions.
        sky_color: Color at the top of the background gradient.

    Returns:
        The estimated radiance (RGB).
    """
    if depth <= 0:
        return BLACK

    record = intersect_scene(scene, ray, T_MIN, T_MAX)
    if record is None:
        return background(ray, sky_color)

    scattered = scatter(record, ray, rng)
    if scattered is None:
        # Total absorption
        return BLACK

    return scattered.color * radiance(scattered, scene, depth - 1, rng, sky_color)


def sample_pixel(
    scene: Scene,
    camera: Camera,
    i: int,
    j: int,
    width: int,
    height: int,
    num_samples: int,
    max_depth: int,
    rng: np.random.Generator,
    sky_color: Vec3 = SKY_BLUE,
) -> Vec3:
    """Average several jittered radiance samples for one pixel.

    Pixel (i, j) uses image-plane coordinates with j = 0 at the bottom.
    Each sample adds a uniform [0, 1) jitter to both pixel coordinates before
    normalizing by (width - 1) and (height - 1).

    Args:
        scene: The scene to render.
        camera: The camera generating primary rays.
        i: Pixel column (0 = left).
        j: Pixel line (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        num_samples: Number of samples to average.
        max_depth: Bounce budget for each sample.
        rng: Random generator for jitter, lens and scattering.
        sky_color: Color at the top of the background gradient.

    Returns:
        The linear (not gamma corrected) average radiance.
    """
    # max() keeps single-pixel images finite
    u_scale = max(width - 1, 1)
    v_scale = max(height - 1, 1)

    total = np.zeros(3, dtype=np.float64)
    for _ in range(num_samples):
        s = (i + rng.random()) / u_scale
        t = (j + rng.random()) / v_scale
        ray = get_ray(camera, s, t, rng)
        total += radiance(ray, scene, max_depth, rng, sky_color)
    return total / num_samples
