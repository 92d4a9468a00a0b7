"""Ray data structure and vector utilities for CPU path tracing.

This module provides the fundamental Ray dataclass and the vector helpers the
rest of the renderer is written against. Vectors and points are plain NumPy
``float64`` arrays of shape ``(3,)``; values stored on rays, hits and scene
objects are read-only views so that a scene built once can be shared between
worker threads without copies or locks.

All random sampling takes an explicit ``numpy.random.Generator`` so that a
render can be reproduced from a seed regardless of thread scheduling.

Example:
    >>> import numpy as np
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors, points and colors
Vec3 = npt.NDArray[np.float64]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create an immutable 3D vector.

    Args:
        x: First component.
        y: Second component.
        z: Third component.

    Returns:
        A read-only float64 array of shape (3,).
    """
    v = np.array((x, y, z), dtype=np.float64)
    v.flags.writeable = False
    return v


def as_vec3(value: Any) -> Vec3:
    """Convert a sequence or array to a read-only 3D vector.

    Writable arrays are wrapped in a read-only view rather than copied.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    v = np.asarray(value, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {v.shape}")
    if v.flags.writeable:
        v = v.view()
        v.flags.writeable = False
    return v


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be unit
            length; intersection and scattering normalize where needed.
        color: Optional color weight carried by the ray. Scattered rays carry
            the attenuation of the material that produced them; primary rays
            carry None.
    """

    origin: Vec3
    direction: Vec3
    color: Vec3 | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "direction", as_vec3(self.direction))
        if self.color is not None:
            object.__setattr__(self, "color", as_vec3(self.color))


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return np.array(
        (
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ),
        dtype=np.float64,
    )


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return dot(v, v)


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        ValueError: If v has zero length.
    """
    n = length(v)
    if n == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / n


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    The reflection formula is R = I - 2(I . N)N.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def refract(unit_incident: Vec3, normal: Vec3, density_ratio: float) -> Vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    The refracted direction is split into a component perpendicular to the
    normal and one parallel to it:

        r_perp = ratio * (I + cos_theta * N)
        r_par  = -sqrt(|1 - |r_perp|^2|) * N

    Callers are expected to rule out total internal reflection first; the
    absolute value keeps the square root real at the boundary.

    Args:
        unit_incident: The incoming direction (must be unit length).
        normal: The surface normal facing the incident ray (unit length).
        density_ratio: Ratio of refractive indices n_incident / n_transmitted.

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(-dot(unit_incident, normal), 1.0)
    r_perp = density_ratio * (unit_incident + cos_theta * normal)
    r_par = -math.sqrt(abs(1.0 - length_squared(r_perp))) * normal
    return r_perp + r_par


def schlick_reflectance(cosine: float, ratio: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ratio: Ratio of refractive indices.

    Returns:
        The approximate reflectance coefficient. Equals
        ((1 - ratio) / (1 + ratio))^2 at normal incidence and tends to 1 at
        grazing angles.
    """
    r0 = (1.0 - ratio) / (1.0 + ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling over the [-1, 1] cube.

    Args:
        rng: The random generator to draw from.

    Returns:
        A random vector with length < 1.
    """
    while True:
        p = rng.uniform(-1.0, 1.0, 3)
        if length_squared(p) < 1.0:
            return p


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used for depth-of-field lens sampling.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        if x * x + y * y < 1.0:
            return np.array((x, y, 0.0), dtype=np.float64)
