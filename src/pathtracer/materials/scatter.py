"""Scattering for the unified material record.

A single algorithm covers diffuse, metal and dielectric surfaces. The steps
run in a fixed order and each later step only applies when the earlier ones
left no direction chosen:

    1. Diffuse (reflection_factor is None): the direction is the normal.
    2. Otherwise draw r in [0, 1). If reflection_factor < r, try to refract:
       refraction fails on total internal reflection, or when a second draw
       falls below the Schlick reflectance.
    3. No direction yet: mirror reflection of the unit incident direction.
    4. Directions (nearly) orthogonal to the normal are absorbed.
    5. diffusion_factor * random_in_unit_sphere() is added to the direction.
    6. The scattered ray starts at the hit point and carries the material
       color as its attenuation.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when ratio * sin(theta) > 1

Example:
    >>> rng = np.random.default_rng(7)
    >>> scattered = scatter(hit, incident_ray, rng)
    >>> if scattered is not None:
    ...     weight = scattered.color
"""

from __future__ import annotations

import math

import numpy as np

from pathtracer.core.ray import (
    Ray,
    Vec3,
    dot,
    normalize,
    random_in_unit_sphere,
    reflect,
    refract,
    schlick_reflectance,
)
from pathtracer.geometry.sphere import Face, HitRecord
from pathtracer.materials.material import Material

# Below this |dot(direction, normal)| the scattered ray is absorbed, and below
# this diffusion factor no perturbation is applied
SCATTER_EPSILON = 1e-11


def density_ratio(material: Material, face: Face) -> float:
    """Ratio of refractive indices for a ray crossing the surface.

    Entering from outside (front face) gives 1 / ior, leaving from inside
    gives ior.
    """
    if face is Face.FRONT:
        return 1.0 / material.refraction_index
    return material.refraction_index


def total_internal_reflection(cos_theta: float, ratio: float) -> bool:
    """Check whether refraction has no real solution."""
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    return ratio * sin_theta > 1.0


def _refracted_direction(
    hit: HitRecord,
    unit_incident: Vec3,
    rng: np.random.Generator,
) -> Vec3 | None:
    """Try to refract; None means the ray falls through to reflection."""
    cos_theta = min(-dot(unit_incident, hit.normal), 1.0)
    ratio = density_ratio(hit.material, hit.face)

    if total_internal_reflection(cos_theta, ratio):
        return None
    if schlick_reflectance(cos_theta, ratio) <= rng.random():
        return refract(unit_incident, hit.normal, ratio)
    return None


def scatter(hit: HitRecord, incident: Ray, rng: np.random.Generator) -> Ray | None:
    """Scatter an incident ray off the surface described by a hit record.

    Args:
        hit: The intersection, with the normal facing the incident ray.
        incident: The ray that produced the hit.
        rng: Random generator for the stochastic branches.

    Returns:
        The scattered ray carrying the material color, or None if the ray
        was absorbed.
    """
    material = hit.material
    normal = hit.normal
    unit_incident = normalize(incident.direction)

    direction = None
    if material.reflection_factor is None:
        direction = normal
    elif material.reflection_factor < rng.random():
        direction = _refracted_direction(hit, unit_incident, rng)

    if direction is None:
        direction = reflect(unit_incident, normal)

    if abs(dot(direction, normal)) <= SCATTER_EPSILON:
        return None

    if material.diffusion_factor > SCATTER_EPSILON:
        direction = direction + material.diffusion_factor * random_in_unit_sphere(rng)

    return Ray(origin=hit.point, direction=direction, color=material.color)
