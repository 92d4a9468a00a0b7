"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector helpers and random sampling
    color: Color constants, gamma correction and fixed-point conversion
    integrator: Recursive radiance estimator and per-pixel sampling
    settings: Render configuration
    parallel: Multi-threaded scanline renderer with ordered output

Vectors are NumPy float64 arrays of shape (3,). Every stochastic function
takes an explicit numpy.random.Generator.
"""

from .color import BLACK, SKY_BLUE, WHITE, gamma_correct, to_fixed_point
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    ray_at,
    reflect,
    refract,
    schlick_reflectance,
    vec3,
)

# Note: integrator, settings and parallel are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator or pathtracer.core.parallel when needed.

__all__ = [
    "Ray",
    "Vec3",
    "ray_at",
    "vec3",
    "as_vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_reflectance",
    "random_in_unit_sphere",
    "random_in_unit_disk",
    "BLACK",
    "WHITE",
    "SKY_BLUE",
    "gamma_correct",
    "to_fixed_point",
]
