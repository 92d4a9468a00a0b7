"""Materials module for surface scattering.

All surfaces share one parametrized material record and one scattering
algorithm:

Components:
    material: The Material record and the diffuse/metal/dielectric factories
    scatter: Reflect/refract/diffuse selection producing the outgoing ray

Materials are immutable after construction, so a scene can hand the same
instance to every sphere and every render thread.
"""

from .material import Material, colored_dielectric, dielectric, diffuse, metal
from .scatter import SCATTER_EPSILON, density_ratio, scatter, total_internal_reflection

__all__ = [
    "Material",
    "diffuse",
    "metal",
    "dielectric",
    "colored_dielectric",
    "scatter",
    "density_ratio",
    "total_internal_reflection",
    "SCATTER_EPSILON",
]
