"""Unified material record.

Every surface response in the renderer is described by one record with four
parameters instead of one class per material kind:

    color: Attenuation applied to the scattered ray (RGB in [0, 1]).
    diffusion_factor: Radius of the random perturbation added to the chosen
        direction. 1 gives a diffuse spread, 0 a perfect mirror or clear glass.
    reflection_factor: None for pure diffuse scattering. Otherwise a value in
        [-1, 1] compared against a uniform draw: 1 always reflects, -1 always
        attempts refraction.
    refraction_index: Index of refraction used when refraction is attempted.

The named factories below give the usual materials:

    diffuse(r, g, b)                 -> reflection None, diffusion 1
    metal(r, g, b, fuzziness)        -> reflection 1, diffusion = fuzziness
    dielectric(ior)                  -> reflection -1, white, diffusion 0
    colored_dielectric(r, g, b, ior) -> tinted glass

Materials are immutable and shared by every sphere that references them.

Example:
    >>> glass = dielectric(1.5)
    >>> gold = metal(0.8, 0.6, 0.2, fuzziness=0.3)
"""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.core.ray import Vec3, as_vec3, vec3


@dataclass(frozen=True, eq=False)
class Material:
    """Material parameters shared by all scattering behaviours.

    Attributes:
        color: The attenuation color (RGB, each component in [0, 1]).
        diffusion_factor: Perturbation radius in [0, 1].
        reflection_factor: None for diffuse, otherwise in [-1, 1].
        refraction_index: Index of refraction (> 0).
    """

    color: Vec3
    diffusion_factor: float = 1.0
    reflection_factor: float | None = None
    refraction_index: float = 1.0

    def __post_init__(self) -> None:
        color = as_vec3(self.color)
        for i, component in enumerate(color):
            if component < 0.0 or component > 1.0:
                raise ValueError(
                    f"Color component {i} = {component} is outside [0, 1]. "
                    "This would violate energy conservation."
                )
        if not 0.0 <= self.diffusion_factor <= 1.0:
            raise ValueError(f"Diffusion factor = {self.diffusion_factor} is outside [0, 1].")
        if self.reflection_factor is not None and not -1.0 <= self.reflection_factor <= 1.0:
            raise ValueError(f"Reflection factor = {self.reflection_factor} is outside [-1, 1].")
        if self.refraction_index <= 0.0:
            raise ValueError(f"Refraction index = {self.refraction_index} must be positive.")
        object.__setattr__(self, "color", color)

    @property
    def is_diffuse(self) -> bool:
        """True when the material always scatters around the normal."""
        return self.reflection_factor is None

    def __repr__(self) -> str:
        r, g, b = (float(c) for c in self.color)
        return (
            f"Material(color=({r}, {g}, {b}), diffusion_factor={self.diffusion_factor}, "
            f"reflection_factor={self.reflection_factor}, "
            f"refraction_index={self.refraction_index})"
        )


def diffuse(r: float, g: float, b: float) -> Material:
    """Create a diffuse (Lambertian-like) material with the given albedo."""
    return Material(color=vec3(r, g, b), diffusion_factor=1.0, reflection_factor=None)


def metal(r: float, g: float, b: float, fuzziness: float = 0.0) -> Material:
    """Create a reflective metal.

    Args:
        r: Red reflectance.
        g: Green reflectance.
        b: Blue reflectance.
        fuzziness: Perturbation of the mirror direction in [0, 1].
            0 = perfect mirror, 1 = maximum fuzz.
    """
    return Material(color=vec3(r, g, b), diffusion_factor=fuzziness, reflection_factor=1.0)


def dielectric(refraction_index: float) -> Material:
    """Create a clear dielectric (glass, water) material.

    Common values: water 1.33, glass 1.5, diamond 2.4.
    """
    return colored_dielectric(1.0, 1.0, 1.0, refraction_index)


def colored_dielectric(r: float, g: float, b: float, refraction_index: float) -> Material:
    """Create a tinted dielectric material."""
    return Material(
        color=vec3(r, g, b),
        diffusion_factor=0.0,
        reflection_factor=-1.0,
        refraction_index=refraction_index,
    )
