"""Scene container and scene-level intersection testing.

A scene is assembled with an append-only SceneBuilder and then frozen into an
immutable Scene. The frozen scene holds its spheres in a tuple and is shared
read-only by every render thread, so no locking is needed while rendering.

Intersection is a linear scan: every sphere is tested and the closest hit
wins. The search interval's upper bound shrinks to the nearest hit found so
far, so farther spheres are rejected early.

Example:
    >>> from pathtracer.materials import diffuse
    >>> builder = SceneBuilder()
    >>> builder.add_sphere(vec3(0, 0, -1), 0.5, diffuse(0.7, 0.3, 0.3))
    0
    >>> scene = builder.build()
    >>> record = intersect_scene(scene, ray, T_MIN, T_MAX)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from pathtracer.core.ray import Ray, Vec3
from pathtracer.geometry.sphere import HitRecord, Sphere, hit_sphere
from pathtracer.materials.material import Material

# Lower bound on accepted hits, keeps scattered rays from re-hitting the
# surface they start on
T_MIN = 0.001
T_MAX = math.inf


@dataclass(frozen=True)
class Scene:
    """An immutable, ordered collection of spheres.

    Attributes:
        spheres: The scene's spheres in insertion order.
    """

    spheres: tuple[Sphere, ...] = ()

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.spheres)


class SceneBuilder:
    """Append-only builder for Scene instances.

    Spheres can only be added until build() is called; the builder then
    refuses further additions so that the returned Scene stays the single
    source of truth.
    """

    def __init__(self) -> None:
        self._spheres: list[Sphere] = []
        self._built = False

    def add_sphere(self, center: Vec3, radius: float, material: Material) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere.
            radius: The signed radius (negative for hollow-shell interiors).
            material: The material shared by this sphere.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the scene has already been built.
        """
        return self.add(Sphere(center=center, radius=radius, material=material))

    def add(self, sphere: Sphere) -> int:
        """Add an already constructed sphere. See add_sphere()."""
        if self._built:
            raise RuntimeError("Scene has already been built; spheres can no longer be added")
        self._spheres.append(sphere)
        return len(self._spheres) - 1

    def get_sphere_count(self) -> int:
        """Get the number of spheres added so far."""
        return len(self._spheres)

    def build(self) -> Scene:
        """Freeze the collected spheres into an immutable Scene."""
        self._built = True
        return Scene(spheres=tuple(self._spheres))


def intersect_scene(scene: Scene, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
    """Test a ray against all spheres in the scene.

    Args:
        scene: The scene to test.
        ray: The ray to trace.
        t_min: Exclusive lower bound on accepted t.
        t_max: Exclusive upper bound on accepted t.

    Returns:
        The closest HitRecord in (t_min, t_max), or None on a miss.
    """
    closest_t = t_max
    result = None
    for sphere in scene.spheres:
        record = hit_sphere(ray, sphere, t_min, closest_t)
        if record is not None:
            closest_t = record.t
            result = record
    return result
