"""Sphere primitive with analytic ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

which expands to the quadratic a*t^2 + 2*h*t + c = 0 with
    a = dot(direction, direction)
    h = dot(direction, oc)  (half of the traditional b)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The smaller root is always tried first so the closest surface wins.

The sphere radius is signed. The outward normal is computed as
(point - center) / radius, so a negative radius flips the normal and turns
the sphere into the inner wall of a hollow shell. Placing a negative-radius
glass sphere inside a positive one models a thin glass bubble.

Example:
    >>> from pathtracer.materials import diffuse
    >>> sphere = Sphere(center=vec3(0, 0, -1), radius=0.5, material=diffuse(0.5, 0.5, 0.5))
    >>> record = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), sphere, 0.001, math.inf)
    >>> record.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray, Vec3, as_vec3, dot, length_squared, ray_at, vec3

if TYPE_CHECKING:
    from pathtracer.materials.material import Material

__all__ = ["Face", "HitRecord", "Sphere", "hit_sphere", "make_hit_record", "make_sphere"]


class Face(Enum):
    """Which side of the surface the ray arrived from."""

    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point, signed radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The signed radius. Negative values flip the reported normal.
        material: The material shared by every hit on this sphere.
    """

    center: Vec3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if self.radius == 0.0:
            raise ValueError("Sphere radius must be non-zero")
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "radius", float(self.radius))


@dataclass(frozen=True, eq=False)
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the surface.
        normal: The surface normal at the intersection point. Always points
            against the incoming ray (toward the side the ray came from).
        face: FRONT if the ray opposed the outward normal, BACK otherwise.
        material: The material of the surface that was hit.
    """

    t: float
    point: Vec3
    normal: Vec3
    face: Face
    material: Material

    @property
    def outward_normal(self) -> Vec3:
        """The geometric normal before orientation against the ray.

        For spheres this is (point - center) / radius, so it points inward
        on a negative-radius sphere.
        """
        return self.normal if self.face is Face.FRONT else -self.normal


def make_hit_record(
    ray: Ray,
    t: float,
    point: Vec3,
    outward_normal: Vec3,
    material: Material,
) -> HitRecord:
    """Build a hit record with the normal oriented against the ray.

    Front face means the ray direction and the outward normal point in
    opposite directions (dot < 0); the normal is stored as given. Otherwise
    the ray hit the back face and the normal is negated.
    """
    if dot(ray.direction, outward_normal) < 0.0:
        return HitRecord(t, as_vec3(point), as_vec3(outward_normal), Face.FRONT, material)
    return HitRecord(t, as_vec3(point), as_vec3(-outward_normal), Face.BACK, material)


def hit_sphere(ray: Ray, sphere: Sphere, t_min: float, t_max: float) -> HitRecord | None:
    """Test for ray-sphere intersection.

    Args:
        ray: The ray to test. The direction need not be normalized.
        sphere: The sphere to test intersection against.
        t_min: Exclusive lower bound on accepted t (avoids self-intersection).
        t_max: Exclusive upper bound on accepted t.

    Returns:
        A HitRecord for the closest root in (t_min, t_max), or None.
    """
    oc = ray.origin - sphere.center
    a = length_squared(ray.direction)
    h = dot(oc, ray.direction)
    c = length_squared(oc) - sphere.radius * sphere.radius

    discriminant = h * h - a * c
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    for root in ((-h - sqrt_d) / a, (-h + sqrt_d) / a):
        if t_min < root < t_max:
            point = ray_at(ray, root)
            # Division by the signed radius, not a normalize()
            outward_normal = (point - sphere.center) / sphere.radius
            return make_hit_record(ray, root, point, outward_normal, sphere.material)
    return None


def make_sphere(x: float, y: float, z: float, radius: float, material: Material) -> Sphere:
    """Create a sphere from center coordinates, radius and material."""
    return Sphere(center=vec3(x, y, z), radius=radius, material=material)
