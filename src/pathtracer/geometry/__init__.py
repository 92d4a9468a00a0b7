"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with signed radius, hit records and
        ray-sphere intersection

There is no acceleration structure; scenes are small and tested linearly
(see scene.intersection).
"""

from .sphere import Face, HitRecord, Sphere, hit_sphere, make_hit_record, make_sphere

__all__ = [
    "Face",
    "HitRecord",
    "Sphere",
    "hit_sphere",
    "make_hit_record",
    "make_sphere",
]
