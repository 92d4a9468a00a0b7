"""Unit tests for the scene container and scene-level intersection.

Tests cover:
- SceneBuilder indices, counts and freezing
- Closest hit selection among several spheres
- Empty scene and miss handling
- Interval bounds forwarded to the sphere tests
"""

import math

import numpy as np
import pytest


class TestSceneBuilder:
    """Tests for building scenes."""

    def test_add_sphere_returns_indices(self):
        """Test spheres get consecutive indices in insertion order."""
        from pathtracer.core.ray import vec3
        from pathtracer.materials import diffuse
        from pathtracer.scene.intersection import SceneBuilder

        builder = SceneBuilder()
        assert builder.add_sphere(vec3(0.0, 0.0, -1.0), 0.5, diffuse(0.5, 0.5, 0.5)) == 0
        assert builder.add_sphere(vec3(1.0, 0.0, -1.0), 0.5, diffuse(0.5, 0.5, 0.5)) == 1
        assert builder.get_sphere_count() == 2

    def test_build_freezes_scene(self):
        """Test the built scene is a tuple-backed snapshot."""
        from pathtracer.core.ray import vec3
        from pathtracer.materials import diffuse
        from pathtracer.scene.intersection import SceneBuilder

        builder = SceneBuilder()
        builder.add_sphere(vec3(0.0, 0.0, -1.0), 0.5, diffuse(0.5, 0.5, 0.5))
        scene = builder.build()

        assert len(scene) == 1
        assert isinstance(scene.spheres, tuple)
        assert [s.radius for s in scene] == [0.5]

    def test_add_after_build_raises(self):
        """Test the builder refuses spheres once the scene is built."""
        from pathtracer.core.ray import vec3
        from pathtracer.materials import diffuse
        from pathtracer.scene.intersection import SceneBuilder

        builder = SceneBuilder()
        builder.build()
        with pytest.raises(RuntimeError):
            builder.add_sphere(vec3(0.0, 0.0, -1.0), 0.5, diffuse(0.5, 0.5, 0.5))

    def test_materials_can_be_shared(self):
        """Test one material instance may back several spheres."""
        from pathtracer.core.ray import vec3
        from pathtracer.materials import dielectric
        from pathtracer.scene.intersection import SceneBuilder

        glass = dielectric(1.5)
        builder = SceneBuilder()
        builder.add_sphere(vec3(0.0, 0.0, -1.0), 0.5, glass)
        builder.add_sphere(vec3(0.0, 0.0, -1.0), -0.45, glass)
        scene = builder.build()
        assert scene.spheres[0].material is scene.spheres[1].material


class TestIntersectScene:
    """Tests for closest-hit queries."""

    def test_empty_scene_misses(self):
        """Test a ray misses everything in an empty scene."""
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.scene.intersection import T_MAX, T_MIN, Scene, intersect_scene

        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
        assert intersect_scene(Scene(), ray, T_MIN, T_MAX) is None

    def test_closest_sphere_wins(self):
        """Test the nearest sphere is reported regardless of insertion order."""
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.materials import diffuse
        from pathtracer.scene.intersection import T_MAX, T_MIN, SceneBuilder, intersect_scene

        far = diffuse(1.0, 0.0, 0.0)
        near = diffuse(0.0, 1.0, 0.0)
        builder = SceneBuilder()
        builder.add_sphere(vec3(0.0, 0.0, -10.0), 1.0, far)
        builder.add_sphere(vec3(0.0, 0.0, -3.0), 1.0, near)
        builder.add_sphere(vec3(0.0, 0.0, -20.0), 1.0, far)
        scene = builder.build()

        record = intersect_scene(scene, Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0)), T_MIN, T_MAX)
        assert record is not None
        assert abs(record.t - 2.0) < 1e-9
        assert record.material is near

    def test_t_max_excludes_far_spheres(self):
        """Test hits beyond t_max are ignored."""
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.materials import diffuse
        from pathtracer.scene.intersection import T_MIN, SceneBuilder, intersect_scene

        builder = SceneBuilder()
        builder.add_sphere(vec3(0.0, 0.0, -10.0), 1.0, diffuse(0.5, 0.5, 0.5))
        scene = builder.build()

        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
        assert intersect_scene(scene, ray, T_MIN, 5.0) is None

    def test_self_intersection_avoided(self):
        """Test a ray starting on a surface does not re-hit it at t = 0."""
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.materials import diffuse
        from pathtracer.scene.intersection import T_MAX, T_MIN, SceneBuilder, intersect_scene

        builder = SceneBuilder()
        builder.add_sphere(vec3(0.0, 0.0, -1.0), 0.5, diffuse(0.5, 0.5, 0.5))
        scene = builder.build()

        # Leaves the front of the sphere toward the camera
        ray = Ray(vec3(0.0, 0.0, -0.5), vec3(0.0, 0.0, 1.0))
        assert intersect_scene(scene, ray, T_MIN, T_MAX) is None

    def test_nested_bubble_hits_outer_then_inner(self):
        """Test the outer wall of a glass bubble is hit before the inner one."""
        from pathtracer.core.ray import Ray, vec3
        from pathtracer.geometry.sphere import Face
        from pathtracer.materials import dielectric
        from pathtracer.scene.intersection import T_MAX, T_MIN, SceneBuilder, intersect_scene

        glass = dielectric(1.5)
        builder = SceneBuilder()
        builder.add_sphere(vec3(0.0, 0.0, -2.0), -0.45, glass)
        builder.add_sphere(vec3(0.0, 0.0, -2.0), 0.5, glass)
        scene = builder.build()

        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
        outer = intersect_scene(scene, ray, T_MIN, T_MAX)
        assert outer is not None
        assert abs(outer.t - 1.5) < 1e-9
        assert outer.face is Face.FRONT

        inner = intersect_scene(scene, Ray(outer.point, ray.direction), T_MIN, T_MAX)
        assert inner is not None
        assert abs(inner.t - 0.05) < 1e-9
        # Entering the hollow interior means leaving the glass
        assert inner.face is Face.BACK
        assert np.allclose(inner.normal, (0.0, 0.0, 1.0))
        assert not math.isnan(inner.t)
