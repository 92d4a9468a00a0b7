"""Unit tests for the demo scene factories.

Tests cover:
- Sphere count, placement and materials of the demo and glass scenes
- Camera configuration
- Parameter overrides
"""

import numpy as np


class TestDemoScene:
    """Tests for create_demo_scene."""

    def test_four_spheres(self):
        """Test the demo scene has ground, center, glass and metal spheres."""
        from pathtracer.scene.demo import create_demo_scene

        scene, _ = create_demo_scene()
        assert len(scene) == 4

        ground, center, left, right = scene.spheres
        assert ground.radius == 100.0
        assert np.allclose(ground.center, (0.0, -100.5, -1.0))
        assert center.material.is_diffuse
        assert left.radius == -0.4
        assert left.material.reflection_factor == -1.0
        assert right.material.reflection_factor == 1.0

    def test_default_camera(self):
        """Test the camera looks from the upper left at the center sphere."""
        from pathtracer.camera.thin_lens import setup_camera
        from pathtracer.scene.demo import create_demo_scene

        _, config = create_demo_scene()
        assert config.lookfrom == (-2.0, 1.0, 1.5)
        assert config.lookat == (0.0, 0.0, -1.0)
        assert config.vup == (0.0, 1.0, 0.0)
        assert abs(config.aspect_ratio - 16.0 / 9.0) < 1e-12
        assert setup_camera(config).lens_radius == 0.05

    def test_params_override(self):
        """Test parameters change materials and camera."""
        from pathtracer.scene.demo import DemoSceneParams, create_demo_scene

        params = DemoSceneParams(metal_fuzziness=0.0, glass_refraction_index=1.5, aperture=0.0, aspect_ratio=1.0)
        scene, config = create_demo_scene(params)

        assert scene.spheres[3].material.diffusion_factor == 0.0
        assert scene.spheres[2].material.refraction_index == 1.5
        assert config.aperture == 0.0
        assert config.aspect_ratio == 1.0


class TestGlassScene:
    """Tests for create_glass_scene."""

    def test_bubble_shares_material(self):
        """Test the bubble is two concentric spheres of opposite sign."""
        from pathtracer.scene.demo import create_glass_scene

        scene, _ = create_glass_scene()
        assert len(scene) == 6

        outer, inner = scene.spheres[2], scene.spheres[3]
        assert np.allclose(outer.center, inner.center)
        assert outer.radius == 0.5
        assert inner.radius == -0.45
        assert outer.material is inner.material

    def test_tinted_sphere(self):
        """Test the extra sphere is tinted glass."""
        from pathtracer.scene.demo import create_glass_scene

        scene, _ = create_glass_scene()
        tinted = scene.spheres[5].material
        assert tinted.reflection_factor == -1.0
        assert np.allclose(tinted.color, (0.9, 0.6, 0.6))


class TestSceneRegistry:
    """Tests for the SCENES lookup."""

    def test_names(self):
        """Test both scenes are registered by name."""
        from pathtracer.scene.demo import SCENES, create_demo_scene, create_glass_scene

        assert SCENES == {"demo": create_demo_scene, "glass": create_glass_scene}
