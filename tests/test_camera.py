"""Unit tests for the thin-lens camera.

Tests cover:
- Orthonormal basis construction
- Viewport size from field of view, aspect ratio and focus distance
- Ray generation through image corners and center
- Lens sampling for depth of field
- Degenerate configurations
"""

import math

import numpy as np
import pytest


def _config(**overrides):
    from pathtracer.camera.thin_lens import ThinLensCamera

    params = {
        "lookfrom": (0.0, 0.0, 0.0),
        "lookat": (0.0, 0.0, -1.0),
        "vup": (0.0, 1.0, 0.0),
        "vfov": 90.0,
        "aspect_ratio": 2.0,
        "aperture": 0.0,
    }
    params.update(overrides)
    return ThinLensCamera(**params)


class TestCameraSetup:
    """Tests for setup_camera."""

    def test_basis_is_orthonormal(self):
        """Test u, v, w are unit length and mutually orthogonal."""
        from pathtracer.camera.thin_lens import setup_camera
        from pathtracer.core.ray import dot, length

        camera = setup_camera(_config(lookfrom=(-2.0, 1.0, 1.5), lookat=(0.0, 0.0, -1.0)))
        for vec in (camera.u, camera.v, camera.w):
            assert abs(length(vec) - 1.0) < 1e-9
        assert abs(dot(camera.u, camera.v)) < 1e-9
        assert abs(dot(camera.u, camera.w)) < 1e-9
        assert abs(dot(camera.v, camera.w)) < 1e-9

    def test_axis_aligned_basis(self):
        """Test a camera looking down -z has the canonical basis."""
        from pathtracer.camera.thin_lens import setup_camera

        camera = setup_camera(_config())
        assert np.allclose(camera.u, (1.0, 0.0, 0.0))
        assert np.allclose(camera.v, (0.0, 1.0, 0.0))
        assert np.allclose(camera.w, (0.0, 0.0, 1.0))

    def test_viewport_size(self):
        """Test a 90 degree FOV at focus distance 1 gives a 2 unit tall viewport."""
        from pathtracer.camera.thin_lens import setup_camera

        camera = setup_camera(_config())
        assert np.allclose(camera.vertical, (0.0, 2.0, 0.0))
        assert np.allclose(camera.horizontal, (4.0, 0.0, 0.0))
        assert np.allclose(camera.lower_left, (-2.0, -1.0, -1.0))

    def test_viewport_scales_with_focus_distance(self):
        """Test the viewport lies on the plane through lookat."""
        from pathtracer.camera.thin_lens import setup_camera

        camera = setup_camera(_config(lookat=(0.0, 0.0, -3.0)))
        assert np.allclose(camera.vertical, (0.0, 6.0, 0.0))
        assert abs(camera.lower_left[2] + 3.0) < 1e-9

    def test_lens_radius_is_half_aperture(self):
        """Test lens radius derives from aperture."""
        from pathtracer.camera.thin_lens import setup_camera

        assert setup_camera(_config(aperture=0.1)).lens_radius == 0.05

    def test_coincident_points_rejected(self):
        """Test lookfrom equal to lookat is rejected."""
        from pathtracer.camera.thin_lens import setup_camera

        with pytest.raises(ValueError, match="different"):
            setup_camera(_config(lookat=(0.0, 0.0, 0.0)))

    def test_parallel_up_rejected(self):
        """Test an up vector along the view direction is rejected."""
        from pathtracer.camera.thin_lens import setup_camera

        with pytest.raises(ValueError, match="parallel"):
            setup_camera(_config(vup=(0.0, 0.0, 1.0)))

    def test_camera_info(self):
        """Test get_camera_info returns plain tuples."""
        from pathtracer.camera.thin_lens import setup_camera

        info = setup_camera(_config()).get_camera_info()
        assert info["origin"] == (0.0, 0.0, 0.0)
        assert set(info) >= {"u", "v", "w", "horizontal", "vertical", "lower_left"}


class TestRayGeneration:
    """Tests for get_ray."""

    def test_center_ray(self, rng):
        """Test the center of the image looks at lookat."""
        from pathtracer.camera.thin_lens import get_ray, setup_camera
        from pathtracer.core.ray import normalize

        ray = get_ray(setup_camera(_config()), 0.5, 0.5, rng)
        assert np.allclose(ray.origin, (0.0, 0.0, 0.0))
        assert np.allclose(normalize(ray.direction), (0.0, 0.0, -1.0))

    def test_corner_rays(self, rng):
        """Test s, t = 0 is the lower-left and s, t = 1 the upper-right."""
        from pathtracer.camera.thin_lens import get_ray, setup_camera

        camera = setup_camera(_config())
        assert np.allclose(get_ray(camera, 0.0, 0.0, rng).direction, (-2.0, -1.0, -1.0))
        assert np.allclose(get_ray(camera, 1.0, 1.0, rng).direction, (2.0, 1.0, -1.0))

    def test_pinhole_origin_fixed(self, rng):
        """Test zero aperture always starts rays at the camera position."""
        from pathtracer.camera.thin_lens import get_ray, setup_camera

        camera = setup_camera(_config(lookfrom=(1.0, 2.0, 3.0), lookat=(1.0, 2.0, 0.0)))
        for _ in range(20):
            ray = get_ray(camera, rng.random(), rng.random(), rng)
            assert np.allclose(ray.origin, (1.0, 2.0, 3.0))

    def test_lens_jitters_origin_within_aperture(self, rng):
        """Test rays start on the lens disk in the u-v plane."""
        from pathtracer.camera.thin_lens import get_ray, setup_camera

        camera = setup_camera(_config(aperture=0.5))
        origins = [get_ray(camera, 0.5, 0.5, rng).origin for _ in range(100)]
        for origin in origins:
            assert math.hypot(origin[0], origin[1]) < 0.25
            assert origin[2] == 0.0
        assert len({tuple(o) for o in origins}) > 1

    def test_focus_plane_is_sharp(self, rng):
        """Test every lens sample converges on the same focus-plane point."""
        from pathtracer.camera.thin_lens import get_ray, setup_camera
        from pathtracer.core.ray import ray_at

        camera = setup_camera(_config(lookat=(0.0, 0.0, -2.0), aperture=1.0))
        for _ in range(20):
            ray = get_ray(camera, 0.25, 0.75, rng)
            # The direction ends on the focus plane at t = 1
            target = ray_at(ray, 1.0)
            assert np.allclose(target, camera.lower_left + 0.25 * camera.horizontal + 0.75 * camera.vertical)
