"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: seeded random
generators, a small scene and camera, and a scripted generator that forces
the stochastic branches of the scattering code.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import pytest


class ScriptedRng:
    """Stand-in for numpy.random.Generator with scripted random() draws.

    random() returns the given values in order. uniform() is delegated to a
    seeded generator so that fuzz and lens sampling still work.
    """

    def __init__(self, values: Iterable[float], seed: int = 0) -> None:
        self._values = list(values)
        self._fallback = np.random.default_rng(seed)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self._values):
            raise AssertionError(f"Unexpected random() call #{self.calls + 1}")
        value = self._values[self.calls]
        self.calls += 1
        return value

    def uniform(self, low, high, size=None):
        return self._fallback.uniform(low, high, size)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRng instances."""
    return ScriptedRng


@pytest.fixture
def small_scene():
    """Ground plus one diffuse sphere in front of the camera."""
    from pathtracer.core.ray import vec3
    from pathtracer.materials import diffuse
    from pathtracer.scene.intersection import SceneBuilder

    builder = SceneBuilder()
    builder.add_sphere(vec3(0.0, -100.5, -1.0), 100.0, diffuse(0.8, 0.8, 0.0))
    builder.add_sphere(vec3(0.0, 0.0, -1.0), 0.5, diffuse(0.1, 0.2, 0.5))
    return builder.build()


@pytest.fixture
def pinhole_camera():
    """Pinhole camera at the origin looking down -z with a 90 degree FOV."""
    from pathtracer.camera.thin_lens import ThinLensCamera, setup_camera

    return setup_camera(
        ThinLensCamera(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 0.0, -1.0),
            vup=(0.0, 1.0, 0.0),
            vfov=90.0,
            aspect_ratio=2.0,
            aperture=0.0,
        )
    )
