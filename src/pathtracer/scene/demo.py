"""Demo scene configurations.

This module provides factory functions for the small sphere scenes used by
the example script and the integration tests.

The demo scene consists of:
- A huge diffuse sphere acting as the ground
- A diffuse sphere in the center
- A glass sphere on the left with a negative radius (its normals point
  inward, so it renders as a hollow shell)
- A fuzzy metal sphere on the right

The glass scene swaps the left sphere for a thin glass bubble (a glass
sphere with a negative-radius glass sphere inside it) and adds a tinted
glass sphere.

Example:
    >>> scene, camera_config = create_demo_scene()
    >>> camera = setup_camera(camera_config)
"""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.camera.thin_lens import ThinLensCamera
from pathtracer.core.ray import vec3
from pathtracer.materials.material import colored_dielectric, dielectric, diffuse, metal
from pathtracer.scene.intersection import Scene, SceneBuilder

DEFAULT_ASPECT_RATIO = 16.0 / 9.0


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scenes.

    Attributes:
        ground_color: RGB albedo of the ground sphere.
        center_color: RGB albedo of the center sphere.
        metal_color: RGB reflectance of the right sphere.
        metal_fuzziness: Fuzziness of the right sphere in [0, 1].
        glass_refraction_index: Index of refraction of the left sphere.
        aspect_ratio: Camera aspect ratio (image width / height).
        vfov: Vertical field of view in degrees.
        aperture: Lens diameter (0 for a pinhole camera).
        lookfrom: Camera position.
        lookat: Camera target, also the focus point.

    Example:
        >>> params = DemoSceneParams(metal_fuzziness=0.0)  # polished metal
        >>> scene, camera = create_demo_scene(params)
    """

    ground_color: tuple[float, float, float] = (0.8, 0.8, 0.0)
    center_color: tuple[float, float, float] = (0.1, 0.2, 0.5)
    metal_color: tuple[float, float, float] = (0.8, 0.6, 0.2)
    metal_fuzziness: float = 1.0
    glass_refraction_index: float = 1.2
    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    vfov: float = 40.0
    aperture: float = 0.1
    lookfrom: tuple[float, float, float] = (-2.0, 1.0, 1.5)
    lookat: tuple[float, float, float] = (0.0, 0.0, -1.0)


def _camera(params: DemoSceneParams) -> ThinLensCamera:
    return ThinLensCamera(
        lookfrom=params.lookfrom,
        lookat=params.lookat,
        vup=(0.0, 1.0, 0.0),
        vfov=params.vfov,
        aspect_ratio=params.aspect_ratio,
        aperture=params.aperture,
    )


def _add_ground_and_center(builder: SceneBuilder, params: DemoSceneParams) -> None:
    builder.add_sphere(vec3(0.0, -100.5, -1.0), 100.0, diffuse(*params.ground_color))
    builder.add_sphere(vec3(0.0, 0.0, -1.0), 0.5, diffuse(*params.center_color))


def create_demo_scene(
    params: DemoSceneParams | None = None,
) -> tuple[Scene, ThinLensCamera]:
    """Create the four-sphere demo scene.

    Args:
        params: Optional scene parameters. Defaults are used when omitted.

    Returns:
        Tuple of (scene, camera configuration).
    """
    if params is None:
        params = DemoSceneParams()

    builder = SceneBuilder()
    _add_ground_and_center(builder, params)
    builder.add_sphere(vec3(-1.0, 0.0, -1.0), -0.4, dielectric(params.glass_refraction_index))
    builder.add_sphere(
        vec3(1.0, 0.0, -1.0),
        0.5,
        metal(*params.metal_color, fuzziness=params.metal_fuzziness),
    )
    return builder.build(), _camera(params)


def create_glass_scene(
    params: DemoSceneParams | None = None,
) -> tuple[Scene, ThinLensCamera]:
    """Create the glass variant of the demo scene.

    The left sphere is a glass bubble: an outer glass sphere of radius 0.5
    and an inner one of radius -0.45 sharing the same material. A tinted
    glass sphere sits in front of the center sphere.

    Returns:
        Tuple of (scene, camera configuration).
    """
    if params is None:
        params = DemoSceneParams()

    glass = dielectric(params.glass_refraction_index)
    builder = SceneBuilder()
    _add_ground_and_center(builder, params)
    builder.add_sphere(vec3(-1.0, 0.0, -1.0), 0.5, glass)
    builder.add_sphere(vec3(-1.0, 0.0, -1.0), -0.45, glass)
    builder.add_sphere(
        vec3(1.0, 0.0, -1.0),
        0.5,
        metal(*params.metal_color, fuzziness=params.metal_fuzziness),
    )
    builder.add_sphere(
        vec3(0.3, -0.3, -0.4),
        0.2,
        colored_dielectric(0.9, 0.6, 0.6, params.glass_refraction_index),
    )
    return builder.build(), _camera(params)


SCENES = {
    "demo": create_demo_scene,
    "glass": create_glass_scene,
}
