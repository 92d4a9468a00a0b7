"""Scene module for scene construction and ray-scene queries.

Components:
    intersection: Immutable Scene, SceneBuilder and closest-hit search
    demo: Hard-coded demo scenes used by the example script
"""

from .demo import SCENES, DemoSceneParams, create_demo_scene, create_glass_scene
from .intersection import T_MAX, T_MIN, Scene, SceneBuilder, intersect_scene

__all__ = [
    "Scene",
    "SceneBuilder",
    "intersect_scene",
    "T_MIN",
    "T_MAX",
    "DemoSceneParams",
    "create_demo_scene",
    "create_glass_scene",
    "SCENES",
]
