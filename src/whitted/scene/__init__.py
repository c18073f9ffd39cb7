"""Scene module for lights, intersections and the world.

This module resolves rays against a populated scene:

Components:
    intersection: Intersection records, hit selection and shading inputs
    light: Point light sources
    world: Root group plus lights; the recursive color_at pipeline
    mesh: Wavefront OBJ ingestion into triangle groups
    showcase: A ready-made demonstration scene and camera

The world is built once and then treated as frozen: tracing a ray is a pure
function of the world, the ray and the remaining recursion depth.
"""

from .intersection import (
    Computations,
    Intersection,
    hit,
    prepare_computations,
    schlick,
    sort_intersections,
)
from .light import PointLight

# world, mesh and showcase import geometry, which imports intersection from
# here; import them directly, e.g. from src.whitted.scene.world import World

__all__ = [
    "Intersection",
    "Computations",
    "hit",
    "prepare_computations",
    "schlick",
    "sort_intersections",
    "PointLight",
]
