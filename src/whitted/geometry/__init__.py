"""Geometry module for shape primitives and composites.

This module provides every intersectable shape:

Components:
    shape: Shape base class (transforms, normals, bounds contract)
    bounds: Axis-aligned bounding boxes and the shared slab test
    sphere, plane, cube: Canonical unit primitives
    cylinder, cone: Quadrics with optional truncation and caps
    triangle: Flat and smooth (normal-interpolated) triangles
    group: Ordered collections with transform push-down and subdivision
    csg: Union, intersection and difference of two shapes

Ray-object intersection follows the pattern:
    world ray -> shape.inverse -> local_intersect() -> list of Intersection
"""

from .bounds import BoundingBox, slab_intersection
from .cone import Cone
from .csg import CSG, CsgOperation, intersection_allowed
from .cube import Cube
from .cylinder import Cylinder
from .group import Group
from .plane import Plane
from .shape import Shape, solve_quadratic
from .sphere import Sphere
from .triangle import SmoothTriangle, Triangle

__all__ = [
    # Base
    "Shape",
    "solve_quadratic",
    "BoundingBox",
    "slab_intersection",
    # Primitives
    "Sphere",
    "Plane",
    "Cube",
    "Cylinder",
    "Cone",
    "Triangle",
    "SmoothTriangle",
    # Composites
    "Group",
    "CSG",
    "CsgOperation",
    "intersection_allowed",
]
