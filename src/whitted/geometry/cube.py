"""Axis-aligned cube primitive spanning -1..1 on every axis."""

from __future__ import annotations

from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox, slab_intersection
from src.whitted.geometry.shape import Shape
from src.whitted.scene.intersection import Intersection

CUBE_MIN = Point(-1.0, -1.0, -1.0)
CUBE_MAX = Point(1.0, 1.0, 1.0)


class Cube(Shape):
    """A cube with faces at +/-1 in object space."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect using the slab test shared with bounding boxes.

        Returns:
            The entry and exit intersections, or none when the per-axis
            intervals do not overlap or the cube is entirely behind the ray.
        """
        interval = slab_intersection(ray, CUBE_MIN, CUBE_MAX)
        if interval is None:
            return []
        t_min, t_max = interval
        return [Intersection(t_min, self), Intersection(t_max, self)]

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        # The face is the axis with the largest absolute component
        ax, ay, az = abs(point.x), abs(point.y), abs(point.z)
        largest = max(ax, ay, az)
        if largest == ax:
            return Vector(point.x, 0.0, 0.0)
        if largest == ay:
            return Vector(0.0, point.y, 0.0)
        return Vector(0.0, 0.0, point.z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(CUBE_MIN, CUBE_MAX)
