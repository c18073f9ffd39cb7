"""Infinite xz plane primitive."""

from __future__ import annotations

import math

from src.whitted.core.constants import EPSILON
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape
from src.whitted.scene.intersection import Intersection

UP = Vector(0.0, 1.0, 0.0)


class Plane(Shape):
    """The plane y = 0 in object space, extending infinitely in x and z."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        # Parallel and coplanar rays miss
        if abs(ray.direction.y) < EPSILON:
            return []
        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        return UP

    def bounds(self) -> BoundingBox:
        return BoundingBox(Point(-math.inf, 0.0, -math.inf), Point(math.inf, 0.0, math.inf))
