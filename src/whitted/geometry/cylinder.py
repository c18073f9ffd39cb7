"""Cylinder primitive: radius 1 around the y axis, optionally truncated and capped.

Example:
    >>> cyl = Cylinder(minimum=1.0, maximum=2.0, closed=True)
    >>> len(cyl.intersect(Ray(Point(0, 3, 0), Vector(0, -1, 0))))
    2
"""

from __future__ import annotations

import math

from src.whitted.core.constants import EPSILON
from src.whitted.core.matrix import Matrix
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape, solve_quadratic
from src.whitted.materials.material import Material
from src.whitted.scene.intersection import Intersection


class Cylinder(Shape):
    """An infinite or truncated cylinder of radius 1 around the y axis.

    Attributes:
        minimum: Lower y bound (exclusive for the side surface).
        maximum: Upper y bound (exclusive for the side surface).
        closed: Whether the truncated ends are capped.
    """

    def __init__(
        self,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        super().__init__(transform=transform, material=material)
        self.minimum = minimum
        self.maximum = maximum
        self.closed = closed

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        xs = self._intersect_sides(ray)
        if len(xs) < 2:
            xs.extend(self._intersect_caps(ray))
        return xs

    def _intersect_sides(self, ray: Ray) -> list[Intersection]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x + d.z * d.z
        if abs(a) < EPSILON:
            # Parallel to the axis; only the caps can be hit
            return []

        h = o.x * d.x + o.z * d.z
        c = o.x * o.x + o.z * o.z - 1.0
        roots = solve_quadratic(a, h, c)
        if roots is None:
            return []

        xs = []
        for t in roots:
            y = o.y + t * d.y
            if self.minimum < y < self.maximum:
                xs.append(Intersection(t, self))
        return xs

    def _intersect_caps(self, ray: Ray) -> list[Intersection]:
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return []

        xs = []
        for cap in (self.minimum, self.maximum):
            t = (cap - ray.origin.y) / ray.direction.y
            if _within_radius(ray, t, 1.0):
                xs.append(Intersection(t, self))
        return xs

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        distance = point.x * point.x + point.z * point.z
        if distance < 1.0 and point.y >= self.maximum - EPSILON:
            return Vector(0.0, 1.0, 0.0)
        if distance < 1.0 and point.y <= self.minimum + EPSILON:
            return Vector(0.0, -1.0, 0.0)
        return Vector(point.x, 0.0, point.z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(Point(-1.0, self.minimum, -1.0), Point(1.0, self.maximum, 1.0))


def _within_radius(ray: Ray, t: float, radius: float) -> bool:
    """Check whether the ray at t lies within radius of the y axis."""
    x = ray.origin.x + t * ray.direction.x
    z = ray.origin.z + t * ray.direction.z
    return x * x + z * z <= radius * radius
