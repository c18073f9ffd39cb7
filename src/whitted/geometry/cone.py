"""Double-napped cone primitive around the y axis, apex at the origin.

The radius at height y is |y|, so a cone truncated to [-1, 0] is a single
nappe with a unit-radius base at y = -1.
"""

from __future__ import annotations

import math

from src.whitted.core.constants import EPSILON
from src.whitted.core.matrix import Matrix
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.cylinder import _within_radius
from src.whitted.geometry.shape import Shape, solve_quadratic
from src.whitted.materials.material import Material
from src.whitted.scene.intersection import Intersection


class Cone(Shape):
    """An infinite or truncated double cone.

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
        # Both nappes plus both caps can be crossed, so caps are always tested
        return self._intersect_sides(ray) + self._intersect_caps(ray)

    def _intersect_sides(self, ray: Ray) -> list[Intersection]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x - d.y * d.y + d.z * d.z
        b = 2.0 * (o.x * d.x - o.y * d.y + o.z * d.z)
        c = o.x * o.x - o.y * o.y + o.z * o.z

        if abs(a) < EPSILON:
            if abs(b) < EPSILON:
                return []
            # Parallel to one of the nappes: a single hit on the other
            candidates: tuple[float, ...] = (-c / (2.0 * b),)
        else:
            roots = solve_quadratic(a, b / 2.0, c)
            if roots is None:
                return []
            candidates = roots

        xs = []
        for t in candidates:
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
            if _within_radius(ray, t, abs(cap)):
                xs.append(Intersection(t, self))
        return xs

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        distance = point.x * point.x + point.z * point.z
        if distance < self.maximum * self.maximum and point.y >= self.maximum - EPSILON:
            return Vector(0.0, 1.0, 0.0)
        if distance < self.minimum * self.minimum and point.y <= self.minimum + EPSILON:
            return Vector(0.0, -1.0, 0.0)

        y = math.sqrt(distance)
        if point.y > 0.0:
            y = -y
        return Vector(point.x, y, point.z)

    def bounds(self) -> BoundingBox:
        limit = max(abs(self.minimum), abs(self.maximum))
        return BoundingBox(
            Point(-limit, self.minimum, -limit), Point(limit, self.maximum, limit)
        )
