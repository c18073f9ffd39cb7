"""Unit sphere primitive.

The sphere is centered at the object-space origin with radius 1; position and
size come from its transform.

The ray-sphere intersection solves:
    |origin + t * direction|^2 = 1

which expands to the quadratic:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, origin - center)  (half of traditional b)
    c = dot(origin - center, origin - center) - 1

Example:
    >>> s = Sphere()
    >>> [i.t for i in s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))]
    [4.0, 6.0]
"""

from __future__ import annotations

from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector, dot
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape, solve_quadratic
from src.whitted.scene.intersection import Intersection

ORIGIN = Point(0.0, 0.0, 0.0)


class Sphere(Shape):
    """A unit sphere at the origin of its object space."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect with the unit sphere.

        Returns:
            Two intersections (equal for a tangent ray), or none for a miss.
            Hits behind the origin are included; hit selection is done later.
        """
        sphere_to_ray = ray.origin - ORIGIN
        a = dot(ray.direction, ray.direction)
        h = dot(ray.direction, sphere_to_ray)
        c = dot(sphere_to_ray, sphere_to_ray) - 1.0

        roots = solve_quadratic(a, h, c)
        if roots is None:
            return []
        t0, t1 = roots
        return [Intersection(t0, self), Intersection(t1, self)]

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        return point - ORIGIN

    def bounds(self) -> BoundingBox:
        return BoundingBox(Point(-1.0, -1.0, -1.0), Point(1.0, 1.0, 1.0))
