"""Flat and smooth triangle primitives.

Both use the Moller-Trumbore intersection test, which yields the barycentric
coordinates (u, v) of the hit as a by-product. A SmoothTriangle stores those
coordinates on its intersections and uses them to interpolate vertex normals:

    normal = n2 * u + n3 * v + n1 * (1 - u - v)

Example:
    >>> tri = Triangle(Point(0, 1, 0), Point(-1, 0, 0), Point(1, 0, 0))
    >>> tri.normal == Vector(0, 0, -1)
    True
"""

from __future__ import annotations

from src.whitted.core.constants import EPSILON
from src.whitted.core.matrix import Matrix
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector, cross, dot, normalize
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape
from src.whitted.materials.material import Material
from src.whitted.scene.intersection import Intersection


class Triangle(Shape):
    """A flat triangle given by three object-space vertices.

    Attributes:
        p1, p2, p3: The vertices.
        e1: Edge p2 - p1.
        e2: Edge p3 - p1.
        normal: Unit face normal, the same everywhere on the triangle.
    """

    def __init__(
        self,
        p1: Point,
        p2: Point,
        p3: Point,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        super().__init__(transform=transform, material=material)
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3
        self.e1 = p2 - p1
        self.e2 = p3 - p1
        self.normal = normalize(cross(self.e2, self.e1))

    def _barycentric_hit(self, ray: Ray) -> tuple[float, float, float] | None:
        """Run Moller-Trumbore and return (t, u, v), or None for a miss."""
        dir_cross_e2 = cross(ray.direction, self.e2)
        det = dot(self.e1, dir_cross_e2)
        if abs(det) < EPSILON:
            # Ray is parallel to the triangle's plane
            return None

        f = 1.0 / det
        p1_to_origin = ray.origin - self.p1
        u = f * dot(p1_to_origin, dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return None

        origin_cross_e1 = cross(p1_to_origin, self.e1)
        v = f * dot(ray.direction, origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * dot(self.e2, origin_cross_e1)
        return t, u, v

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        found = self._barycentric_hit(ray)
        if found is None:
            return []
        t, u, v = found
        return [Intersection(t, self, u, v)]

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        return self.normal

    def bounds(self) -> BoundingBox:
        return BoundingBox.empty().add_point(self.p1).add_point(self.p2).add_point(self.p3)


class SmoothTriangle(Triangle):
    """A triangle whose normal is interpolated from per-vertex normals.

    Attributes:
        n1, n2, n3: Vertex normals matching p1, p2 and p3.
    """

    def __init__(
        self,
        p1: Point,
        p2: Point,
        p3: Point,
        n1: Vector,
        n2: Vector,
        n3: Vector,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        super().__init__(p1, p2, p3, transform=transform, material=material)
        self.n1 = n1
        self.n2 = n2
        self.n3 = n3

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        """Interpolate the vertex normals with the hit's barycentric weights.

        Raises:
            ValueError: If the intersection carrying (u, v) is not supplied.
        """
        if hit is None or hit.u is None or hit.v is None:
            raise ValueError("SmoothTriangle normals need the intersection's u and v")
        u, v = hit.u, hit.v
        return self.n2 * u + self.n3 * v + self.n1 * (1.0 - u - v)
