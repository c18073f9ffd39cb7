"""Axis-aligned bounding boxes.

Every shape reports a box in its own object space; composites union the
parent-space boxes of their children. A ray that misses a composite's box
skips the whole subtree.

Boxes may be unbounded (planes, open cylinders and cones), so infinite
extents are handled throughout: transforming an infinite corner drops the
``0 * inf`` terms instead of letting them turn into NaN.

Example:
    >>> box = BoundingBox(Point(-1, -1, -1), Point(1, 1, 1))
    >>> box.intersects(Ray(Point(5, 0.5, 0), Vector(-1, 0, 0)))
    True
    >>> left, right = BoundingBox(Point(-1, -4, -5), Point(9, 6, 5)).split()
    >>> left.maximum
    Point(4.0, 6.0, 5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from src.whitted.core.constants import EPSILON
from src.whitted.core.matrix import Matrix
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point

INF = math.inf


def slab_intersection(
    ray: Ray, minimum: Point, maximum: Point
) -> tuple[float, float] | None:
    """Intersect a ray with the box [minimum, maximum] one axis at a time.

    An axis whose direction component is within EPSILON of zero is treated
    as parallel to the slab: the ray is inside it for all t when its origin
    lies between the two planes, and never otherwise.

    Args:
        ray: The ray, in the same space as the box.
        minimum: The corner with the smallest coordinates.
        maximum: The corner with the largest coordinates.

    Returns:
        (t_min, t_max) for the entry and exit distances, or None when the
        per-axis intervals do not overlap or the box lies entirely behind
        the ray. t_min may be negative when the origin is inside the box.
    """
    t_min = -INF
    t_max = INF
    for origin, direction, low, high in zip(ray.origin, ray.direction, minimum, maximum):
        if abs(direction) < EPSILON:
            if origin < low or origin > high:
                return None
            continue
        t0 = (low - origin) / direction
        t1 = (high - origin) / direction
        if t0 > t1:
            t0, t1 = t1, t0
        t_min = max(t_min, t0)
        t_max = min(t_max, t1)

    if t_max >= max(0.0, t_min):
        return t_min, t_max
    return None


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box given by its two extreme corners.

    Attributes:
        minimum: Corner with the smallest x, y and z.
        maximum: Corner with the largest x, y and z.
    """

    minimum: Point
    maximum: Point

    @classmethod
    def empty(cls) -> BoundingBox:
        """A box containing nothing; adding anything to it yields that thing."""
        return cls(Point(INF, INF, INF), Point(-INF, -INF, -INF))

    @property
    def is_empty(self) -> bool:
        return any(low > high for low, high in zip(self.minimum, self.maximum))

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (*self.minimum, *self.maximum))

    def add_point(self, point: Point) -> BoundingBox:
        """Return the smallest box containing this box and the point."""
        return BoundingBox(
            Point(
                min(self.minimum.x, point.x),
                min(self.minimum.y, point.y),
                min(self.minimum.z, point.z),
            ),
            Point(
                max(self.maximum.x, point.x),
                max(self.maximum.y, point.y),
                max(self.maximum.z, point.z),
            ),
        )

    def merge(self, other: BoundingBox) -> BoundingBox:
        """Return the smallest box containing both boxes."""
        if other.is_empty:
            return self
        return self.add_point(other.minimum).add_point(other.maximum)

    def contains_point(self, point: Point) -> bool:
        """Check whether a point lies inside the box, boundary included."""
        return all(
            low <= c <= high for c, low, high in zip(point, self.minimum, self.maximum)
        )

    def contains_box(self, other: BoundingBox) -> bool:
        """Check whether another box lies entirely inside this one."""
        return self.contains_point(other.minimum) and self.contains_point(other.maximum)

    def transform(self, matrix: Matrix) -> BoundingBox:
        """Bound the box after transforming it.

        All eight corners are transformed and re-bounded, so the result is
        axis-aligned again and generally larger than the exact image.
        """
        if self.is_empty:
            return self

        low, high = self.minimum, self.maximum
        corners = np.array(
            [
                [x, y, z, 1.0]
                for x in (low.x, high.x)
                for y in (low.y, high.y)
                for z in (low.z, high.z)
            ]
        )
        data = matrix.data
        with np.errstate(invalid="ignore"):
            # terms[k, i, j] = data[i, j] * corner_k[j]
            terms = data[np.newaxis, :, :] * corners[:, np.newaxis, :]
            terms[:, data == 0.0] = 0.0
            transformed = terms.sum(axis=2)[:, :3]

        # Opposite infinities cancel to NaN; another corner always carries
        # the extreme value for that axis, so NaNs can simply be ignored
        new_min = np.nanmin(transformed, axis=0)
        new_max = np.nanmax(transformed, axis=0)
        return BoundingBox(Point(*new_min), Point(*new_max))

    def split(self) -> tuple[BoundingBox, BoundingBox]:
        """Halve the box along its largest dimension.

        Returns:
            (left, right) halves sharing the dividing plane. An unbounded box
            cannot be halved and is returned as both halves.
        """
        if not self.is_finite:
            return self, self

        low, high = self.minimum, self.maximum
        dx = high.x - low.x
        dy = high.y - low.y
        dz = high.z - low.z
        greatest = max(dx, dy, dz)

        x0, y0, z0 = low
        x1, y1, z1 = high
        if greatest == dx:
            x0 = x1 = x0 + dx / 2.0
        elif greatest == dy:
            y0 = y1 = y0 + dy / 2.0
        else:
            z0 = z1 = z0 + dz / 2.0

        left = BoundingBox(low, Point(x1, y1, z1))
        right = BoundingBox(Point(x0, y0, z0), high)
        return left, right

    def intersects(self, ray: Ray) -> bool:
        """Check whether a ray passes through the box in front of its origin."""
        if self.is_empty:
            return False
        return slab_intersection(ray, self.minimum, self.maximum) is not None
