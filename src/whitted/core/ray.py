"""Ray data structure.

A ray is a half-line: an origin point and a direction vector. Directions are
not normalized, because rays transformed into object space carry the
inverse scale in their direction and intersection distances have to stay
comparable with world space.

Example:
    >>> ray = Ray(Point(2.0, 3.0, 4.0), Vector(1.0, 0.0, 0.0))
    >>> ray.position(2.5)
    Point(4.5, 3.0, 4.0)
    >>> ray.transform(translation(3, 4, 5)).origin
    Point(5.0, 7.0, 9.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.core.matrix import Matrix
from src.whitted.core.tuples import Point, Vector


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of travel. Not required to be unit length.
    """

    origin: Point
    direction: Vector

    def __post_init__(self) -> None:
        if not isinstance(self.origin, Point):
            raise TypeError(f"Ray origin must be a Point, got {type(self.origin).__name__}")
        if not isinstance(self.direction, Vector):
            raise TypeError(
                f"Ray direction must be a Vector, got {type(self.direction).__name__}"
            )

    def position(self, t: float) -> Point:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with both origin and direction transformed."""
        return Ray(matrix * self.origin, matrix * self.direction)
