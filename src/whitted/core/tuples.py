"""Homogeneous points and vectors.

Points (w=1) and vectors (w=0) are separate classes so that operations that
make no geometric sense are rejected instead of silently producing a tuple
with a nonsensical w component:

    Point + Vector -> Point        Point - Point -> Vector
    Point - Vector -> Point        Vector +/- Vector -> Vector
    Vector * scalar -> Vector      Point + Point -> TypeError

Equality is tolerant up to EPSILON per component because transform chains
accumulate rounding error.

Example:
    >>> p = Point(1.0, 2.0, 3.0)
    >>> v = Vector(0.0, 0.0, 1.0)
    >>> p + v
    Point(1.0, 2.0, 4.0)
    >>> normalize(Vector(4.0, 0.0, 0.0))
    Vector(1.0, 0.0, 0.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np
import numpy.typing as npt

from src.whitted.core.constants import approx_equal


class _Tuple:
    """Common storage for points and vectors."""

    __slots__ = ("x", "y", "z")

    w = 0.0

    def __init__(self, x: float, y: float, z: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z, self.w)[index]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            approx_equal(self.x, other.x)
            and approx_equal(self.y, other.y)
            and approx_equal(self.z, other.z)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x!r}, {self.y!r}, {self.z!r})"

    def as_array(self) -> npt.NDArray[np.float64]:
        """Return the homogeneous 4-component numpy array (x, y, z, w)."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)


class Point(_Tuple):
    """A position in space (w=1)."""

    __slots__ = ()

    w = 1.0

    def __add__(self, other: object) -> Point:
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object) -> Point | Vector:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented


class Vector(_Tuple):
    """A direction with magnitude (w=0)."""

    __slots__ = ()

    w = 0.0

    def __add__(self, other: object) -> Point | Vector:
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Point):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: object) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: object) -> Vector:
        if isinstance(scalar, (int, float)):
            return Vector(self.x * scalar, self.y * scalar, self.z * scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar: object) -> Vector:
        if isinstance(scalar, (int, float)):
            return Vector(self.x / scalar, self.y / scalar, self.z / scalar)
        return NotImplemented


def dot(a: Vector, b: Vector) -> float:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector, b: Vector) -> Vector:
    """Compute the cross product a x b."""
    return Vector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def magnitude(v: Vector) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def normalize(v: Vector) -> Vector:
    """Scale a vector to unit length.

    Raises:
        ValueError: If the vector has zero length. A zero normal or direction
            means the scene is malformed, so the caller has to guard.
    """
    length = magnitude(v)
    if length == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return Vector(v.x / length, v.y / length, v.z / length)


def reflect(incoming: Vector, normal: Vector) -> Vector:
    """Reflect an incoming direction about a unit normal."""
    return incoming - normal * (2.0 * dot(incoming, normal))
