"""Matrices and affine transformation builders.

A Matrix wraps a square numpy array. Products between matrices compose
transforms; multiplying a Point or Vector applies the transform to it (a
Vector is unaffected by translation because its w component is 0).

Transforms compose right-to-left: ``translation(...) @ scaling(...)`` scales
first, then translates. ``chain`` accepts transforms in application order for
readability when building scenes.

Example:
    >>> m = chain(rotation_x(math.pi / 2), scaling(5, 5, 5), translation(10, 5, 7))
    >>> m * Point(1, 0, 1)
    Point(15.0, 0.0, 7.0)
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from src.whitted.core.constants import EPSILON
from src.whitted.core.tuples import Point, Vector, cross, normalize

_MACHINE_EPSILON = float(np.finfo(np.float64).eps)


class Matrix:
    """A square matrix of floats with epsilon-tolerant equality.

    Attributes:
        data: The underlying (n, n) float64 numpy array. Treat it as
            read-only; every operation returns a new Matrix.
    """

    __slots__ = ("data",)

    def __init__(self, rows: npt.ArrayLike) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        self.data = data

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        """Create an identity matrix."""
        return cls(np.identity(size))

    @property
    def size(self) -> int:
        """Number of rows (and columns)."""
        return int(self.data.shape[0])

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.data[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.data.shape != other.data.shape:
            return False
        return bool(np.all(np.abs(self.data - other.data) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(str(list(row)) for row in self.data.tolist())
        return f"Matrix([{rows}])"

    def __matmul__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return Matrix(self.data @ other.data)
        return NotImplemented

    def __mul__(self, other: object) -> Matrix | Point | Vector:
        if isinstance(other, Matrix):
            return Matrix(self.data @ other.data)
        if isinstance(other, (Point, Vector)):
            if self.size != 4:
                raise ValueError("Only 4x4 matrices can transform points and vectors")
            x, y, z, _ = self.data @ other.as_array()
            # Affine transforms keep w, so the result keeps the input's type
            return type(other)(x, y, z)
        return NotImplemented

    def transpose(self) -> Matrix:
        """Return the transposed matrix."""
        return Matrix(self.data.T)

    def submatrix(self, row: int, column: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        reduced = np.delete(np.delete(self.data, row, axis=0), column, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, column: int) -> float:
        """Determinant of the submatrix at (row, column)."""
        return self.submatrix(row, column).determinant()

    def cofactor(self, row: int, column: int) -> float:
        """Signed minor at (row, column)."""
        minor = self.minor(row, column)
        return -minor if (row + column) % 2 else minor

    def determinant(self) -> float:
        """Compute the determinant."""
        if self.size == 1:
            return float(self.data[0, 0])
        if self.size == 2:
            return float(self.data[0, 0] * self.data[1, 1] - self.data[0, 1] * self.data[1, 0])
        return float(np.linalg.det(self.data))

    def is_invertible(self) -> bool:
        """Check whether the matrix can be inverted to working precision.

        Uses the condition number rather than the determinant, so uniformly
        tiny or huge scalings stay invertible. The matrix is accepted when the
        relative error of its inverse (condition number times machine
        epsilon) stays below EPSILON.
        """
        if not np.all(np.isfinite(self.data)):
            return False
        return bool(np.linalg.cond(self.data) * _MACHINE_EPSILON < EPSILON)

    def inverse(self) -> Matrix:
        """Compute the inverse matrix.

        Raises:
            ValueError: If the matrix is singular or too ill-conditioned to
                invert at double precision.
        """
        if not self.is_invertible():
            raise ValueError(f"Matrix is not invertible: {self!r}")
        return Matrix(np.linalg.inv(self.data))


# =============================================================================
# Transformation Builders
# =============================================================================


def identity() -> Matrix:
    """The 4x4 identity transform."""
    return Matrix.identity(4)


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by (x, y, z); vectors are unaffected."""
    m = np.identity(4)
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return Matrix(m)


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scale along each axis."""
    return Matrix(np.diag([x, y, z, 1.0]))


def rotation_x(radians: float) -> Matrix:
    """Rotate around the x axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    """Rotate around the y axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    """Rotate around the z axis (left-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(
    xy: float, xz: float, yx: float, yz: float, zx: float, zy: float
) -> Matrix:
    """Shear each component in proportion to the other two.

    Args:
        xy: x moved in proportion to y.
        xz: x moved in proportion to z.
        yx: y moved in proportion to x.
        yz: y moved in proportion to z.
        zx: z moved in proportion to x.
        zy: z moved in proportion to y.
    """
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def chain(*transforms: Matrix) -> Matrix:
    """Compose transforms given in the order they should be applied."""
    result = identity()
    for transform in transforms:
        result = transform @ result
    return result


def view_transform(from_point: Point, to_point: Point, up: Vector) -> Matrix:
    """Orient the world relative to an eye looking from one point to another.

    Args:
        from_point: Eye position.
        to_point: Point the eye looks at.
        up: Approximate up direction; does not need to be orthogonal.

    Returns:
        The transform that moves the world in front of the eye.
    """
    forward = normalize(to_point - from_point)
    left = cross(forward, normalize(up))
    true_up = cross(left, forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)
