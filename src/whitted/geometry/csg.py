"""Constructive solid geometry: union, intersection and difference of two shapes.

A CSG node intersects the ray with both children, merges the hits in order of
t and keeps only the hits that lie on the surface of the combined solid. The
decision for each hit depends on which child was hit and whether the ray is
currently inside the other child:

    operation      keep the hit when
    UNION          (left_hit and not in_right) or (not left_hit and not in_left)
    INTERSECTION   (left_hit and in_right) or (not left_hit and in_left)
    DIFFERENCE     (left_hit and not in_right) or (not left_hit and in_left)

Like a Group, a CSG node pushes its transform into its two children, so the
node never transforms rays itself.

Example:
    >>> lens = CSG(CsgOperation.INTERSECTION, Sphere(), Sphere(transform=translation(0, 0, 0.5)))
    >>> [i.t for i in lens.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))]
    [4.5, 6.0]
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from src.whitted.core.matrix import Matrix
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape
from src.whitted.materials.material import Material
from src.whitted.scene.intersection import Intersection, sort_intersections


class CsgOperation(Enum):
    """Set operation combining the two children of a CSG node."""

    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"


def intersection_allowed(
    operation: CsgOperation, left_hit: bool, in_left: bool, in_right: bool
) -> bool:
    """Decide whether a child's hit is on the surface of the combined solid.

    Args:
        operation: The CSG operation.
        left_hit: True if the left child was hit, False for the right child.
        in_left: True if the ray is currently inside the left child.
        in_right: True if the ray is currently inside the right child.
    """
    if operation is CsgOperation.UNION:
        return (left_hit and not in_right) or (not left_hit and not in_left)
    if operation is CsgOperation.INTERSECTION:
        return (left_hit and in_right) or (not left_hit and in_left)
    if operation is CsgOperation.DIFFERENCE:
        return (left_hit and not in_right) or (not left_hit and in_left)
    raise ValueError(f"Unknown CSG operation: {operation}")


class CSG(Shape):
    """A set-algebraic combination of exactly two shapes.

    Attributes:
        operation: How the children are combined.
        left: First operand (the minuend for DIFFERENCE).
        right: Second operand.
    """

    def __init__(
        self,
        operation: CsgOperation,
        left: Shape,
        right: Shape,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        for child in (left, right):
            if child.parent is not None:
                raise ValueError(f"{child!r} already belongs to {child.parent!r}")
        if left is right:
            raise ValueError("CSG operands must be two distinct shapes")

        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(transform=transform)
        left._set_parent(self)
        right._set_parent(self)
        self._material = None
        if material is not None:
            self.material = material

    def _push_transform(self, new_transform: Matrix) -> None:
        change = new_transform @ self._inverse
        self.left.transform = change @ self.left.transform
        self.right.transform = change @ self.right.transform

    @property
    def material(self) -> Material | None:
        return self._material

    @material.setter
    def material(self, value: Material) -> None:
        self._material = value
        self.left.material = value
        self.right.material = value

    def filter_intersections(self, xs: Sequence[Intersection]) -> list[Intersection]:
        """Keep the hits that lie on the combined surface.

        Args:
            xs: Hits against both children, sorted by t.
        """
        in_left = False
        in_right = False
        kept: list[Intersection] = []
        for i in xs:
            left_hit = self.left.includes(i.shape)
            if intersection_allowed(self.operation, left_hit, in_left, in_right):
                kept.append(i)
            # Every hit toggles its side, kept or not
            if left_hit:
                in_left = not in_left
            else:
                in_right = not in_right
        return kept

    def intersect(self, ray: Ray) -> list[Intersection]:
        return self.local_intersect(ray)

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        if not self.bounds().intersects(ray):
            return []
        xs = sort_intersections(self.left.intersect(ray) + self.right.intersect(ray))
        return self.filter_intersections(xs)

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        raise TypeError("CSG nodes have no surface; normals come from their children")

    def bounds(self) -> BoundingBox:
        """Union of both children's boxes (conservative for every operation)."""
        return self.left.parent_space_bounds().merge(self.right.parent_space_bounds())

    def parent_space_bounds(self) -> BoundingBox:
        return self.bounds()

    def includes(self, other: Shape) -> bool:
        return self is other or self.left.includes(other) or self.right.includes(other)

    def divide(self, threshold: int) -> None:
        self.left.divide(threshold)
        self.right.divide(threshold)
