"""Shape abstraction shared by every primitive and composite.

A shape owns a transform from object space to its parent's space, caches the
inverse and inverse-transpose of that transform, and carries a material. The
base class converts world-space queries into object space so subclasses only
implement the geometry of a canonical, untransformed shape:

    intersect(ray)        -> local_intersect(ray transformed by inverse)
    normal_at(point, hit) -> local_normal_at(point transformed by inverse),
                             mapped back through the inverse-transpose

Composites (Group, CSG) push their transform down into their children, so a
leaf's transform is always fully composed and no parent chain is walked while
tracing. The ``parent`` link is a weak reference kept for lookups and bounds
invalidation only.

Example:
    >>> s = Sphere(transform=scaling(2, 2, 2))
    >>> [i.t for i in s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))]
    [3.0, 7.0]
"""

from __future__ import annotations

import math
import weakref
from abc import ABC, abstractmethod

from src.whitted.core.constants import QUADRATIC_EPSILON
from src.whitted.core.matrix import Matrix, identity
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector, normalize
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.materials.material import Material
from src.whitted.scene.intersection import Intersection


def solve_quadratic(a: float, h: float, c: float) -> tuple[float, float] | None:
    """Solve a*t^2 + 2*h*t + c = 0 without catastrophic cancellation.

    Uses the half-b form and the robust formulation from Ray Tracing Gems:
    q = -(h + sign(h) * sqrt(h^2 - a*c)), t0 = q / a, t1 = c / q.

    Args:
        a: Quadratic coefficient (must be non-zero).
        h: Half of the linear coefficient.
        c: Constant term.

    Returns:
        (t0, t1) with t0 <= t1, or None when the discriminant is negative.
        A tangent ray yields two equal roots.
    """
    discriminant = h * h - a * c
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    q = -(h + math.copysign(sqrt_d, h))
    if abs(q) < QUADRATIC_EPSILON:
        # Fall back to the textbook formula when q degenerates
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


class Shape(ABC):
    """Base class for everything that can be intersected by a ray.

    Attributes:
        casts_shadow: Whether the shape occludes light for shadow rays.
    """

    def __init__(
        self,
        transform: Matrix | None = None,
        material: Material | None = None,
        casts_shadow: bool = True,
    ) -> None:
        self._transform = identity()
        self._inverse = identity()
        self._inverse_transpose = identity()
        self._parent_ref: weakref.ReferenceType[Shape] | None = None
        self._material = material if material is not None else Material()
        self.casts_shadow = casts_shadow
        if transform is not None:
            self.transform = transform

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={id(self):#x})"

    # =========================================================================
    # Transform and material
    # =========================================================================

    @property
    def transform(self) -> Matrix:
        """Object-to-parent transform (fully composed for leaves in a group)."""
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        # Raises ValueError for singular matrices before anything is mutated
        inverse = value.inverse()
        self._push_transform(value)
        self._transform = value
        self._inverse = inverse
        self._inverse_transpose = inverse.transpose()
        self._invalidate_bounds()

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    @property
    def inverse_transpose(self) -> Matrix:
        return self._inverse_transpose

    @property
    def material(self) -> Material:
        return self._material

    @material.setter
    def material(self, value: Material) -> None:
        self._material = value

    @property
    def parent(self) -> Shape | None:
        """The group or CSG node that owns this shape, if it is still alive."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _set_parent(self, parent: Shape | None) -> None:
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    def _push_transform(self, new_transform: Matrix) -> None:
        """Hook for composites to re-express their children; leaves do nothing."""

    def _invalidate_bounds(self) -> None:
        parent = self.parent
        if parent is not None:
            parent._invalidate_bounds()

    # =========================================================================
    # Space conversions
    # =========================================================================

    def world_to_object(self, point: Point) -> Point:
        """Map a world-space point into this shape's object space."""
        return self._inverse * point

    def normal_to_world(self, normal: Vector) -> Vector:
        """Map an object-space normal to a unit world-space normal.

        Normals transform by the inverse-transpose; the translation part of
        that matrix would leak into w, so the result is rebuilt as a pure
        vector before renormalizing.
        """
        return normalize(self._inverse_transpose * normal)

    # =========================================================================
    # Queries
    # =========================================================================

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with the shape.

        Returns:
            Unsorted intersections; an empty list for a miss.
        """
        return self.local_intersect(ray.transform(self._inverse))

    def normal_at(self, world_point: Point, hit: Intersection | None = None) -> Vector:
        """Compute the unit surface normal at a world-space point.

        Args:
            world_point: A point on the surface.
            hit: The intersection that produced the point; smooth triangles
                read their barycentric coordinates from it.
        """
        local_point = self.world_to_object(world_point)
        return self.normal_to_world(self.local_normal_at(local_point, hit))

    def parent_space_bounds(self) -> BoundingBox:
        """Object-space bounds carried into the parent's space."""
        return self.bounds().transform(self._transform)

    def includes(self, other: Shape) -> bool:
        """Check whether ``other`` is this shape or one of its descendants."""
        return self is other

    def divide(self, threshold: int) -> None:
        """Subdivide into a bounding volume hierarchy; primitives cannot."""

    @abstractmethod
    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray already expressed in object space."""

    @abstractmethod
    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        """Surface normal at an object-space point (need not be unit length)."""

    @abstractmethod
    def bounds(self) -> BoundingBox:
        """Bounding box in object space."""
