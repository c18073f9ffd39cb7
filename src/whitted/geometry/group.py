"""Groups: ordered collections of shapes sharing one transform.

A group owns no geometry. Instead of transforming rays on the way down the
tree, a group pushes its transform into its children whenever the transform
or the children change:

    add_child(c):         c.transform <- group.transform * c.transform
    group.transform = T:  c.transform <- T * group.transform^-1 * c.transform

so every leaf carries its fully composed transform and a ray is transformed
exactly once, at the leaf. The group itself intersects rays in the space it
receives them in and prunes whole subtrees with a cached bounding box.

Example:
    >>> g = Group(transform=scaling(2, 2, 2))
    >>> s = Sphere(transform=translation(5, 0, 0))
    >>> g.add_child(s)
    >>> s.transform == scaling(2, 2, 2) @ translation(5, 0, 0)
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from src.whitted.core.matrix import Matrix
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.shape import Shape
from src.whitted.materials.material import Material
from src.whitted.scene.intersection import Intersection


class Group(Shape):
    """A composite shape holding children in insertion order."""

    def __init__(
        self,
        transform: Matrix | None = None,
        material: Material | None = None,
        children: Iterable[Shape] = (),
    ) -> None:
        # The transform setter reaches into these, so they exist first
        self._children: list[Shape] = []
        self._bounds_cache: BoundingBox | None = None
        super().__init__(transform=transform)
        self._material = None
        for child in children:
            self.add_child(child)
        if material is not None:
            self.material = material

    @property
    def children(self) -> tuple[Shape, ...]:
        return tuple(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._children)

    def add_child(self, child: Shape) -> None:
        """Append a child, baking this group's transform into it.

        Raises:
            ValueError: If the child already belongs to a composite, or if
                adding it would make the group contain itself.
        """
        if child.parent is not None:
            raise ValueError(f"{child!r} already belongs to {child.parent!r}")
        if child.includes(self):
            raise ValueError(f"Adding {child!r} would create a cycle")
        child.transform = self._transform @ child.transform
        self._adopt(child)

    def _adopt(self, child: Shape) -> None:
        # Attach without pushing the transform down; used when the child
        # already carries this group's transform
        child._set_parent(self)
        self._children.append(child)
        self._invalidate_bounds()

    # =========================================================================
    # Transform, material and bounds propagation
    # =========================================================================

    def _push_transform(self, new_transform: Matrix) -> None:
        change = new_transform @ self._inverse
        for child in self._children:
            child.transform = change @ child.transform

    @property
    def material(self) -> Material | None:
        """The material last assigned to the whole group, if any."""
        return self._material

    @material.setter
    def material(self, value: Material) -> None:
        # Every descendant shares the same Material object
        self._material = value
        for child in self._children:
            child.material = value

    def _invalidate_bounds(self) -> None:
        self._bounds_cache = None
        super()._invalidate_bounds()

    def bounds(self) -> BoundingBox:
        """Union of the children's boxes, cached until the tree changes.

        The children already carry this group's transform, so the box is in
        the group's parent space.
        """
        if self._bounds_cache is None:
            box = BoundingBox.empty()
            for child in self._children:
                box = box.merge(child.parent_space_bounds())
            self._bounds_cache = box
        return self._bounds_cache

    def parent_space_bounds(self) -> BoundingBox:
        return self.bounds()

    # =========================================================================
    # Queries
    # =========================================================================

    def intersect(self, ray: Ray) -> list[Intersection]:
        # No ray transform here: children carry the composed transform
        return self.local_intersect(ray)

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Collect the children's hits, unsorted, if the ray enters the box."""
        if not self.bounds().intersects(ray):
            return []
        xs: list[Intersection] = []
        for child in self._children:
            xs.extend(child.intersect(ray))
        return xs

    def local_normal_at(self, point: Point, hit: Intersection | None = None) -> Vector:
        raise TypeError("Groups have no surface; normals come from their children")

    def includes(self, other: Shape) -> bool:
        return self is other or any(child.includes(other) for child in self._children)

    # =========================================================================
    # Bounding volume hierarchy
    # =========================================================================

    def divide(self, threshold: int) -> None:
        """Recursively split crowded groups into spatially coherent subgroups.

        A group with at least ``threshold`` children splits its box in half
        along the longest axis and moves the children that fit entirely in
        one half into a new subgroup for that half. Children straddling the
        split stay where they are.

        Args:
            threshold: Minimum number of children that triggers a split.
        """
        if threshold <= len(self._children):
            left, right = self._partition_children()
            if left:
                self._make_subgroup(left)
            if right:
                self._make_subgroup(right)

        for child in self._children:
            child.divide(threshold)

    def _partition_children(self) -> tuple[list[Shape], list[Shape]]:
        left_box, right_box = self.bounds().split()
        left: list[Shape] = []
        right: list[Shape] = []
        remaining: list[Shape] = []
        for child in self._children:
            child_box = child.parent_space_bounds()
            if left_box.contains_box(child_box):
                left.append(child)
            elif right_box.contains_box(child_box):
                right.append(child)
            else:
                remaining.append(child)

        # Moving every child into one subgroup would recurse forever
        if len(left) == len(self._children) or len(right) == len(self._children):
            return [], []

        self._children = remaining
        self._invalidate_bounds()
        return left, right

    def _make_subgroup(self, shapes: list[Shape]) -> None:
        # The moved shapes keep this group's transform baked in, so the
        # subgroup is an identity group attached without another push-down
        if len(shapes) == 1:
            self._adopt(shapes[0])
            return

        subgroup = Group()
        for shape in shapes:
            shape._set_parent(None)
            subgroup._adopt(shape)
        self._adopt(subgroup)
