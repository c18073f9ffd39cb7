"""Procedural color patterns.

A pattern maps a point in pattern space to a color. Patterns carry their own
transform, applied after the shape's, so the same pattern can be scaled or
rotated independently of the geometry it decorates:

    world point --shape.inverse--> object point --pattern.inverse--> pattern point

Patterns are shared by reference between materials; nothing copies them.

Example:
    >>> stripes = StripePattern(WHITE, BLACK, transform=scaling(2, 2, 2))
    >>> stripes.pattern_at(Point(0.9, 0, 0)) == WHITE
    True
    >>> stripes.pattern_at_shape(Sphere(), Point(2.5, 0, 0)) == BLACK
    True
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from src.whitted.core.color import Color
from src.whitted.core.matrix import Matrix, identity
from src.whitted.core.tuples import Point

if TYPE_CHECKING:
    from src.whitted.geometry.shape import Shape


class Pattern(ABC):
    """Base class for patterns; subclasses implement pattern_at()."""

    def __init__(self, transform: Matrix | None = None) -> None:
        self._transform = identity()
        self._inverse = identity()
        if transform is not None:
            self.transform = transform

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        self._inverse = value.inverse()
        self._transform = value

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    @abstractmethod
    def pattern_at(self, point: Point) -> Color:
        """Color at a point already expressed in pattern space."""

    def pattern_at_shape(self, shape: Shape, world_point: Point) -> Color:
        """Color at a world-space point on the given shape."""
        object_point = shape.world_to_object(world_point)
        return self.pattern_at(self._inverse * object_point)


class SolidPattern(Pattern):
    """A single color everywhere."""

    def __init__(self, color: Color, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.color = color

    def pattern_at(self, point: Point) -> Color:
        return self.color


class StripePattern(Pattern):
    """Alternating stripes along x, one unit wide."""

    def __init__(self, a: Color, b: Color, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def pattern_at(self, point: Point) -> Color:
        return self.a if math.floor(point.x) % 2 == 0 else self.b


class GradientPattern(Pattern):
    """Linear blend from a to b across each unit of x."""

    def __init__(self, a: Color, b: Color, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def pattern_at(self, point: Point) -> Color:
        fraction = point.x - math.floor(point.x)
        return self.a + (self.b - self.a) * fraction


class RingPattern(Pattern):
    """Concentric rings around the y axis, one unit apart."""

    def __init__(self, a: Color, b: Color, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def pattern_at(self, point: Point) -> Color:
        distance = math.sqrt(point.x * point.x + point.z * point.z)
        return self.a if math.floor(distance) % 2 == 0 else self.b


class CheckersPattern(Pattern):
    """Three-dimensional checkerboard of unit cubes."""

    def __init__(self, a: Color, b: Color, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def pattern_at(self, point: Point) -> Color:
        total = math.floor(point.x) + math.floor(point.y) + math.floor(point.z)
        return self.a if total % 2 == 0 else self.b


class SinePattern(Pattern):
    """Smooth waves in the xz plane, from a at the crests to b in the troughs."""

    def __init__(self, a: Color, b: Color, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def pattern_at(self, point: Point) -> Color:
        fraction = (1.0 - math.cos(point.x + point.z)) / 2.0
        return self.a + (self.b - self.a) * fraction


class BlendedPattern(Pattern):
    """Average of two nested patterns, each evaluated in its own space."""

    def __init__(self, a: Pattern, b: Pattern, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def pattern_at(self, point: Point) -> Color:
        first = self.a.pattern_at(self.a.inverse * point)
        second = self.b.pattern_at(self.b.inverse * point)
        return (first + second) * 0.5
