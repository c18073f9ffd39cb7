"""Unit tests for procedural patterns.

Tests cover:
- Stripe, gradient, ring, checkers, sine and solid patterns
- Pattern and object transforms
- Blended (nested) patterns
"""

import math

import pytest


def _colors():
    from src.whitted.core.color import BLACK, WHITE

    return WHITE, BLACK


class TestStripePattern:
    """Tests for stripes along x."""

    def test_constant_in_y_and_z(self):
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import StripePattern

        white, black = _colors()
        p = StripePattern(white, black)
        for point in (Point(0, 0, 0), Point(0, 1, 0), Point(0, 2, 0), Point(0, 0, 1), Point(0, 0, 2)):
            assert p.pattern_at(point) == white

    @pytest.mark.parametrize(
        "x,is_white",
        [(0, True), (0.9, True), (1, False), (-0.1, False), (-1, False), (-1.1, True)],
    )
    def test_alternates_in_x(self, x, is_white):
        """Test that stripes alternate at integer x."""
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import StripePattern

        white, black = _colors()
        expected = white if is_white else black
        assert StripePattern(white, black).pattern_at(Point(x, 0, 0)) == expected

    def test_object_transform(self):
        """Test that the object transform applies before the pattern."""
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import StripePattern

        white, black = _colors()
        shape = Sphere(transform=scaling(2, 2, 2))
        assert StripePattern(white, black).pattern_at_shape(shape, Point(1.5, 0, 0)) == white

    def test_pattern_transform(self):
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import StripePattern

        white, black = _colors()
        p = StripePattern(white, black, transform=scaling(2, 2, 2))
        assert p.pattern_at_shape(Sphere(), Point(1.5, 0, 0)) == white

    def test_both_transforms(self):
        """Test pattern and object transforms combined."""
        from src.whitted.core.matrix import scaling, translation
        from src.whitted.core.tuples import Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import StripePattern

        white, black = _colors()
        shape = Sphere(transform=scaling(2, 2, 2))
        p = StripePattern(white, black, transform=translation(0.5, 0, 0))
        assert p.pattern_at_shape(shape, Point(2.5, 0, 0)) == white

    def test_singular_pattern_transform_rejected(self):
        from src.whitted.core.matrix import scaling
        from src.whitted.materials.patterns import StripePattern

        white, black = _colors()
        with pytest.raises(ValueError):
            StripePattern(white, black, transform=scaling(0, 1, 1))


class TestOtherPatterns:
    """Tests for gradient, ring, checkers, sine, solid and blended patterns."""

    def test_gradient(self):
        from src.whitted.core.color import Color
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import GradientPattern

        white, black = _colors()
        p = GradientPattern(white, black)
        assert p.pattern_at(Point(0, 0, 0)) == white
        assert p.pattern_at(Point(0.25, 0, 0)) == Color(0.75, 0.75, 0.75)
        assert p.pattern_at(Point(0.5, 0, 0)) == Color(0.5, 0.5, 0.5)
        assert p.pattern_at(Point(0.75, 0, 0)) == Color(0.25, 0.25, 0.25)

    def test_ring(self):
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import RingPattern

        white, black = _colors()
        p = RingPattern(white, black)
        assert p.pattern_at(Point(0, 0, 0)) == white
        assert p.pattern_at(Point(1, 0, 0)) == black
        assert p.pattern_at(Point(0, 0, 1)) == black
        assert p.pattern_at(Point(0.708, 0, 0.708)) == black

    @pytest.mark.parametrize(
        "point,is_white",
        [
            ((0, 0, 0), True),
            ((0.99, 0, 0), True),
            ((1.01, 0, 0), False),
            ((0, 0.99, 0), True),
            ((0, 1.01, 0), False),
            ((0, 0, 0.99), True),
            ((0, 0, 1.01), False),
            ((-0.5, 0, 0), False),
            ((-0.5, 0, -0.5), True),
        ],
    )
    def test_checkers(self, point, is_white):
        """Test that checkers alternate across unit cubes in all three axes."""
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import CheckersPattern

        white, black = _colors()
        expected = white if is_white else black
        assert CheckersPattern(white, black).pattern_at(Point(*point)) == expected

    def test_sine(self):
        from src.whitted.core.color import Color
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import SinePattern

        white, black = _colors()
        p = SinePattern(white, black)
        assert p.pattern_at(Point(0, 0, 0)) == white
        assert p.pattern_at(Point(math.pi, 0, 0)) == black
        assert p.pattern_at(Point(math.pi / 4, 5, math.pi / 4)) == Color(0.5, 0.5, 0.5)

    def test_solid(self):
        from src.whitted.core.color import Color
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import SolidPattern

        red = Color(1, 0, 0)
        assert SolidPattern(red).pattern_at(Point(3, -2, 7)) == red

    def test_blended_averages_nested_patterns(self):
        """Test that a blend averages two patterns in their own spaces."""
        from src.whitted.core.color import Color
        from src.whitted.core.matrix import rotation_y
        from src.whitted.core.tuples import Point
        from src.whitted.materials.patterns import BlendedPattern, StripePattern

        white, black = _colors()
        along_x = StripePattern(white, black)
        along_z = StripePattern(white, black, transform=rotation_y(math.pi / 2))
        p = BlendedPattern(along_x, along_z)
        assert p.pattern_at(Point(0.5, 0, 0.5)) == Color(0.5, 0.5, 0.5)
        assert p.pattern_at(Point(0.5, 0, -0.5)) == white
