"""RGB colors.

Colors are linear, unclamped triples. Shading freely produces components
above 1.0 (several lights, strong specular highlights) and only the export
step quantizes them.

Example:
    >>> Color(0.9, 0.6, 0.75) + Color(0.7, 0.1, 0.25) == Color(1.6, 0.7, 1.0)
    True
    >>> Color(1.0, 0.2, 0.4) * Color(0.9, 1.0, 0.1) == Color(0.9, 0.2, 0.04)
    True
"""

from __future__ import annotations

from collections.abc import Iterator

from src.whitted.core.constants import approx_equal


class Color:
    """An RGB color with epsilon-tolerant equality.

    Multiplying by a number scales the color; multiplying by another Color
    takes the component-wise (Hadamard) product used to tint light by a
    surface color.
    """

    __slots__ = ("red", "green", "blue")

    def __init__(self, red: float, green: float, blue: float) -> None:
        self.red = float(red)
        self.green = float(green)
        self.blue = float(blue)

    def __iter__(self) -> Iterator[float]:
        yield self.red
        yield self.green
        yield self.blue

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Color({self.red!r}, {self.green!r}, {self.blue!r})"

    def __add__(self, other: object) -> Color:
        if isinstance(other, Color):
            return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)
        return NotImplemented

    def __sub__(self, other: object) -> Color:
        if isinstance(other, Color):
            return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)
        return NotImplemented

    def __mul__(self, other: object) -> Color:
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        if isinstance(other, (int, float)):
            return Color(self.red * other, self.green * other, self.blue * other)
        return NotImplemented

    def __rmul__(self, other: object) -> Color:
        if isinstance(other, (int, float)):
            return self * other
        return NotImplemented

    def clamped(self, low: float = 0.0, high: float = 1.0) -> Color:
        """Return a copy with every component limited to [low, high]."""
        return Color(
            min(max(self.red, low), high),
            min(max(self.green, low), high),
            min(max(self.blue, low), high),
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
