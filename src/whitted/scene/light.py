"""Point light sources."""

from __future__ import annotations

from dataclasses import dataclass

from src.whitted.core.color import Color
from src.whitted.core.tuples import Point


@dataclass(frozen=True)
class PointLight:
    """A light with no size, emitting equally in every direction.

    Attributes:
        position: World-space location of the light.
        intensity: Color and brightness of the emitted light.
    """

    position: Point
    intensity: Color
