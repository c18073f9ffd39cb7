"""Materials module for surface appearance.

This module describes how surfaces respond to light:

Components:
    material: Immutable Phong material parameters and presets
    patterns: Procedural color patterns (stripes, rings, checkers, ...)
    phong: The Phong local illumination model

Materials and patterns are shared by reference between shapes and are never
mutated once a render starts.
"""

from .material import Material, glass
from .patterns import (
    BlendedPattern,
    CheckersPattern,
    GradientPattern,
    Pattern,
    RingPattern,
    SinePattern,
    SolidPattern,
    StripePattern,
)
from .phong import lighting, surface_color

__all__ = [
    # Material
    "Material",
    "glass",
    # Patterns
    "Pattern",
    "SolidPattern",
    "StripePattern",
    "GradientPattern",
    "RingPattern",
    "CheckersPattern",
    "SinePattern",
    "BlendedPattern",
    # Lighting
    "lighting",
    "surface_color",
]
