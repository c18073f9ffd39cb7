"""Core math module.

This module contains the fundamental building blocks for ray tracing:

Components:
    constants: Shared tolerance, recursion budget and refractive indices
    tuples: Points, vectors and vector operations
    matrix: 4x4 matrices and transformation builders
    color: Unclamped RGB colors
    ray: Ray data structure

Everything here is plain Python backed by numpy for the matrix algebra;
the rest of the engine only depends on these types.
"""

from .color import BLACK, BLUE, GREEN, RED, WHITE, Color
from .constants import (
    AIR,
    DIAMOND,
    EPSILON,
    GLASS,
    MAX_DEPTH,
    VACUUM,
    WATER,
    approx_equal,
)
from .matrix import (
    Matrix,
    chain,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .ray import Ray
from .tuples import Point, Vector, cross, dot, magnitude, normalize, reflect

__all__ = [
    # Constants
    "EPSILON",
    "MAX_DEPTH",
    "VACUUM",
    "AIR",
    "WATER",
    "GLASS",
    "DIAMOND",
    "approx_equal",
    # Tuples
    "Point",
    "Vector",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "reflect",
    # Matrices
    "Matrix",
    "identity",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "chain",
    "view_transform",
    # Colors
    "Color",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    # Rays
    "Ray",
]
