"""Shared numeric constants.

EPSILON is the one tolerance used by every floating point comparison in the
engine: tuple, matrix and color equality, the near-zero guards of the
plane/cylinder/cone/triangle intersections, the slab test, and the
over/under point offset used for secondary rays.
Other guards are derived from it.
"""

# Tolerance for all floating point comparisons
EPSILON = 1e-5

# Near-zero guard for intermediate products of two EPSILON-scale terms
QUADRATIC_EPSILON = EPSILON * EPSILON

# Default recursion budget for reflected/refracted rays
MAX_DEPTH = 5

# Refractive indices of common media
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.52
DIAMOND = 2.417


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Check whether two floats differ by less than epsilon.

    Equal infinities compare equal, so unbounded boxes can be compared.
    """
    return a == b or abs(a - b) < epsilon
