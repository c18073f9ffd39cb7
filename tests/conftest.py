"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session, and a probe
shape that records the rays it receives.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def probe_shape():
    """Factory for shapes that record the object-space ray they receive.

    The probe is a unit-box shape whose local_intersect stores the ray in
    ``saved_ray`` and returns no hits; its local normal is the object-space
    point itself, as a vector.
    """
    # Import here so Taichi is initialized before engine modules load
    from src.whitted.core.tuples import Point, Vector
    from src.whitted.geometry.bounds import BoundingBox
    from src.whitted.geometry.shape import Shape

    class ProbeShape(Shape):
        def __init__(self, **kwargs):
            super().__init__(**kwargs)
            self.saved_ray = None

        def local_intersect(self, ray):
            self.saved_ray = ray
            return []

        def local_normal_at(self, point, hit=None):
            return Vector(point.x, point.y, point.z)

        def bounds(self):
            return BoundingBox(Point(-1, -1, -1), Point(1, 1, 1))

    return ProbeShape
