"""Showcase scene configuration.

This module provides a factory function for a small demonstration scene that
exercises every part of the engine at once:

- A checkered floor plane with a slight mirror finish
- A CSG solid: a cube with a sphere carved out of it
- A group of cylinders and cones standing on a common base
- A glass sphere (reflective and refractive, Schlick-weighted)
- A chrome mirror sphere
- Two point lights, so every surface carries two shadow tests

Example:
    >>> world, camera = create_showcase_scene(160, 90)
    >>> canvas = camera.render(world)
"""

import math

from src.whitted.camera.pinhole import Camera
from src.whitted.core.color import Color
from src.whitted.core.matrix import (
    chain,
    rotation_y,
    scaling,
    translation,
    view_transform,
)
from src.whitted.core.tuples import Point, Vector
from src.whitted.geometry.cone import Cone
from src.whitted.geometry.csg import CSG, CsgOperation
from src.whitted.geometry.cube import Cube
from src.whitted.geometry.cylinder import Cylinder
from src.whitted.geometry.group import Group
from src.whitted.geometry.plane import Plane
from src.whitted.geometry.sphere import Sphere
from src.whitted.materials.material import Material, glass
from src.whitted.materials.patterns import CheckersPattern
from src.whitted.scene.light import PointLight
from src.whitted.scene.world import World

# =============================================================================
# Showcase Constants
# =============================================================================

FIELD_OF_VIEW = math.pi / 3.0

CAMERA_FROM = Point(0.0, 2.5, -9.0)
CAMERA_TO = Point(0.0, 1.0, 0.0)
CAMERA_UP = Vector(0.0, 1.0, 0.0)

KEY_LIGHT = PointLight(Point(-10.0, 10.0, -10.0), Color(0.7, 0.7, 0.7))
FILL_LIGHT = PointLight(Point(8.0, 6.0, -6.0), Color(0.3, 0.3, 0.35))

FLOOR_COLORS = (Color(0.9, 0.9, 0.9), Color(0.15, 0.15, 0.2))


# =============================================================================
# Scene Parts
# =============================================================================


def _floor() -> Plane:
    checkers = CheckersPattern(*FLOOR_COLORS, transform=scaling(0.75, 0.75, 0.75))
    return Plane(material=Material(pattern=checkers, specular=0.0, reflective=0.1))


def _carved_cube() -> CSG:
    # Cube minus a slightly larger sphere leaves a hollow shell with round holes
    cube = Cube(
        material=Material(color=Color(0.8, 0.3, 0.2), diffuse=0.8, specular=0.3)
    )
    sphere = Sphere(
        transform=scaling(1.3, 1.3, 1.3),
        material=Material(color=Color(0.9, 0.8, 0.3), diffuse=0.8, specular=0.3),
    )
    return CSG(
        CsgOperation.DIFFERENCE,
        cube,
        sphere,
        transform=chain(
            scaling(0.8, 0.8, 0.8),
            rotation_y(math.pi / 6),
            translation(-3.0, 0.8, 1.5),
        ),
    )


def _pillars() -> Group:
    pillar_material = Material(color=Color(0.3, 0.5, 0.8), diffuse=0.7, specular=0.6)
    base = Cylinder(
        minimum=0.0,
        maximum=0.1,
        closed=True,
        transform=scaling(1.5, 1.0, 1.5),
    )
    left = Cylinder(
        minimum=0.0,
        maximum=1.5,
        closed=True,
        transform=chain(scaling(0.25, 1.0, 0.25), translation(-0.7, 0.1, 0.0)),
    )
    right = Cylinder(
        minimum=0.0,
        maximum=1.0,
        closed=True,
        transform=chain(scaling(0.25, 1.0, 0.25), translation(0.7, 0.1, 0.0)),
    )
    left_cap = Cone(
        minimum=-1.0,
        maximum=0.0,
        closed=True,
        transform=chain(scaling(0.35, 0.6, 0.35), translation(-0.7, 2.2, 0.0)),
    )
    right_cap = Cone(
        minimum=-1.0,
        maximum=0.0,
        closed=True,
        transform=chain(scaling(0.35, 0.6, 0.35), translation(0.7, 1.7, 0.0)),
    )
    return Group(
        transform=translation(3.0, 0.0, 2.0),
        material=pillar_material,
        children=[base, left, right, left_cap, right_cap],
    )


def _glass_sphere() -> Sphere:
    sphere = Sphere(
        transform=translation(0.0, 1.0, 0.0),
        material=glass().with_changes(color=Color(0.1, 0.1, 0.1), ambient=0.0),
    )
    # Glass does not block light for shadow rays
    sphere.casts_shadow = False
    return sphere


def _mirror_sphere() -> Sphere:
    return Sphere(
        transform=chain(scaling(0.7, 0.7, 0.7), translation(1.2, 0.7, -2.0)),
        material=Material(
            color=Color(0.1, 0.1, 0.1),
            ambient=0.0,
            diffuse=0.1,
            specular=1.0,
            shininess=300.0,
            reflective=0.9,
        ),
    )


# =============================================================================
# Showcase Factory
# =============================================================================


def create_showcase_scene(width: int, height: int) -> tuple[World, Camera]:
    """Create the showcase world and a camera framing it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A tuple of (World, Camera). The world already has its bounding
        volume hierarchy built.

    Example:
        >>> world, camera = create_showcase_scene(64, 36)
        >>> len(world.lights)
        2
    """
    world = World(lights=[KEY_LIGHT, FILL_LIGHT])
    world.add(
        _floor(),
        _carved_cube(),
        _pillars(),
        _glass_sphere(),
        _mirror_sphere(),
    )
    world.divide(4)

    camera = Camera(
        width,
        height,
        FIELD_OF_VIEW,
        view_transform(CAMERA_FROM, CAMERA_TO, CAMERA_UP),
    )
    return world, camera
