"""The world: every shape and light in a scene, and the recursive shading pipeline.

color_at() is the whole renderer for a single ray:

1. Intersect the ray with the root group and sort the hits once.
2. Pick the nearest non-negative hit; no hit gives the background color.
3. Prepare the shading inputs (point, eye, normal, offset points, n1/n2).
4. Sum the Phong term of every light, testing shadows from the over-point.
5. Add the reflected color (from the over-point) and the refracted color
   (from the under-point), each by recursing with one less level of depth.
6. When the material both reflects and refracts, weight the two by the
   Schlick approximation of the Fresnel reflectance.

Colors are never clamped here. Tracing is a pure function of the world, the
ray and the remaining depth, so a world must be fully built before rendering.

Example:
    >>> world = default_world()
    >>> world.color_at(Ray(Point(0, 0, -5), Vector(0, 0, 1))) == Color(0.38066, 0.47583, 0.2855)
    True
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from src.whitted.core.color import BLACK, WHITE, Color
from src.whitted.core.constants import MAX_DEPTH
from src.whitted.core.matrix import scaling
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, dot, magnitude, normalize
from src.whitted.geometry.group import Group
from src.whitted.geometry.shape import Shape
from src.whitted.geometry.sphere import Sphere
from src.whitted.materials.material import Material
from src.whitted.materials.phong import lighting
from src.whitted.scene.intersection import (
    Computations,
    Intersection,
    hit,
    prepare_computations,
    schlick,
    sort_intersections,
)
from src.whitted.scene.light import PointLight


class World:
    """A scene: a root group of shapes plus the lights illuminating them.

    Attributes:
        root: Identity-transform group owning every top-level shape.
        lights: Light sources; each contributes its own Phong term.
        background: Color returned for rays that hit nothing.
    """

    def __init__(
        self,
        lights: Iterable[PointLight] = (),
        background: Color = BLACK,
    ) -> None:
        self.root = Group()
        self.lights: list[PointLight] = list(lights)
        self.background = background

    @property
    def objects(self) -> tuple[Shape, ...]:
        return self.root.children

    def add(self, *shapes: Shape) -> None:
        """Add top-level shapes to the world."""
        for shape in shapes:
            self.root.add_child(shape)

    def add_light(self, light: PointLight) -> None:
        self.lights.append(light)

    def divide(self, threshold: int) -> None:
        """Build a bounding volume hierarchy over the world's shapes."""
        self.root.divide(threshold)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """All intersections of the ray with the world, sorted by t."""
        return sort_intersections(self.root.intersect(ray))

    # =========================================================================
    # Shading pipeline
    # =========================================================================

    def color_at(self, ray: Ray, remaining: int = MAX_DEPTH) -> Color:
        """Resolve the color seen along a ray.

        Args:
            ray: The ray to trace.
            remaining: How many more reflection/refraction bounces may be
                traced. At 0 only local shading is computed.

        Returns:
            The unclamped color, or the background color on a miss.
        """
        xs = self.intersect(ray)
        visible = hit(xs)
        if visible is None:
            return self.background
        comps = prepare_computations(visible, ray, xs)
        return self.shade_hit(comps, remaining)

    def shade_hit(self, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
        """Combine direct lighting with reflected and refracted light."""
        material = comps.shape.material
        surface = BLACK
        for light in self.lights:
            shadowed = self.is_shadowed(comps.over_point, light)
            surface = surface + lighting(
                material,
                comps.shape,
                light,
                comps.over_point,
                comps.eyev,
                comps.normalv,
                shadowed,
            )

        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)
        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = schlick(comps)
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)
        return surface + reflected + refracted

    def is_shadowed(self, point: Point, light: PointLight) -> bool:
        """Check whether any shadow-casting shape sits between point and light."""
        to_light = light.position - point
        distance = magnitude(to_light)
        ray = Ray(point, normalize(to_light))
        return any(
            0.0 < i.t < distance and i.shape.casts_shadow
            for i in self.root.intersect(ray)
        )

    def reflected_color(self, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
        """Color arriving along the mirror direction, scaled by reflectivity."""
        reflective = comps.shape.material.reflective
        if remaining <= 0 or reflective == 0.0:
            return BLACK
        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflective

    def refracted_color(self, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
        """Color arriving through the surface, bent by Snell's law.

        Returns:
            The refracted color scaled by transparency; black under total
            internal reflection, for opaque materials, or at depth 0.
        """
        transparency = comps.shape.material.transparency
        if remaining <= 0 or transparency == 0.0:
            return BLACK

        n_ratio = comps.n1 / comps.n2
        cos_i = dot(comps.eyev, comps.normalv)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            # Total internal reflection
            return BLACK

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, remaining - 1) * transparency


def default_world() -> World:
    """The two-sphere reference scene used to check the shading pipeline.

    An outer unit sphere with a green-tinted matte material contains an inner
    sphere of radius 0.5 with the default material, lit by a white light at
    (-10, 10, -10).
    """
    world = World(lights=[PointLight(Point(-10.0, 10.0, -10.0), WHITE)])
    outer = Sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2)
    )
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    world.add(outer, inner)
    return world
