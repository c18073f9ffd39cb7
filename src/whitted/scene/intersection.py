"""Ray/shape intersections and the shading inputs derived from them.

An Intersection records a distance along a ray and the primitive that was
hit. It refers to the shape but never owns it. Lists of intersections are
collected unsorted by shapes and groups; the World sorts them once.

prepare_computations() turns the visible hit into everything the shading
step needs: the surface point, eye and normal vectors, offset points for
secondary rays and the refractive indices on both sides of the surface.

Example:
    >>> xs = [Intersection(5.0, s), Intersection(-3.0, s), Intersection(2.0, s)]
    >>> hit(xs).t
    2.0
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.whitted.core.constants import EPSILON, VACUUM
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, Vector, dot, reflect

if TYPE_CHECKING:
    from src.whitted.geometry.shape import Shape


@dataclass(frozen=True)
class Intersection:
    """A hit of a ray against a primitive.

    Attributes:
        t: Distance along the ray in units of the ray's direction.
        shape: The primitive that was hit.
        u: First barycentric coordinate (triangles only).
        v: Second barycentric coordinate (triangles only).
    """

    t: float
    shape: Shape
    u: float | None = None
    v: float | None = None


def sort_intersections(xs: Iterable[Intersection]) -> list[Intersection]:
    """Return the intersections ordered by increasing t."""
    return sorted(xs, key=lambda i: i.t)


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Find the visible intersection: the lowest non-negative t.

    Returns:
        The hit, or None when every intersection is behind the ray origin.
    """
    visible = [i for i in xs if i.t >= 0.0]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)


@dataclass(frozen=True)
class Computations:
    """Precomputed shading state for one hit.

    Attributes:
        t: Distance of the hit along the ray.
        shape: The primitive that was hit.
        point: World-space hit point.
        eyev: Vector from the point back toward the eye.
        normalv: Unit surface normal, flipped to face the eye.
        inside: True when the normal had to be flipped (eye inside the shape).
        reflectv: Mirror direction of the incoming ray about the normal.
        over_point: Point nudged out of the surface, origin for shadow and
            reflection rays.
        under_point: Point nudged into the surface, origin for refraction
            rays.
        n1: Refractive index of the medium being left.
        n2: Refractive index of the medium being entered.
    """

    t: float
    shape: Shape
    point: Point
    eyev: Vector
    normalv: Vector
    inside: bool
    reflectv: Vector
    over_point: Point
    under_point: Point
    n1: float
    n2: float


def _refractive_indices(
    target: Intersection, xs: Sequence[Intersection]
) -> tuple[float, float]:
    """Walk the sorted hits tracking which shapes the ray is inside of.

    The last shape entered before the target hit gives n1; the last one
    still entered after crossing the target's surface gives n2. Outside of
    every shape the medium is vacuum.
    """
    containers: list[Shape] = []
    n1 = n2 = VACUUM
    for i in xs:
        if i == target:
            n1 = containers[-1].material.refractive_index if containers else VACUUM

        if i.shape in containers:
            containers.remove(i.shape)
        else:
            containers.append(i.shape)

        if i == target:
            n2 = containers[-1].material.refractive_index if containers else VACUUM
            break
    return n1, n2


def prepare_computations(
    target: Intersection, ray: Ray, xs: Sequence[Intersection] | None = None
) -> Computations:
    """Derive the shading inputs for a hit.

    Args:
        target: The intersection being shaded (usually ``hit(xs)``).
        ray: The ray that produced it.
        xs: Every intersection of the ray, sorted by t. Needed to know which
            transparent shapes the ray is inside of; defaults to just the
            target.

    Returns:
        The populated Computations.
    """
    if xs is None:
        xs = [target]

    point = ray.position(target.t)
    eyev = -ray.direction
    normalv = target.shape.normal_at(point, target)
    inside = dot(normalv, eyev) < 0.0
    if inside:
        normalv = -normalv

    n1, n2 = _refractive_indices(target, xs)
    return Computations(
        t=target.t,
        shape=target.shape,
        point=point,
        eyev=eyev,
        normalv=normalv,
        inside=inside,
        reflectv=reflect(ray.direction, normalv),
        over_point=point + normalv * EPSILON,
        under_point=point - normalv * EPSILON,
        n1=n1,
        n2=n2,
    )


def schlick(comps: Computations) -> float:
    """Approximate the Fresnel reflectance at the hit.

    Returns:
        Fraction of light reflected, in [0, 1]. Total internal reflection
        gives exactly 1.0.
    """
    cos = dot(comps.eyev, comps.normalv)
    if comps.n1 > comps.n2:
        ratio = comps.n1 / comps.n2
        sin2_t = ratio * ratio * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5
