"""Phong reflection model.

The local illumination at a surface point is the sum of three terms:

    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * max(light . normal, 0)
    specular = light_intensity * specular * max(reflect . eye, 0) ^ shininess

where effective_color is the surface color (or pattern color) tinted by the
light. A shadowed point receives only the ambient term.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.whitted.core.color import BLACK, Color
from src.whitted.core.tuples import Point, Vector, dot, normalize, reflect
from src.whitted.materials.material import Material
from src.whitted.scene.light import PointLight

if TYPE_CHECKING:
    from src.whitted.geometry.shape import Shape


def surface_color(material: Material, shape: Shape, point: Point) -> Color:
    """Color of the material at a world-space point on the shape."""
    if material.pattern is not None:
        return material.pattern.pattern_at_shape(shape, point)
    return material.color


def lighting(
    material: Material,
    shape: Shape,
    light: PointLight,
    point: Point,
    eyev: Vector,
    normalv: Vector,
    in_shadow: bool = False,
) -> Color:
    """Shade a point with the Phong model for a single light.

    Args:
        material: Material of the surface.
        shape: The shape being shaded; patterns are evaluated in its space.
        light: The light source.
        point: World-space point being shaded.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal facing the eye.
        in_shadow: Whether the light is occluded from the point.

    Returns:
        The unclamped color contributed by this light.
    """
    effective_color = surface_color(material, shape, point) * light.intensity
    ambient = effective_color * material.ambient
    if in_shadow:
        return ambient

    lightv = normalize(light.position - point)
    light_dot_normal = dot(lightv, normalv)
    if light_dot_normal < 0.0:
        # Light is on the other side of the surface
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)

    reflect_dot_eye = dot(reflect(-lightv, normalv), eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = reflect_dot_eye ** material.shininess
        specular = light.intensity * (material.specular * factor)

    return ambient + diffuse + specular
