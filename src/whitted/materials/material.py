"""Surface materials for Phong shading with reflection and refraction.

A Material is an immutable value shared by reference between shapes (a mesh
with thousands of triangles holds one Material, not thousands of copies).
Use ``with_changes`` to derive a variant.

Example:
    >>> base = Material(color=Color(1.0, 0.2, 1.0))
    >>> mirror = base.with_changes(reflective=0.9, diffuse=0.1)
    >>> glass().refractive_index
    1.52
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

from src.whitted.core.color import WHITE, Color
from src.whitted.core.constants import GLASS
from src.whitted.materials.patterns import Pattern

_NON_NEGATIVE = ("ambient", "diffuse", "specular", "reflective", "transparency")


@dataclass(frozen=True)
class Material:
    """Phong material parameters.

    Attributes:
        color: Surface color, used when no pattern is set.
        ambient: Fraction of light reflected regardless of light position.
        diffuse: Lambertian reflection coefficient.
        specular: Strength of the specular highlight.
        shininess: Phong exponent; larger values give smaller highlights.
        reflective: Fraction of the reflected ray's color added (0 = matte,
            1 = perfect mirror).
        transparency: Fraction of the refracted ray's color added.
        refractive_index: Index of refraction of the material's interior.
        pattern: Optional pattern that overrides ``color``. Shared, never
            copied.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    pattern: Pattern | None = None

    def __post_init__(self) -> None:
        for name in _NON_NEGATIVE:
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Material refractive_index = {self.refractive_index} must be positive."
            )

    def with_changes(self, **changes: Any) -> Material:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Export the scalar parameters to a dictionary.

        Patterns are procedural objects and are not serialized.

        Returns:
            A dictionary with ``color`` as an [r, g, b] list plus every
            scalar coefficient.
        """
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "pattern"}
        data["color"] = list(self.color)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Material:
        """Create a material from a dictionary produced by to_dict().

        Missing keys fall back to the defaults; unknown keys raise ValueError.
        """
        known = {f.name for f in fields(cls)} - {"pattern"}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown material keys: {sorted(unknown)}")

        params = dict(data)
        if "color" in params:
            params["color"] = Color(*params["color"])
        return cls(**params)


def glass() -> Material:
    """A clear glass material: fully transparent and slightly reflective."""
    return Material(
        diffuse=0.1,
        specular=1.0,
        shininess=300.0,
        reflective=0.9,
        transparency=0.9,
        refractive_index=GLASS,
    )
