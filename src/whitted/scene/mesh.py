"""Polygon mesh ingestion from Wavefront OBJ text.

Only the geometric subset of OBJ is understood:

    v x y z          vertex
    vn x y z         vertex normal
    f i j k ...      face (polygons are fan-triangulated)
    f i/t/n ...      face with texture and normal indices (texture ignored)
    f i//n ...       face with normal indices
    g name           start a named group

Every other line is counted and skipped. Indices are 1-based; negative
indices count back from the most recent vertex or normal. Faces whose
vertices all carry normals become SmoothTriangles, the rest flat Triangles.
Triangles with collinear corners are counted and dropped.

Example:
    >>> result = parse_obj("v -1 1 0\\nv -1 0 0\\nv 1 0 0\\nv 1 1 0\\nf 1 2 3 4\\n")
    >>> len(result.default_group)
    2
    >>> mesh = result.to_group()
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from src.whitted.core.matrix import Matrix
from src.whitted.core.tuples import Point, Vector, cross, magnitude
from src.whitted.geometry.bounds import BoundingBox
from src.whitted.geometry.group import Group
from src.whitted.geometry.triangle import SmoothTriangle, Triangle
from src.whitted.materials.material import Material


class ObjParseError(ValueError):
    """Raised for malformed OBJ content.

    Attributes:
        line_number: 1-based line of the offending statement, if known.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def fan_triangulation(
    vertices: Sequence[Point],
    normals: Sequence[Vector] | None = None,
    skip_degenerate: bool = False,
) -> list[Triangle]:
    """Split a convex polygon into triangles sharing its first vertex.

    Args:
        vertices: Polygon corners in winding order (at least three).
        normals: Optional per-corner normals; when given, smooth triangles
            are produced.
        skip_degenerate: Drop triangles whose corners are collinear instead
            of raising.

    Returns:
        len(vertices) - 2 triangles, fewer when degenerate ones are skipped.

    Raises:
        ValueError: If fewer than three vertices are given, the normals
            do not match the vertices one to one, or a triangle is
            degenerate and skip_degenerate is False.
    """
    if len(vertices) < 3:
        raise ValueError(f"A polygon needs at least 3 vertices, got {len(vertices)}")
    if normals is not None and len(normals) != len(vertices):
        raise ValueError(
            f"Got {len(normals)} normals for {len(vertices)} vertices"
        )

    triangles: list[Triangle] = []
    for index in range(1, len(vertices) - 1):
        p1, p2, p3 = vertices[0], vertices[index], vertices[index + 1]
        if skip_degenerate and _is_degenerate(p1, p2, p3):
            continue
        if normals is None:
            triangles.append(Triangle(p1, p2, p3))
        else:
            n1, n2, n3 = normals[0], normals[index], normals[index + 1]
            triangles.append(SmoothTriangle(p1, p2, p3, n1, n2, n3))
    return triangles


def _is_degenerate(p1: Point, p2: Point, p3: Point) -> bool:
    # Collinear or coincident corners leave no face normal
    return magnitude(cross(p3 - p1, p2 - p1)) == 0.0


def mesh_to_group(
    triangles: Sequence[Triangle],
    transform: Matrix | None = None,
    material: Material | None = None,
) -> Group:
    """Wrap triangles in one group, optionally placing and shading them.

    The material is assigned to the group, so every triangle shares the
    same Material object.
    """
    return Group(transform=transform, material=material, children=triangles)


def normalize_vertices(vertices: Sequence[Point]) -> list[Point]:
    """Center vertices on the origin and scale them to fit in [-1, 1].

    The largest dimension of the mesh spans exactly -1..1; proportions are
    preserved.
    """
    if not vertices:
        return []
    box = BoundingBox.empty()
    for vertex in vertices:
        box = box.add_point(vertex)
    low, high = box.minimum, box.maximum
    span = high - low
    scale = max(span.x, span.y, span.z) / 2.0
    if scale == 0.0:
        scale = 1.0
    center = low + span / 2.0
    return [
        Point(
            (v.x - center.x) / scale,
            (v.y - center.y) / scale,
            (v.z - center.z) / scale,
        )
        for v in vertices
    ]


@dataclass
class ObjParseResult:
    """Shapes and raw data produced by parse_obj().

    Attributes:
        vertices: Every vertex, in file order (after normalization, if
            requested).
        normals: Every vertex normal, in file order.
        default_group: Triangles from faces before any ``g`` statement.
        groups: Named groups, in declaration order. A repeated name
            continues the existing group.
        ignored_lines: Number of non-blank lines that were skipped.
        degenerate_triangles: Number of triangles dropped because their
            corners are collinear. They could never be hit.
    """

    vertices: list[Point] = field(default_factory=list)
    normals: list[Vector] = field(default_factory=list)
    default_group: Group = field(default_factory=Group)
    groups: dict[str, Group] = field(default_factory=dict)
    ignored_lines: int = 0
    degenerate_triangles: int = 0

    def group(self, name: str) -> Group:
        """Look up a named group.

        Raises:
            KeyError: If the file declares no group with that name.
        """
        return self.groups[name]

    def to_group(
        self, transform: Matrix | None = None, material: Material | None = None
    ) -> Group:
        """Collect every non-empty group into a single group.

        The parsed groups become children of the returned group, so this can
        only be called once per result.
        """
        parts = [g for g in (self.default_group, *self.groups.values()) if len(g)]
        return Group(transform=transform, material=material, children=parts)


def _parse_floats(parts: list[str], line_number: int, kind: str) -> tuple[float, ...]:
    if len(parts) != 3:
        raise ObjParseError(
            f"{kind} needs 3 coordinates, found {len(parts)}", line_number
        )
    try:
        return tuple(float(p) for p in parts)
    except ValueError as e:
        raise ObjParseError(f"Invalid {kind} coordinate: {e}", line_number) from e


def _resolve_index(token: str, count: int, line_number: int, kind: str) -> int:
    try:
        index = int(token)
    except ValueError as e:
        raise ObjParseError(f"Invalid {kind} index {token!r}", line_number) from e
    # OBJ indices are 1-based; negative ones are relative to the end
    resolved = index - 1 if index > 0 else count + index
    if index == 0 or not 0 <= resolved < count:
        raise ObjParseError(
            f"{kind} index {index} out of range (have {count})", line_number
        )
    return resolved


def _parse_face(
    parts: list[str], vertex_count: int, normal_count: int, line_number: int
) -> list[tuple[int, int | None]]:
    """Resolve a face statement into (vertex, normal) list positions."""
    if len(parts) < 3:
        raise ObjParseError(
            f"Face needs at least 3 vertices, found {len(parts)}", line_number
        )

    corners: list[tuple[int, int | None]] = []
    for part in parts:
        indices = part.split("/")
        if not indices[0]:
            raise ObjParseError(f"Missing vertex index in {part!r}", line_number)
        vertex = _resolve_index(indices[0], vertex_count, line_number, "vertex")
        normal = None
        if len(indices) >= 3 and indices[2]:
            normal = _resolve_index(indices[2], normal_count, line_number, "normal")
        corners.append((vertex, normal))
    return corners


def _build_face(
    corners: list[tuple[int, int | None]],
    vertices: list[Point],
    normals: list[Vector],
) -> list[Triangle]:
    points = [vertices[v] for v, _ in corners]
    if all(n is not None for _, n in corners):
        return fan_triangulation(
            points, [normals[n] for _, n in corners], skip_degenerate=True
        )
    return fan_triangulation(points, skip_degenerate=True)


def parse_obj(text: str, normalize: bool = False) -> ObjParseResult:
    """Parse OBJ text into triangle groups.

    Args:
        text: Contents of an OBJ file.
        normalize: Center the mesh on the origin and scale it to fit in the
            [-1, 1] cube before building triangles.

    Returns:
        The parse result with groups of triangles.

    Raises:
        ObjParseError: For malformed vertex, normal, face or group lines.
    """
    result = ObjParseResult()
    current = result.default_group
    faces: list[tuple[Group, list[tuple[int, int | None]]]] = []

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        keyword, *parts = line.split()

        if keyword == "v":
            result.vertices.append(Point(*_parse_floats(parts, line_number, "vertex")))
        elif keyword == "vn":
            result.normals.append(Vector(*_parse_floats(parts, line_number, "normal")))
        elif keyword == "f":
            corners = _parse_face(
                parts, len(result.vertices), len(result.normals), line_number
            )
            # Triangles are built once normalization has seen every vertex
            faces.append((current, corners))
        elif keyword == "g":
            if not parts:
                raise ObjParseError("Missing group name", line_number)
            name = " ".join(parts)
            current = result.groups.setdefault(name, Group())
        else:
            result.ignored_lines += 1

    if normalize:
        result.vertices = normalize_vertices(result.vertices)

    for group, corners in faces:
        triangles = _build_face(corners, result.vertices, result.normals)
        result.degenerate_triangles += len(corners) - 2 - len(triangles)
        for triangle in triangles:
            group.add_child(triangle)
    return result


def load_obj(path: str | Path, normalize: bool = False) -> ObjParseResult:
    """Read and parse an OBJ file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ObjParseError: For malformed content.
    """
    return parse_obj(Path(path).read_text(encoding="utf-8"), normalize=normalize)
