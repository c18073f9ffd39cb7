"""Whitted-style recursive ray tracer.

This package renders scenes by casting one ray per pixel and resolving its
color through geometric intersection and recursive reflection/refraction:
- Homogeneous points, vectors and 4x4 transforms (numpy-backed)
- Primitive shapes (sphere, plane, cube, cylinder, cone, triangles)
- Groups with transform push-down and bounding-volume pruning
- Constructive solid geometry (union, intersection, difference)
- Phong shading with shadows, reflection and refraction

Subpackages:
    core: Tuples, matrices, colors, rays and shared constants
    geometry: Shape primitives, bounding boxes, groups and CSG
    materials: Materials, patterns and the Phong lighting model
    scene: Intersections, lights, the world, mesh ingestion, demo scene
    camera: Pinhole camera that generates per-pixel rays
    preview: Taichi-backed canvas and PPM/PNG export
"""

__version__ = "0.1.0"
