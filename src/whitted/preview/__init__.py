"""Preview module for render output.

Components:
    canvas: Taichi-backed pixel buffer
    export: PPM and PNG image export utilities

Example:
    >>> from src.whitted.preview import save_png
    >>> canvas = camera.render(world)
    >>> save_png(canvas, "output.png", gamma=2.2)
"""

from src.whitted.preview.canvas import Canvas
from src.whitted.preview.export import (
    canvas_to_ppm,
    canvas_to_uint8,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    "Canvas",
    # Export functions
    "canvas_to_ppm",
    "canvas_to_uint8",
    "save_image",
    "save_png",
    "save_ppm",
]
