"""Pinhole camera model for perspective projection ray generation.

The camera sits at the origin of its own space looking toward -z, with the
image plane at z = -1. Its transform is a view transform (see
``core.matrix.view_transform``) mapping world space into camera space; the
camera keeps the inverse to turn camera-space rays back into world rays.

The field of view spans the longer image side:

    half_view = tan(field_of_view / 2)
    aspect = hsize / vsize
    aspect >= 1: half_width = half_view,          half_height = half_view / aspect
    aspect <  1: half_width = half_view * aspect, half_height = half_view
    pixel_size = 2 * half_width / hsize

Each primary ray passes through the centre of its pixel; there is exactly
one ray per pixel.

Example:
    >>> camera = Camera(11, 11, math.pi / 2,
    ...                 view_transform(Point(0, 0, -5), Point(0, 0, 0), Vector(0, 1, 0)))
    >>> canvas = camera.render(default_world())
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np

from src.whitted.core.constants import MAX_DEPTH
from src.whitted.core.matrix import Matrix, identity
from src.whitted.core.ray import Ray
from src.whitted.core.tuples import Point, normalize
from src.whitted.preview.canvas import Canvas

if TYPE_CHECKING:
    from src.whitted.scene.world import World

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

CAMERA_ORIGIN = Point(0.0, 0.0, 0.0)


class Camera:
    """A pinhole camera producing one primary ray per pixel.

    Attributes:
        hsize: Horizontal size of the image in pixels.
        vsize: Vertical size of the image in pixels.
        field_of_view: Angle in radians covered by the longer image side.
        half_width: Half the width of the image plane at z = -1.
        half_height: Half the height of the image plane at z = -1.
        pixel_size: World-space size of one pixel on the image plane.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix | None = None,
    ) -> None:
        """Initialize the camera.

        Args:
            hsize: Image width in pixels.
            vsize: Image height in pixels.
            field_of_view: Field of view in radians, in (0, pi).
            transform: View transform; identity if omitted.

        Raises:
            ValueError: If a dimension is not positive, the field of view is
                out of range or the transform is not invertible.
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera dimensions must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"field_of_view = {field_of_view} must be in (0, pi).")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2.0) / hsize

        self._transform = identity()
        self._inverse = identity()
        self.transform = transform if transform is not None else identity()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        # Invert first so a singular view leaves the camera unchanged
        inverse = value.inverse()
        self._transform = value
        self._inverse = inverse

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """Build the world-space ray through the centre of a pixel.

        Args:
            px: Pixel column, 0 at the left edge.
            py: Pixel row, 0 at the top edge.
        """
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self._inverse * Point(world_x, world_y, -1.0)
        origin = self._inverse * CAMERA_ORIGIN
        return Ray(origin, normalize(pixel - origin))

    def render(
        self,
        world: World,
        depth: int = MAX_DEPTH,
        callback: ProgressCallback | None = None,
    ) -> Canvas:
        """Trace every pixel of the image, row by row.

        Args:
            world: The fully built scene to render.
            depth: Reflection/refraction budget for each primary ray.
            callback: Optional function called after each row with
                (rows_done, total_rows).

        Returns:
            A canvas holding the unclamped pixel colors.
        """
        image = np.zeros((self.vsize, self.hsize, 3), dtype=np.float32)
        for y in range(self.vsize):
            for x in range(self.hsize):
                color = world.color_at(self.ray_for_pixel(x, y), depth)
                image[y, x] = (color.red, color.green, color.blue)
            if callback is not None:
                callback(y + 1, self.vsize)

        canvas = Canvas(self.hsize, self.vsize)
        canvas.load_numpy(image)
        canvas.sanitize()
        return canvas

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view})"
        )
