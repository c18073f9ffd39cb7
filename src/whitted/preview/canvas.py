"""Canvas: the rendered image as a Taichi pixel buffer.

The canvas stores one RGB triple per pixel in a ``ti.Vector.field`` indexed
as ``[x, y]``, with (0, 0) the top-left pixel. Colors are stored unclamped;
clamping and scaling happen on export.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.color import RED
    >>> canvas = Canvas(10, 20)
    >>> canvas.write_pixel(2, 3, RED)
    >>> canvas.pixel_at(2, 3) == RED
    True
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.whitted.core.color import BLACK, Color


@ti.data_oriented
class Canvas:
    """A width x height grid of unclamped colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Taichi vector field of shape (width, height).
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a black canvas.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))
        self.fill(BLACK)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self.pixels[x, y] = (color.red, color.green, color.blue)

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        value = self.pixels[x, y]
        return Color(float(value[0]), float(value[1]), float(value[2]))

    def fill(self, color: Color) -> None:
        """Set every pixel to one color."""
        self._fill(color.red, color.green, color.blue)

    @ti.kernel
    def _fill(self, r: ti.f32, g: ti.f32, b: ti.f32):
        for i, j in self.pixels:
            self.pixels[i, j] = tm.vec3(r, g, b)

    @ti.kernel
    def sanitize(self) -> ti.i32:
        """Replace NaN, infinite and negative components with zero.

        Returns:
            The number of components that were replaced.
        """
        replaced = 0
        for i, j in self.pixels:
            color = self.pixels[i, j]
            for c in ti.static(range(3)):
                if tm.isnan(color[c]) or tm.isinf(color[c]) or color[c] < 0.0:
                    color[c] = 0.0
                    replaced += 1
            self.pixels[i, j] = color
        return replaced

    def load_numpy(self, image: npt.ArrayLike) -> None:
        """Copy a (height, width, 3) array into the canvas.

        Raises:
            ValueError: If the array shape does not match the canvas.
        """
        array = np.asarray(image, dtype=np.float32)
        if array.shape != (self.height, self.width, 3):
            raise ValueError(
                f"Expected an array of shape {(self.height, self.width, 3)}, "
                f"got {array.shape}"
            )
        # Image rows run along y, the field's first axis is x
        self.pixels.from_numpy(np.ascontiguousarray(np.transpose(array, (1, 0, 2))))

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Get the canvas as an unclamped (height, width, 3) float32 array."""
        image = self.pixels.to_numpy()
        return np.transpose(image, (1, 0, 2)).astype(np.float32)

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"
