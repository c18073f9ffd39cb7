"""Image export utilities for rendered canvases.

Supported formats:
    - PPM (plain-text P3, 0-255 per channel)
    - PNG (8-bit via Pillow)

Both formats clamp each channel to [0, 1] and scale it to 0-255 with
rounding; PNG export can additionally apply gamma correction.

Example:
    >>> from src.whitted.preview.export import save_png
    >>> canvas = camera.render(world)
    >>> save_png(canvas, "output.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.whitted.preview.canvas import Canvas

# PPM viewers are not required to accept longer lines
PPM_MAX_LINE_LENGTH = 70
PPM_MAX_VALUE = 255


def _to_uint8(image: npt.NDArray[np.float32], gamma: float = 1.0) -> npt.NDArray[np.uint8]:
    image = np.nan_to_num(image, nan=0.0, posinf=1.0, neginf=0.0)
    image = np.clip(image, 0.0, 1.0)
    if gamma != 1.0:
        image = np.power(image, 1.0 / gamma)
    return np.rint(image * PPM_MAX_VALUE).astype(np.uint8)


def canvas_to_uint8(canvas: Canvas, gamma: float = 1.0) -> npt.NDArray[np.uint8]:
    """Convert a canvas to an 8-bit (height, width, 3) array.

    Args:
        canvas: The canvas to convert.
        gamma: Gamma correction value. Default 1.0 (linear).

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma = {gamma} must be positive.")
    return _to_uint8(canvas.to_numpy(), gamma)


def _wrap_row(values: list[str]) -> list[str]:
    lines: list[str] = []
    current = ""
    for value in values:
        if not current:
            current = value
        elif len(current) + 1 + len(value) <= PPM_MAX_LINE_LENGTH:
            current = f"{current} {value}"
        else:
            lines.append(current)
            current = value
    if current:
        lines.append(current)
    return lines


def canvas_to_ppm(canvas: Canvas) -> str:
    """Serialize a canvas as plain PPM text.

    The header is ``P3``, the dimensions and the maximum value 255. Each
    image row starts on a new line, no line exceeds 70 characters and the
    text ends with a newline.
    """
    image = canvas_to_uint8(canvas)
    lines = ["P3", f"{canvas.width} {canvas.height}", str(PPM_MAX_VALUE)]
    for row in image:
        lines.extend(_wrap_row([str(v) for v in row.reshape(-1)]))
    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    """Write a canvas to a PPM file."""
    Path(filepath).write_text(canvas_to_ppm(canvas), encoding="ascii")


def save_png(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> None:
    """Save a canvas as an 8-bit RGB PNG file.

    Args:
        canvas: The canvas to save.
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value. Default 1.0 (linear).
    """
    image_uint8 = canvas_to_uint8(canvas, gamma=gamma)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)


def save_image(canvas: Canvas, filepath: str | Path, *, gamma: float = 1.0) -> None:
    """Save a canvas, choosing PPM or PNG from the file extension.

    Raises:
        ValueError: If the extension is neither .ppm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(canvas, filepath)
    elif suffix == ".png":
        save_png(canvas, filepath, gamma=gamma)
    else:
        raise ValueError(f"Unsupported image format: {suffix!r} (use .ppm or .png)")
