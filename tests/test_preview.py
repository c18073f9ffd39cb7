"""Tests for the preview module.

This module tests the preview/canvas and preview/export functionality including:
- Canvas creation, pixel access and bounds checking
- Numpy conversion and sanitizing of non-finite values
- PPM serialization (header, line wrapping, clamping, trailing newline)
- PNG export through Pillow
- Format selection by file extension
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestCanvas:
    """Test the Taichi-backed canvas."""

    def test_new_canvas_is_black(self):
        """Test that every pixel of a new canvas is black."""
        from src.whitted.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        assert canvas.width == 10
        assert canvas.height == 20
        assert np.allclose(canvas.to_numpy(), 0.0)

    def test_kernel_annotations_are_evaluated(self):
        """Test that kernel argument types reach Taichi as types, not strings."""
        import __future__

        from src.whitted.preview import canvas as canvas_module

        assert getattr(canvas_module, "annotations", None) is not __future__.annotations
        canvas = canvas_module.Canvas(2, 2)
        canvas.fill(canvas_module.BLACK)
        assert canvas.sanitize() == 0

    def test_write_and_read_pixel(self):
        from src.whitted.core.color import RED
        from src.whitted.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        canvas.write_pixel(2, 3, RED)
        assert canvas.pixel_at(2, 3) == RED

    def test_pixel_layout_in_numpy(self):
        """Test that x indexes columns and y indexes rows."""
        from src.whitted.core.color import Color
        from src.whitted.preview.canvas import Canvas

        canvas = Canvas(4, 2)
        canvas.write_pixel(3, 1, Color(0.25, 0.5, 0.75))
        image = canvas.to_numpy()
        assert image.shape == (2, 4, 3)
        assert image.dtype == np.float32
        assert np.allclose(image[1, 3], [0.25, 0.5, 0.75])

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (10, 0), (0, 20)])
    def test_out_of_bounds(self, x, y):
        from src.whitted.core.color import RED
        from src.whitted.preview.canvas import Canvas

        canvas = Canvas(10, 20)
        with pytest.raises(ValueError):
            canvas.write_pixel(x, y, RED)
        with pytest.raises(ValueError):
            canvas.pixel_at(x, y)

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 5)])
    def test_invalid_dimensions(self, width, height):
        from src.whitted.preview.canvas import Canvas

        with pytest.raises(ValueError):
            Canvas(width, height)

    def test_fill(self):
        from src.whitted.core.color import Color
        from src.whitted.preview.canvas import Canvas

        canvas = Canvas(3, 3)
        canvas.fill(Color(1.0, 0.8, 0.6))
        assert np.allclose(canvas.to_numpy(), [1.0, 0.8, 0.6])

    def test_load_numpy(self):
        from src.whitted.preview.canvas import Canvas

        image = np.random.default_rng(0).random((3, 5, 3)).astype(np.float32)
        canvas = Canvas(5, 3)
        canvas.load_numpy(image)
        assert np.allclose(canvas.to_numpy(), image)

    def test_load_numpy_shape_mismatch(self):
        from src.whitted.preview.canvas import Canvas

        with pytest.raises(ValueError):
            Canvas(5, 3).load_numpy(np.zeros((5, 3, 3)))

    def test_sanitize(self):
        """Test that NaN, infinite and negative components become zero."""
        from src.whitted.preview.canvas import Canvas

        image = np.full((2, 2, 3), 0.5, dtype=np.float32)
        image[0, 0, 0] = np.nan
        image[0, 1, 1] = np.inf
        image[1, 0, 2] = -1.0
        image[1, 1, 0] = 7.0
        canvas = Canvas(2, 2)
        canvas.load_numpy(image)

        assert canvas.sanitize() == 3
        result = canvas.to_numpy()
        assert result[0, 0, 0] == 0.0
        assert result[0, 1, 1] == 0.0
        assert result[1, 0, 2] == 0.0
        # Bright values are kept unclamped
        assert result[1, 1, 0] == 7.0


class TestPPM:
    """Test plain PPM serialization."""

    def test_header(self):
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_ppm

        lines = canvas_to_ppm(Canvas(5, 3)).splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_pixel_data_is_clamped_and_scaled(self):
        from src.whitted.core.color import Color
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_ppm

        canvas = Canvas(5, 3)
        canvas.write_pixel(0, 0, Color(1.5, 0, 0))
        canvas.write_pixel(2, 1, Color(0, 0.5, 0))
        canvas.write_pixel(4, 2, Color(-0.5, 0, 1))
        lines = canvas_to_ppm(canvas).splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_are_split(self):
        """Test that no line exceeds 70 characters."""
        from src.whitted.core.color import Color
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_ppm

        canvas = Canvas(10, 2)
        canvas.fill(Color(1, 0.8, 0.6))
        lines = canvas_to_ppm(canvas).splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]
        assert all(len(line) <= 70 for line in lines)

    def test_ends_with_newline(self):
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_ppm

        assert canvas_to_ppm(Canvas(5, 3)).endswith("\n")

    def test_save_ppm(self, tmp_path):
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_ppm, save_ppm

        canvas = Canvas(3, 2)
        path = tmp_path / "out.ppm"
        save_ppm(canvas, path)
        assert path.read_text(encoding="ascii") == canvas_to_ppm(canvas)


class TestPNGExport:
    """Test 8-bit conversion and PNG export."""

    def test_uint8_conversion(self):
        from src.whitted.core.color import Color
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_uint8

        canvas = Canvas(2, 1)
        canvas.write_pixel(0, 0, Color(2.0, 0.5, -1.0))
        result = canvas_to_uint8(canvas)
        assert result.dtype == np.uint8
        assert result.shape == (1, 2, 3)
        assert list(result[0, 0]) == [255, 128, 0]

    def test_gamma_brightens_midtones(self):
        from src.whitted.core.color import Color
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_uint8

        canvas = Canvas(1, 1)
        canvas.fill(Color(0.25, 0.25, 0.25))
        linear = canvas_to_uint8(canvas)
        corrected = canvas_to_uint8(canvas, gamma=2.0)
        assert list(corrected[0, 0]) == [128, 128, 128]
        assert corrected[0, 0, 0] > linear[0, 0, 0]

    def test_invalid_gamma(self):
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import canvas_to_uint8

        with pytest.raises(ValueError):
            canvas_to_uint8(Canvas(1, 1), gamma=0.0)

    def test_save_png(self, tmp_path):
        """Test that a PNG file is written with the canvas dimensions."""
        from src.whitted.core.color import Color
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import save_png

        canvas = Canvas(8, 4)
        canvas.write_pixel(7, 3, Color(0, 1, 0))
        path = tmp_path / "out.png"
        save_png(canvas, path)

        with PILImage.open(path) as img:
            assert img.size == (8, 4)
            assert img.mode == "RGB"
            assert img.getpixel((7, 3)) == (0, 255, 0)

    @pytest.mark.parametrize("name", ["out.png", "out.PPM"])
    def test_save_image_by_extension(self, tmp_path, name):
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import save_image

        path = tmp_path / name
        save_image(Canvas(2, 2), path)
        assert path.exists()

    def test_save_image_unknown_extension(self, tmp_path):
        from src.whitted.preview.canvas import Canvas
        from src.whitted.preview.export import save_image

        with pytest.raises(ValueError):
            save_image(Canvas(2, 2), tmp_path / "out.jpg")
