"""Unit tests for the pinhole camera module.

Tests cover:
- Pixel size for horizontal and vertical canvases
- Ray generation through the center and corner of the canvas
- Rays from a transformed camera
- Rendering the default world, with progress callbacks
- Validation of dimensions, field of view and transforms
"""

import math

import pytest


class TestCameraSetup:
    """Tests for camera construction."""

    def test_defaults(self):
        """Test that a new camera has the identity transform."""
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.matrix import identity

        camera = Camera(160, 120, math.pi / 2)
        assert camera.hsize == 160
        assert camera.vsize == 120
        assert camera.field_of_view == math.pi / 2
        assert camera.transform == identity()

    def test_pixel_size_horizontal_canvas(self):
        """Test pixel size when the image is wider than tall."""
        from src.whitted.camera.pinhole import Camera

        camera = Camera(200, 125, math.pi / 2)
        assert abs(camera.pixel_size - 0.01) < 1e-5

    def test_pixel_size_vertical_canvas(self):
        """Test pixel size when the image is taller than wide."""
        from src.whitted.camera.pinhole import Camera

        camera = Camera(125, 200, math.pi / 2)
        assert abs(camera.pixel_size - 0.01) < 1e-5

    @pytest.mark.parametrize("hsize,vsize", [(0, 10), (10, 0), (-5, 10)])
    def test_invalid_dimensions(self, hsize, vsize):
        from src.whitted.camera.pinhole import Camera

        with pytest.raises(ValueError):
            Camera(hsize, vsize, math.pi / 2)

    @pytest.mark.parametrize("fov", [0.0, math.pi, -1.0, 4.0])
    def test_invalid_field_of_view(self, fov):
        from src.whitted.camera.pinhole import Camera

        with pytest.raises(ValueError):
            Camera(10, 10, fov)

    def test_singular_transform_leaves_camera_unchanged(self):
        """Test that a rejected view transform keeps the previous one."""
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.matrix import scaling, translation

        camera = Camera(10, 10, math.pi / 2, translation(0, 0, -5))
        with pytest.raises(ValueError):
            camera.transform = scaling(0, 1, 1)
        assert camera.transform == translation(0, 0, -5)
        assert camera.inverse == translation(0, 0, 5)


class TestRayForPixel:
    """Tests for primary ray generation."""

    def test_center_of_canvas(self):
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.tuples import Point, Vector

        ray = Camera(201, 101, math.pi / 2).ray_for_pixel(100, 50)
        assert ray.origin == Point(0, 0, 0)
        assert ray.direction == Vector(0, 0, -1)

    def test_corner_of_canvas(self):
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.tuples import Point, Vector

        ray = Camera(201, 101, math.pi / 2).ray_for_pixel(0, 0)
        assert ray.origin == Point(0, 0, 0)
        assert ray.direction == Vector(0.66519, 0.33259, -0.66851)

    def test_transformed_camera(self):
        """Test that the camera transform moves and turns every ray."""
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.matrix import rotation_y, translation
        from src.whitted.core.tuples import Point, Vector

        camera = Camera(201, 101, math.pi / 2)
        camera.transform = rotation_y(math.pi / 4) @ translation(0, -2, 5)
        ray = camera.ray_for_pixel(100, 50)
        s = math.sqrt(2) / 2
        assert ray.origin == Point(0, 2, -5)
        assert ray.direction == Vector(s, 0, -s)

    def test_directions_are_normalized(self):
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.tuples import magnitude

        camera = Camera(32, 18, math.pi / 3)
        for px, py in [(0, 0), (31, 0), (0, 17), (31, 17), (16, 9)]:
            assert abs(magnitude(camera.ray_for_pixel(px, py).direction) - 1.0) < 1e-6


class TestRender:
    """Tests for rendering a world through the camera."""

    def _camera(self):
        from src.whitted.camera.pinhole import Camera
        from src.whitted.core.matrix import view_transform
        from src.whitted.core.tuples import Point, Vector

        return Camera(
            11,
            11,
            math.pi / 2,
            view_transform(Point(0, 0, -5), Point(0, 0, 0), Vector(0, 1, 0)),
        )

    def test_render_default_world(self):
        """Test the color of the center pixel of the reference scene."""
        from src.whitted.scene.world import default_world

        canvas = self._camera().render(default_world())
        assert canvas.width == 11
        assert canvas.height == 11
        color = canvas.pixel_at(5, 5)
        assert abs(color.red - 0.38066) < 1e-4
        assert abs(color.green - 0.47583) < 1e-4
        assert abs(color.blue - 0.2855) < 1e-4

    def test_render_reports_progress(self):
        """Test that the callback runs once per row, in order."""
        from src.whitted.scene.world import default_world

        calls = []
        self._camera().render(
            default_world(), callback=lambda done, total: calls.append((done, total))
        )
        assert calls == [(row, 11) for row in range(1, 12)]

    def test_render_empty_world_is_background(self):
        import numpy as np

        from src.whitted.core.color import Color
        from src.whitted.scene.world import World

        canvas = self._camera().render(World(background=Color(0.2, 0.3, 0.4)))
        assert np.allclose(canvas.to_numpy(), [0.2, 0.3, 0.4], atol=1e-6)
