"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole (perspective) camera and the per-pixel render loop

Camera responsibilities:
    - Map pixel (x, y) coordinates to world-space rays through pixel centres
    - Position the eye with a view transform (from, to, up)
    - Drive World.color_at() once per pixel and collect a Canvas
"""

from .pinhole import Camera, ProgressCallback

__all__ = [
    "Camera",
    "ProgressCallback",
]
