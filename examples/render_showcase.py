#!/usr/bin/env python3
"""Render the showcase scene.

This script demonstrates end-to-end rendering with the whitted ray tracer.
It builds the showcase scene (checkered floor, CSG solid, grouped cylinders
and cones, glass and mirror spheres, two lights), renders one ray per pixel
and saves the result as PNG or PPM depending on the output extension.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 225)
    --depth DEPTH       Reflection/refraction recursion depth (default: 5)
    --output OUTPUT     Output file path, .png or .ppm (default: showcase.png)
    --obj PATH          Optional OBJ mesh to place in the scene
    --gamma GAMMA       Gamma correction for PNG output (default: 1.0)
    --quiet             Suppress progress output

Example:
    python -m examples.render_showcase --width 160 --height 90 --output showcase.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=225,
        help="Image height in pixels (default: 225)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Reflection/refraction recursion depth (default: 5)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.png",
        help="Output file path, .png or .ppm (default: showcase.png)",
    )
    parser.add_argument(
        "--obj",
        type=str,
        default=None,
        help="Optional OBJ mesh to place in the scene",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma correction for PNG output (default: 1.0)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_showcase(
    width: int = 400,
    height: int = 225,
    depth: int = 5,
    output_path: str = "showcase.png",
    obj_path: str | None = None,
    gamma: float = 1.0,
    quiet: bool = False,
) -> Path:
    """Render the showcase scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Recursion budget for reflected and refracted rays.
        output_path: Output file path (.png or .ppm).
        obj_path: Optional OBJ file; its mesh is normalized to the unit
            cube and placed on the floor in front of the camera.
        gamma: Gamma correction applied to PNG output.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.core.color import Color
    from src.whitted.core.matrix import chain, scaling, translation
    from src.whitted.materials.material import Material
    from src.whitted.preview.export import save_image
    from src.whitted.scene.mesh import load_obj
    from src.whitted.scene.showcase import create_showcase_scene

    if not quiet:
        print(f"Creating showcase scene ({width}x{height})...")

    world, camera = create_showcase_scene(width, height)

    if obj_path is not None:
        result = load_obj(obj_path, normalize=True)
        if not quiet:
            print(f"Loaded {obj_path} ({len(result.vertices)} vertices)")
        mesh = result.to_group(
            transform=chain(scaling(0.6, 0.6, 0.6), translation(-1.0, 0.6, -3.0)),
            material=Material(color=Color(0.6, 0.7, 0.4), specular=0.4),
        )
        mesh.divide(8)
        world.add(mesh)

    if not quiet:
        print(f"Rendering with recursion depth {depth}...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    canvas = camera.render(world, depth=depth, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_image(canvas, output_file, gamma=gamma)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Tracing runs in Python; Taichi only holds the pixel buffer
    ti.init(arch=ti.cpu)

    try:
        render_showcase(
            width=args.width,
            height=args.height,
            depth=args.depth,
            output_path=args.output,
            obj_path=args.obj,
            gamma=args.gamma,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
