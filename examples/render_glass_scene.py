#!/usr/bin/env python3
"""Render a glass-and-mirrors scene built in code.

This script builds the same kind of scene the JSON files describe, but
directly with the prism API: a checkered floor, a hollow glass sphere
(a glass shell around an air bubble), a mirrored cube and a capped
cylinder inside a rotated group.

Usage:
    python -m examples.render_glass_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 250)
    --workers N         Worker processes (default: 1)
    --output OUTPUT     Output file path (default: glass_scene.png)
    --quiet             Suppress progress output

Example:
    python -m examples.render_glass_scene --width 200 --height 125 --workers 4
"""

from __future__ import annotations

import argparse
import math
import sys
import time

from prism.camera import Camera
from prism.cli import init_taichi
from prism.core import Color, Point, Transformation, Vector, view_transform
from prism.geometry import Cube, Cylinder, Group, Plane, glass_sphere
from prism.materials import AIR, Checkers, Material, PointLight
from prism.preview import save_canvas
from prism.scene import World


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a glass-and-mirrors scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=400, help="Image width (default: 400)")
    parser.add_argument("--height", type=int, default=250, help="Image height (default: 250)")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument(
        "--output",
        type=str,
        default="glass_scene.png",
        help="Output file path (default: glass_scene.png)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def build_world() -> World:
    """Assemble the scene."""
    floor = Plane(
        material=Material(
            pattern=Checkers(Color(0.35, 0.35, 0.35), Color(0.65, 0.65, 0.65)),
            specular=0.0,
            reflective=0.1,
        )
    )

    # Hollow glass: an outer shell with an air pocket inside it
    shell = glass_sphere()
    shell.transform = Transformation().translation(0, 1, 0)
    shell.material = Material(
        color=Color(0.05, 0.05, 0.05),
        ambient=0.02,
        diffuse=0.1,
        specular=1.0,
        shininess=300.0,
        reflective=0.9,
        transparency=0.9,
        refractive_index=1.5,
    )
    bubble = glass_sphere()
    bubble.transform = Transformation().scaling(0.5, 0.5, 0.5).translation(0, 1, 0)
    bubble.material = Material(
        color=Color(0.05, 0.05, 0.05),
        ambient=0.0,
        diffuse=0.0,
        specular=0.9,
        shininess=300.0,
        reflective=0.9,
        transparency=0.9,
        refractive_index=AIR,
    )

    mirror = Cube(
        Transformation().scaling(0.6, 0.6, 0.6).rotate_y(math.pi / 5).translation(2.2, 0.6, 1.5),
        Material(color=Color(0.1, 0.1, 0.15), diffuse=0.2, reflective=0.8),
    )

    pillar = Group(Transformation().rotate_z(0.2).translation(-2.2, 0, 1))
    pillar.add_child(
        Cylinder(
            minimum=0.0,
            maximum=2.0,
            closed=True,
            transform=Transformation().scaling(0.35, 1, 0.35),
            material=Material(color=Color(0.8, 0.35, 0.2), specular=0.4),
        )
    )

    light = PointLight(Point(-5, 8, -6), Color(1, 1, 1))
    return World([floor, shell, bubble, mirror, pillar], light)


def main() -> int:
    """Main entry point."""
    args = parse_args()
    init_taichi(cpu=True, quiet=args.quiet)

    world = build_world()
    camera = Camera(
        args.width,
        args.height,
        math.pi / 3,
        view_transform(Point(0, 2, -6), Point(0, 0.9, 0), Vector(0, 1, 0)),
    )

    start_time = time.time()

    def progress(done: int, total: int) -> None:
        if not args.quiet:
            print(f"\r  Rows: {done}/{total}", end="", flush=True)

    try:
        canvas = camera.render(world, workers=args.workers, callback=progress)
        save_canvas(canvas, args.output)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"\nSaved to: {args.output} in {time.time() - start_time:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
