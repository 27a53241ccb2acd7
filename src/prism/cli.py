"""Command-line renderer for scene description files.

Usage:
    prism-render SCENE [options]
    python -m prism.cli SCENE [options]

Options:
    --width WIDTH       Override the scene's image width
    --height HEIGHT     Override the scene's image height
    --output OUTPUT     Output file, .ppm or .png (default: render.ppm)
    --workers N         Worker processes for rendering (default: 1)
    --bounces N         Reflection/refraction depth (default: 5)
    --cpu               Run Taichi on the CPU backend
    --show              Open a preview window when done
    --quiet             Suppress progress output

Example:
    prism-render examples/scenes/three_spheres.json --width 400 --height 200 \\
        --output spheres.png --workers 4
"""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import taichi as ti

from prism.camera.camera import ProgressCallback
from prism.scene.world import DEFAULT_REMAINING


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="prism-render",
        description="Render a JSON scene description to a PPM or PNG image.",
        epilog="Scene files are described in prism.scene.config.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("scene", help="Path to the scene description (JSON)")

    size = parser.add_argument_group("image")
    size.add_argument("--width", type=int, help="Image width in pixels (default: from the scene)")
    size.add_argument("--height", type=int, help="Image height in pixels (default: from the scene)")
    size.add_argument(
        "--output",
        default="render.ppm",
        help="Output file; the extension picks the format (default: render.ppm)",
    )

    tracing = parser.add_argument_group("rendering")
    tracing.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes rendering rows in parallel (default: 1)",
    )
    tracing.add_argument(
        "--bounces",
        type=int,
        default=DEFAULT_REMAINING,
        help=f"Maximum reflection/refraction depth (default: {DEFAULT_REMAINING})",
    )
    tracing.add_argument("--cpu", action="store_true", help="Skip the GPU and run Taichi on the CPU")

    parser.add_argument("--show", action="store_true", help="Open a Matplotlib preview when done")
    parser.add_argument("--quiet", action="store_true", help="Print nothing but errors")
    return parser.parse_args(argv)


def init_taichi(cpu: bool = False, quiet: bool = False) -> str:
    """Initialize Taichi for the export kernel.

    Tries the GPU backend unless ``cpu`` is set, falling back to the CPU
    when no GPU backend can be created.

    Returns:
        The backend actually used, "gpu" or "cpu".
    """
    backend = "cpu"
    if not cpu:
        try:
            ti.init(arch=ti.gpu)
            backend = "gpu"
        except Exception:
            backend = "cpu"
    if backend == "cpu":
        ti.init(arch=ti.cpu)

    if not quiet:
        print(f"Using {backend.upper()} backend")
    return backend


def _progress_printer(start_time: float) -> ProgressCallback:
    """Progress hook that rewrites a single console line with an ETA."""

    def report(rows_done: int, total_rows: int) -> None:
        elapsed = time.time() - start_time
        percent = 100.0 * rows_done / total_rows
        eta = elapsed / rows_done * (total_rows - rows_done) if rows_done else 0.0
        print(
            f"\r  Rendering: {rows_done}/{total_rows} rows ({percent:5.1f}%), ETA {eta:5.1f}s",
            end="",
            flush=True,
        )

    return report


def render_scene(
    scene_path: str | Path,
    output_path: str | Path = "render.ppm",
    width: int | None = None,
    height: int | None = None,
    workers: int = 1,
    bounces: int = DEFAULT_REMAINING,
    quiet: bool = False,
    show: bool = False,
) -> Path:
    """Load, render and save one scene.

    Args:
        scene_path: Path to the JSON scene description.
        output_path: Output file; the extension picks the format.
        width: Overrides the scene's image width.
        height: Overrides the scene's image height.
        workers: Number of worker processes.
        bounces: Recursion depth for reflection and refraction.
        quiet: If True, print nothing.
        show: If True, open a preview window after saving.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If the scene description or output format is invalid.
        OSError: If the scene cannot be read or the image cannot be written.
    """
    from prism.preview.display import show_preview
    from prism.preview.export import save_canvas
    from prism.scene.config import load_scene

    world, camera = load_scene(scene_path, width, height)
    if not quiet:
        print(
            f"Scene {scene_path}: {len(world.objects)} objects, "
            f"{camera.hsize}x{camera.vsize} pixels, {bounces} bounces, {workers} worker(s)"
        )

    start_time = time.time()
    canvas = camera.render(
        world,
        workers=workers,
        callback=None if quiet else _progress_printer(start_time),
        remaining=bounces,
    )
    render_time = time.time() - start_time

    output_file = Path(output_path)
    save_canvas(canvas, output_file)
    if not quiet:
        print()
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {render_time:.2f}s")

    if show:
        show_preview(canvas, title=output_file.name)
    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    init_taichi(cpu=args.cpu, quiet=args.quiet)

    try:
        render_scene(
            args.scene,
            args.output,
            width=args.width,
            height=args.height,
            workers=args.workers,
            bounces=args.bounces,
            quiet=args.quiet,
            show=args.show,
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
