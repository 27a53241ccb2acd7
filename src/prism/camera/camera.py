"""Pinhole camera: maps pixels to world-space rays and renders a World.

The camera sits at the origin of its own frame looking down -z, with the
canvas one unit in front of it. The field of view fixes the half-width of
the canvas at that distance:

    half_view = tan(field_of_view / 2)

The longer image side spans the full field of view; the shorter one is
scaled by the aspect ratio. The camera transform is a view transform
(see ``prism.core.transform.view_transform``); its inverse carries
canvas points and the eye into world space.

Rays pass through pixel centers, so pixel (0, 0) is sampled at offset
(0.5, 0.5) from the top-left corner of the canvas.

Example:
    >>> from math import pi
    >>> from prism.camera.camera import Camera
    >>> from prism.core import Vector
    >>> camera = Camera(201, 101, pi / 2)
    >>> camera.ray_for_pixel(100, 50).direction == Vector(0, 0, -1)
    True
"""

from __future__ import annotations

import math
import multiprocessing as mp
from collections.abc import Callable, Generator

from prism.core.color import Color
from prism.core.matrix import Matrix
from prism.core.ray import Ray
from prism.core.transform import Transformable
from prism.core.tuples import Point
from prism.preview.canvas import Canvas
from prism.scene.world import DEFAULT_REMAINING, World

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

_ORIGIN = Point(0.0, 0.0, 0.0)


class Camera(Transformable):
    """A pinhole camera producing a hsize x vsize image.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: Angle, in radians, spanned by the longer image side.
        half_width: Half the canvas width at unit distance.
        half_height: Half the canvas height at unit distance.
        pixel_size: Edge length of one (square) pixel on the canvas.
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
            transform: View transform; identity by default.

        Raises:
            ValueError: If either image dimension is not positive.
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        super().__init__(transform)
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
        self.pixel_size = self.half_width * 2.0 / hsize

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view})"
        )

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """World-space ray from the eye through the center of a pixel.

        Args:
            px: Column, 0 at the left.
            py: Row, 0 at the top.

        Returns:
            A ray with a normalized direction.

        Raises:
            ValueError: If the camera transform is not invertible.
        """
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        inverse = self.inverse
        pixel = inverse * Point(world_x, world_y, -1.0)
        origin = inverse * _ORIGIN
        direction = (pixel - origin).normalize()
        return Ray(origin, direction)

    def render_rows(
        self,
        world: World,
        rows: range | None = None,
        remaining: int = DEFAULT_REMAINING,
    ) -> Generator[tuple[int, list[Color]], None, None]:
        """Render row by row, yielding each finished row.

        Args:
            world: The scene to render.
            rows: Rows to render; all of them by default.
            remaining: Recursion budget for reflection and refraction.

        Yields:
            Tuples of (row index, colors left to right).
        """
        if rows is None:
            rows = range(self.vsize)
        for y in rows:
            yield y, [world.color_at(self.ray_for_pixel(x, y), remaining) for x in range(self.hsize)]

    def render(
        self,
        world: World,
        *,
        workers: int = 1,
        callback: ProgressCallback | None = None,
        remaining: int = DEFAULT_REMAINING,
    ) -> Canvas:
        """Render a World into a new Canvas.

        Pixels are independent, so with ``workers > 1`` rows are split into
        chunks and rendered by a process pool. The camera and world are
        pickled once per chunk and only read by the workers.

        Args:
            world: The scene to render.
            workers: Number of worker processes. 1 renders in this process.
            callback: Optional progress hook called as rows complete.
                Receives (rows_done, total_rows).
            remaining: Recursion budget for reflection and refraction.

        Returns:
            A hsize x vsize Canvas.

        Example:
            >>> def progress(done, total):
            ...     print(f"{done}/{total} rows")
            >>> canvas = camera.render(world, workers=4, callback=progress)
        """
        canvas = Canvas(self.hsize, self.vsize)

        if workers <= 1:
            for done, (y, row) in enumerate(self.render_rows(world, remaining=remaining), 1):
                canvas.write_row(y, row)
                if callback is not None:
                    callback(done, self.vsize)
            return canvas

        # A few chunks per worker keeps the pool busy when rows differ in cost
        rows_per_chunk = max(1, self.vsize // (workers * 4))
        chunks = [
            (self, world, range(start, min(start + rows_per_chunk, self.vsize)), remaining)
            for start in range(0, self.vsize, rows_per_chunk)
        ]

        done = 0
        with mp.Pool(workers) as pool:
            for rendered in pool.imap_unordered(_render_chunk, chunks):
                for y, row in rendered:
                    canvas.write_row(y, row)
                done += len(rendered)
                if callback is not None:
                    callback(done, self.vsize)
        return canvas


def _render_chunk(args: tuple[Camera, World, range, int]) -> list[tuple[int, list[Color]]]:
    """Pool worker: render a contiguous block of rows."""
    camera, world, rows, remaining = args
    return list(camera.render_rows(world, rows, remaining))
