"""Canvas: the render target.

A Canvas is a (height, width, 3) float64 buffer of linear, unclamped
colors. The camera writes one pixel at a time; exporters read the whole
buffer with ``to_array`` and do their own clamping.

Example:
    >>> from prism.core import Color
    >>> from prism.preview.canvas import Canvas
    >>> canvas = Canvas(10, 20)
    >>> canvas.write_pixel(2, 3, Color(1.0, 0.0, 0.0))
    >>> canvas.pixel_at(2, 3)
    Color(red=1.0, green=0.0, blue=0.0)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from prism.core.color import Color


class Canvas:
    """A grid of colors addressed by (x, y), origin at the top left.

    Attributes:
        width: Number of columns.
        height: Number of rows.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the pixel at column ``x``, row ``y``.

        Raises:
            ValueError: If (x, y) is outside the canvas.
        """
        self._check(x, y)
        self._pixels[y, x] = color.as_tuple()

    def pixel_at(self, x: int, y: int) -> Color:
        """Read the pixel at column ``x``, row ``y``.

        Raises:
            ValueError: If (x, y) is outside the canvas.
        """
        self._check(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def write_row(self, y: int, colors: Sequence[Color]) -> None:
        """Set a full row at once."""
        self._check(0, y)
        if len(colors) != self.width:
            raise ValueError(f"Row has {len(colors)} pixels, canvas is {self.width} wide")
        self._pixels[y] = [c.as_tuple() for c in colors]

    def to_array(self) -> npt.NDArray[np.float64]:
        """Copy of the buffer, shape (height, width, 3)."""
        return self._pixels.copy()
