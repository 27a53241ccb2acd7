"""RGB color arithmetic.

Colors are unclamped floats: intermediate shading results may exceed 1.0
or go negative. Clamping to a displayable range happens only when the
canvas is quantized for output (see prism.preview.export).
"""

from __future__ import annotations

from dataclasses import dataclass

from prism.core.tuples import float_eq


@dataclass(frozen=True, eq=False)
class Color:
    """A linear RGB color.

    Attributes:
        red: Red component.
        green: Green component.
        blue: Blue component.
    """

    red: float
    green: float
    blue: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            float_eq(self.red, other.red)
            and float_eq(self.green, other.green)
            and float_eq(self.blue, other.blue)
        )

    def __add__(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other):
        # Hadamard product for colors, plain scaling for numbers
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, scalar: float) -> Color:
        return Color(self.red * scalar, self.green * scalar, self.blue * scalar)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
