"""Procedural color patterns.

A pattern maps a point in its own pattern space to a color. Sampling on
a shape goes world space -> object space (inverse shape transform) ->
pattern space (inverse pattern transform), so a pattern moves, scales and
rotates together with the shape it is attached to and can additionally
be transformed on its own.

Band boundaries: every floor-based pattern nudges the coordinate by
+EPSILON before flooring. A coordinate that lands a hair below an
integer through floating-point error (e.g. 0.99999999 on a plane at
y = 1) is therefore treated as that integer, and x = 1.0 exactly is
always in band 1. Python's ``%`` returns a non-negative result for a
positive modulus, so bands alternate correctly for negative coordinates.

Example:
    >>> from prism.materials.patterns import Stripes
    >>> from prism.core import Point, WHITE, BLACK
    >>> p = Stripes(WHITE, BLACK)
    >>> p.pattern_at(Point(-0.1, 0, 0)) == BLACK
    True
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from prism.core.color import BLACK, WHITE, Color
from prism.core.matrix import Matrix
from prism.core.transform import Transformable
from prism.core.tuples import EPSILON, Point

if TYPE_CHECKING:
    from prism.geometry.shape import Shape


def _band(value: float) -> int:
    return math.floor(value + EPSILON)


class Pattern(Transformable):
    """Base class for two-color patterns.

    Attributes:
        a: First color (band 0).
        b: Second color (band 1).
    """

    def __init__(self, a: Color = WHITE, b: Color = BLACK, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def __repr__(self) -> str:
        return f"{type(self).__name__}(a={self.a!r}, b={self.b!r})"

    def pattern_at(self, point: Point) -> Color:
        """Color at a point given in pattern space."""
        raise NotImplementedError

    def pattern_at_shape(self, shape: Shape, world_point: Point) -> Color:
        """Color of ``shape`` at a world-space point.

        Args:
            shape: The shape the pattern is applied to.
            world_point: Point on the shape's surface in world space.

        Returns:
            The pattern color at that point.
        """
        object_point = shape.inverse * world_point
        pattern_point = self.inverse * object_point
        return self.pattern_at(pattern_point)


class Stripes(Pattern):
    """Alternates along x: a on even bands, b on odd bands."""

    def pattern_at(self, point: Point) -> Color:
        return self.a if _band(point.x) % 2 == 0 else self.b


class Rings(Pattern):
    """Concentric rings around the y axis."""

    def pattern_at(self, point: Point) -> Color:
        distance = math.sqrt(point.x * point.x + point.z * point.z)
        return self.a if _band(distance) % 2 == 0 else self.b


class Checkers(Pattern):
    """3D checkerboard of unit cubes."""

    def pattern_at(self, point: Point) -> Color:
        total = _band(point.x) + _band(point.y) + _band(point.z)
        return self.a if total % 2 == 0 else self.b


class Gradient(Pattern):
    """Linear blend from a to b across each unit of x, repeating."""

    def pattern_at(self, point: Point) -> Color:
        fraction = point.x - math.floor(point.x)
        return self.a + (self.b - self.a) * fraction


class Blend(Pattern):
    """Average of two sub-patterns.

    Each sub-pattern is sampled through its own transform, relative to the
    blend's pattern space.
    """

    def __init__(self, first: Pattern, second: Pattern, transform: Matrix | None = None) -> None:
        super().__init__(transform=transform)
        self.first = first
        self.second = second

    def __repr__(self) -> str:
        return f"Blend(first={self.first!r}, second={self.second!r})"

    def pattern_at(self, point: Point) -> Color:
        first = self.first.pattern_at(self.first.inverse * point)
        second = self.second.pattern_at(self.second.inverse * point)
        return (first + second) * 0.5


class TestPattern(Pattern):
    """Returns the pattern-space point itself as a color.

    Used to observe which point a pattern was sampled at.
    """

    __test__ = False  # not a pytest test class

    def pattern_at(self, point: Point) -> Color:
        return Color(point.x, point.y, point.z)
