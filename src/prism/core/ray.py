"""Ray data structure.

A ray is an origin point plus a direction vector. The direction is not
required to be unit length: rays transformed into object space by a
scaling transform deliberately keep the scaled direction so that the
parameter ``t`` stays comparable across spaces.

Example:
    >>> from prism.core.ray import Ray
    >>> from prism.core.tuples import Point, Vector
    >>> ray = Ray(Point(2, 3, 4), Vector(1, 0, 0))
    >>> ray.position(2.5)
    Point(x=4.5, y=3.0, z=4.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from prism.core.matrix import Matrix
from prism.core.tuples import Point, Vector


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray.
    """

    origin: Point
    direction: Vector

    def position(self, t: float) -> Point:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with both origin and direction multiplied by ``matrix``."""
        return Ray(matrix * self.origin, matrix * self.direction)
