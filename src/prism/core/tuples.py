"""Points and vectors in homogeneous 3D space.

A Point is an affine position (w = 1) and a Vector is a direction (w = 0).
The distinction is kept in the type system: subtracting two points yields
a Vector, adding a Vector to a Point yields a Point, and a Matrix
multiplies them differently (translation only moves points).

Components are compared with an epsilon; exact float equality is never
used anywhere in the renderer.

Example:
    >>> from prism.core.tuples import Point, Vector
    >>> p = Point(3.0, 2.0, 1.0)
    >>> v = Vector(5.0, 6.0, 7.0)
    >>> p - v
    Point(x=-2.0, y=-4.0, z=-6.0)
    >>> Vector(4.0, 0.0, 0.0).normalize()
    Vector(x=1.0, y=0.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Tolerance for float comparisons and surface offsets
EPSILON = 1e-4


def float_eq(a: float, b: float) -> bool:
    """Compare two floats within EPSILON.

    Infinities of the same sign compare equal.
    """
    if a == b:
        return True
    return abs(a - b) < EPSILON


@dataclass(frozen=True, eq=False)
class Point:
    """A position in space (homogeneous w = 1)."""

    x: float
    y: float
    z: float

    w = 1.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return float_eq(self.x, other.x) and float_eq(self.y, other.y) and float_eq(self.z, other.z)

    def __add__(self, other: Vector) -> Point:
        if not isinstance(other, Vector):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, 1.0)


@dataclass(frozen=True, eq=False)
class Vector:
    """A direction in space (homogeneous w = 0)."""

    x: float
    y: float
    z: float

    w = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return float_eq(self.x, other.x) and float_eq(self.y, other.y) and float_eq(self.z, other.z)

    def __add__(self, other):
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Point):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector:
        """Scale the vector to unit length.

        Raises:
            ZeroDivisionError: If the vector has zero length.
        """
        return self / self.magnitude()

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector about a unit normal.

        Args:
            normal: The surface normal (should be normalized).

        Returns:
            The reflected vector: v - 2 * (v . n) * n.
        """
        return self - normal * (2.0 * self.dot(normal))

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, 0.0)
