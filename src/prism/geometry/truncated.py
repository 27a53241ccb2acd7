"""Common base for shapes of revolution around the local y axis.

Cylinders and cones are infinite by default. ``minimum`` and ``maximum``
cut them at two heights (both limits exclusive for the wall), and
``closed`` adds flat end caps in the planes y = minimum and y = maximum.
A cap is hit when the ray crosses its plane within the shape's radius at
that height.
"""

from __future__ import annotations

import math

from prism.core.matrix import Matrix
from prism.core.ray import Ray
from prism.core.tuples import EPSILON, Point, Vector
from prism.geometry.shape import Shape
from prism.materials.material import Material
from prism.scene.intersection import Intersection


class TruncatedShape(Shape):
    """A y-axis shape of revolution with optional cuts and caps.

    Attributes:
        minimum: Lower y cut (exclusive); -inf for no cut.
        maximum: Upper y cut (exclusive); +inf for no cut.
        closed: Whether the cut ends are capped.
    """

    def __init__(
        self,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        super().__init__(transform, material)
        self.minimum = minimum
        self.maximum = maximum
        self.closed = closed

    def cap_radius_squared(self, y: float) -> float:
        """Squared radius of the shape at height ``y``."""
        raise NotImplementedError

    def _wall_hits(self, ray: Ray, *ts: float) -> list[Intersection]:
        xs = []
        for t in ts:
            y = ray.origin.y + t * ray.direction.y
            if self.minimum < y < self.maximum:
                xs.append(Intersection(t, self))
        return xs

    def _check_cap(self, ray: Ray, t: float, y: float) -> bool:
        x = ray.origin.x + t * ray.direction.x
        z = ray.origin.z + t * ray.direction.z
        return x * x + z * z <= self.cap_radius_squared(y)

    def _cap_hits(self, ray: Ray) -> list[Intersection]:
        # Caps only matter on a closed shape that the ray can cross vertically
        if not self.closed or abs(ray.direction.y) < EPSILON:
            return []

        xs = []
        for y in (self.minimum, self.maximum):
            t = (y - ray.origin.y) / ray.direction.y
            if self._check_cap(ray, t, y):
                xs.append(Intersection(t, self))
        return xs

    def _cap_normal(self, point: Point) -> Vector | None:
        dist = point.x * point.x + point.z * point.z
        if dist < self.cap_radius_squared(point.y):
            if point.y >= self.maximum - EPSILON:
                return Vector(0.0, 1.0, 0.0)
            if point.y <= self.minimum + EPSILON:
                return Vector(0.0, -1.0, 0.0)
        return None
