"""Cylinder primitive of radius 1 around the local y axis.

The wall equation only involves x and z:
    (ox + t*dx)^2 + (oz + t*dz)^2 = 1

so a = dx^2 + dz^2 vanishes for rays parallel to the axis; such rays can
only hit the end caps.
"""

from __future__ import annotations

import math

from prism.core.ray import Ray
from prism.core.tuples import EPSILON, Point, Vector
from prism.geometry.truncated import TruncatedShape
from prism.scene.intersection import Intersection


class Cylinder(TruncatedShape):
    """A radius-1 cylinder, optionally truncated and capped."""

    def cap_radius_squared(self, y: float) -> float:
        return 1.0

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        d, o = ray.direction, ray.origin
        a = d.x * d.x + d.z * d.z
        if abs(a) < EPSILON:
            return self._cap_hits(ray)

        b = 2.0 * o.x * d.x + 2.0 * o.z * d.z
        c = o.x * o.x + o.z * o.z - 1.0
        disc = b * b - 4.0 * a * c
        if disc < 0.0:
            return []

        sqrt_d = math.sqrt(disc)
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
        if t0 > t1:
            t0, t1 = t1, t0

        return self._wall_hits(ray, t0, t1) + self._cap_hits(ray)

    def local_normal_at(self, point: Point) -> Vector:
        cap = self._cap_normal(point)
        if cap is not None:
            return cap
        return Vector(point.x, 0.0, point.z)
