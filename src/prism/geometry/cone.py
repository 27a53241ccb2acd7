"""Double-napped cone with its apex at the local origin.

The surface is x^2 + z^2 = y^2, so the radius at height y is |y|. The
quadratic has a = dx^2 - dy^2 + dz^2, which vanishes when the ray is
parallel to one of the cone's halves. In that case the equation is
linear and yields at most one wall hit; when b vanishes too the ray
misses the wall entirely. The end caps of a closed cone are tested in
every case, so such a ray can still report cap hits.
"""

from __future__ import annotations

import math

from prism.core.ray import Ray
from prism.core.tuples import EPSILON, Point, Vector
from prism.geometry.truncated import TruncatedShape
from prism.scene.intersection import Intersection


class Cone(TruncatedShape):
    """A double cone, optionally truncated and capped."""

    def cap_radius_squared(self, y: float) -> float:
        return y * y

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        d, o = ray.direction, ray.origin
        a = d.x * d.x - d.y * d.y + d.z * d.z
        b = 2.0 * o.x * d.x - 2.0 * o.y * d.y + 2.0 * o.z * d.z
        c = o.x * o.x - o.y * o.y + o.z * o.z

        if abs(a) < EPSILON:
            if abs(b) < EPSILON:
                return self._cap_hits(ray)
            return self._wall_hits(ray, -c / (2.0 * b)) + self._cap_hits(ray)

        disc = b * b - 4.0 * a * c
        if disc < 0.0:
            return self._cap_hits(ray)

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

        y = math.sqrt(point.x * point.x + point.z * point.z)
        if point.y > 0.0:
            y = -y
        return Vector(point.x, y, point.z)
