"""Axis-aligned cube primitive spanning [-1, 1] on every local axis.

Intersection uses the slab method: each axis contributes the interval of
t over which the ray lies between the two faces perpendicular to it. The
ray hits the cube when the three intervals overlap, i.e. when the largest
entry t is not past the smallest exit t. A ray parallel to a pair of
faces is either inside that slab for all t or never, with the face planes
themselves counted as inside.
"""

from __future__ import annotations

import math

from prism.core.ray import Ray
from prism.core.tuples import EPSILON, Point, Vector
from prism.geometry.shape import Shape
from prism.scene.intersection import Intersection


def _check_axis(origin: float, direction: float) -> tuple[float, float]:
    tmin_numerator = -1.0 - origin
    tmax_numerator = 1.0 - origin

    if abs(direction) < EPSILON:
        # Parallel to the slab: inside it for every t, or never. An origin on
        # a face counts as inside.
        if -1.0 <= origin <= 1.0:
            return -math.inf, math.inf
        return math.inf, -math.inf

    tmin = tmin_numerator / direction
    tmax = tmax_numerator / direction

    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


class Cube(Shape):
    """An axis-aligned cube from (-1, -1, -1) to (1, 1, 1)."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        xtmin, xtmax = _check_axis(ray.origin.x, ray.direction.x)
        ytmin, ytmax = _check_axis(ray.origin.y, ray.direction.y)
        ztmin, ztmax = _check_axis(ray.origin.z, ray.direction.z)

        tmin = max(xtmin, ytmin, ztmin)
        tmax = min(xtmax, ytmax, ztmax)
        if tmin > tmax:
            return []
        return [Intersection(tmin, self), Intersection(tmax, self)]

    def local_normal_at(self, point: Point) -> Vector:
        abs_x, abs_y, abs_z = abs(point.x), abs(point.y), abs(point.z)
        maxc = max(abs_x, abs_y, abs_z)
        if maxc == abs_x:
            return Vector(point.x, 0.0, 0.0)
        if maxc == abs_y:
            return Vector(0.0, point.y, 0.0)
        return Vector(0.0, 0.0, point.z)
