"""Infinite plane primitive: the xz-plane through the local origin."""

from __future__ import annotations

from prism.core.ray import Ray
from prism.core.tuples import EPSILON, Point, Vector
from prism.geometry.shape import Shape
from prism.scene.intersection import Intersection

_UP = Vector(0.0, 1.0, 0.0)


class Plane(Shape):
    """An infinite xz-plane with normal +y everywhere."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        # A ray parallel to (or lying in) the plane never meets it
        if abs(ray.direction.y) < EPSILON:
            return []
        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, point: Point) -> Vector:
        return _UP
