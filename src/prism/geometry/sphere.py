"""Unit sphere primitive.

The sphere is centered at the origin of its local frame with radius 1;
position and size come from the shape transform.

The ray-sphere intersection solves:
    |origin + t * direction|^2 = 1

Expanding gives the quadratic a*t^2 + b*t + c = 0 with:
    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - 1

A negative discriminant means a miss. Otherwise both roots are returned,
smaller first; a tangent ray yields two equal roots.

Example:
    >>> from prism.core import Point, Ray, Vector
    >>> from prism.geometry.sphere import Sphere
    >>> xs = Sphere().intersect(Ray(Point(0, 1, -5), Vector(0, 0, 1)))
    >>> [i.t for i in xs]
    [5.0, 5.0]
"""

from __future__ import annotations

import math

from prism.core.ray import Ray
from prism.core.tuples import Point, Vector
from prism.geometry.shape import Shape
from prism.materials.material import GLASS, Material
from prism.scene.intersection import Intersection

_ORIGIN = Point(0.0, 0.0, 0.0)


class Sphere(Shape):
    """A unit sphere at the origin of its local frame."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        sphere_to_ray = ray.origin - _ORIGIN

        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return [Intersection(t1, self), Intersection(t2, self)]

    def local_normal_at(self, point: Point) -> Vector:
        return point - _ORIGIN


def glass_sphere() -> Sphere:
    """A fully transparent sphere with the refractive index of glass."""
    return Sphere(material=Material(transparency=1.0, refractive_index=GLASS))
