"""Unit tests for the plane primitive."""

import pytest

from prism.core.ray import Ray
from prism.core.tuples import Point, Vector
from prism.geometry.plane import Plane


class TestPlane:
    """Tests for ray-plane intersection and normals."""

    @pytest.mark.parametrize("point", [Point(0, 0, 0), Point(10, 0, -10), Point(-5, 0, 150)])
    def test_normal_is_constant(self, point):
        """The normal is +y everywhere."""
        assert Plane().local_normal_at(point) == Vector(0, 1, 0)

    @pytest.mark.parametrize("origin_y", [10.0, -3.0, 0.5, 1e-3])
    def test_parallel_ray_misses(self, origin_y):
        """A ray parallel to the plane never hits it."""
        ray = Ray(Point(0, origin_y, 0), Vector(0, 0, 1))
        assert Plane().local_intersect(ray) == []

    def test_coplanar_ray_misses(self):
        """A ray lying in the plane is treated as a miss."""
        assert Plane().local_intersect(Ray(Point(0, 0, 0), Vector(0, 0, 1))) == []

    def test_nearly_parallel_ray_misses(self):
        """Directions within epsilon of the plane count as parallel."""
        ray = Ray(Point(0, 1, 0), Vector(1, 1e-6, 0))
        assert Plane().local_intersect(ray) == []

    def test_ray_from_above(self):
        """A ray coming down hits once."""
        p = Plane()
        xs = p.local_intersect(Ray(Point(0, 1, 0), Vector(0, -1, 0)))
        assert len(xs) == 1
        assert xs[0].t == 1.0
        assert xs[0].object is p

    def test_ray_from_below(self):
        """A ray coming up hits once."""
        p = Plane()
        xs = p.local_intersect(Ray(Point(0, -1, 0), Vector(0, 1, 0)))
        assert len(xs) == 1
        assert xs[0].t == 1.0
