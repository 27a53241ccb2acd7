"""Group: a container that applies one transform to many shapes.

A Group has no surface of its own. Intersecting it transforms the ray
into the group's frame and intersects every child there, so a child's
effective transform is the product of all its ancestors' transforms
with its own. Children record the group's id as their ``parent_id``;
normals are resolved back through that chain by ``Shape.normal_at`` when
a World is supplied.

Example:
    >>> from prism.core import Point, Ray, Vector, Transformation
    >>> from prism.geometry.group import Group
    >>> from prism.geometry.sphere import Sphere
    >>> g = Group(Transformation().scaling(2, 2, 2))
    >>> g.add_child(Sphere(Transformation().translation(5, 0, 0)))
    >>> len(g.intersect(Ray(Point(10, 0, -10), Vector(0, 0, 1))))
    2
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from prism.core.matrix import Matrix
from prism.core.ray import Ray
from prism.core.tuples import Point, Vector
from prism.geometry.shape import Shape
from prism.materials.material import Material
from prism.scene.intersection import Intersection


class Group(Shape):
    """A transformable collection of child shapes.

    Attributes:
        children: Child shapes, in insertion order.
    """

    def __init__(
        self,
        transform: Matrix | None = None,
        material: Material | None = None,
        children: Iterable[Shape] = (),
    ) -> None:
        super().__init__(transform, material)
        self.children: list[Shape] = []
        for child in children:
            self.add_child(child)

    def add_child(self, child: Shape) -> None:
        """Adopt a shape, recording this group as its parent."""
        child.parent_id = self.id
        self.children.append(child)

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        xs: list[Intersection] = []
        for child in self.children:
            xs.extend(child.intersect(ray))
        return sorted(xs, key=lambda i: i.t)

    def local_normal_at(self, point: Point) -> Vector:
        raise TypeError("Groups have no surface; normals come from their children")

    def get_object_by_id(self, shape_id: uuid.UUID) -> Shape | None:
        for child in self.children:
            if child.id == shape_id:
                return child
            found = child.get_object_by_id(shape_id)
            if found is not None:
                return found
        return None
