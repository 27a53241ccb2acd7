"""Shared machinery for every shape primitive.

Each primitive defines its geometry in a canonical local frame (the unit
sphere at the origin, the xz-plane, the [-1, 1] cube, ...). The base class
handles the move between world space and that frame:

- ``intersect`` transforms the world-space ray by the inverse transform
  and delegates to ``local_intersect``.
- ``normal_at`` transforms the point into local space, asks
  ``local_normal_at`` for the local normal and carries it back with the
  inverse transpose, renormalizing at the end.

Shapes nested in groups reference their parent by id only. When a World
is passed to ``normal_at`` the parent chain is resolved through it, so
every ancestor's transform is applied; without a World the shape is
treated as top-level.

Equality and hashing use the shape's id, never its geometry.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from prism.core.matrix import Matrix
from prism.core.ray import Ray
from prism.core.transform import Transformable
from prism.core.tuples import Point, Vector
from prism.materials.material import Material

if TYPE_CHECKING:
    from prism.scene.intersection import Intersection
    from prism.scene.world import World


class Shape(Transformable):
    """Base class for all shapes.

    Attributes:
        id: Unique identity of the shape.
        parent_id: Id of the enclosing Group, or None for top-level shapes.
        material: Surface material.
    """

    def __init__(self, transform: Matrix | None = None, material: Material | None = None) -> None:
        super().__init__(transform)
        self.id = uuid.uuid4()
        self.parent_id: uuid.UUID | None = None
        self.material = material if material is not None else Material()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    # =========================================================================
    # Intersection
    # =========================================================================

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space (or parent-space) ray with the shape.

        Args:
            ray: The ray in the space this shape's transform maps into.

        Returns:
            All intersections, possibly empty. Not necessarily sorted.

        Raises:
            ValueError: If the shape's transform is not invertible.
        """
        return self.local_intersect(ray.transform(self.inverse))

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray already in the shape's local frame."""
        raise NotImplementedError

    # =========================================================================
    # Normals
    # =========================================================================

    def normal_at(self, point: Point, world: World | None = None) -> Vector:
        """Surface normal at a world-space point.

        Args:
            point: Point on the surface in world space.
            world: World used to resolve the chain of parent groups. When
                omitted, the shape is treated as top-level.

        Returns:
            The unit normal in world space.
        """
        if world is None:
            local_point = self.inverse * point
            local_normal = self.local_normal_at(local_point)
            return (self.inverse_transpose * local_normal).normalize()

        local_point = self.world_to_object(point, world)
        local_normal = self.local_normal_at(local_point)
        return self.normal_to_world(local_normal, world)

    def local_normal_at(self, point: Point) -> Vector:
        """Outward normal at a point in the shape's local frame."""
        raise NotImplementedError

    def _parent(self, world: World) -> Shape | None:
        if self.parent_id is None:
            return None
        parent = world.get_object_by_id(self.parent_id)
        if parent is None:
            raise LookupError(f"Parent {self.parent_id} of {self!r} is not in the world")
        return parent

    def world_to_object(self, point: Point, world: World) -> Point:
        """Convert a world-space point into this shape's local frame."""
        parent = self._parent(world)
        if parent is not None:
            point = parent.world_to_object(point, world)
        return self.inverse * point

    def normal_to_world(self, normal: Vector, world: World) -> Vector:
        """Carry a local normal out through this shape and all its ancestors."""
        normal = (self.inverse_transpose * normal).normalize()
        parent = self._parent(world)
        if parent is not None:
            normal = parent.normal_to_world(normal, world)
        return normal

    def get_object_by_id(self, shape_id: uuid.UUID) -> Shape | None:
        """Find a descendant by id. Only containers have descendants."""
        return None
