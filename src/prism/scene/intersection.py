"""Ray-shape intersections and precomputed shading state.

An Intersection is a (t, shape) pair. Intersections are ordered by ``t``
and compare equal when both ``t`` (within epsilon) and the shape identity
match. They only live for the duration of a single ray query.

``Intersection.prepare_computations`` derives a Computation: everything
the World needs to shade a hit (point, eye/normal/reflect vectors, the
offset points used for secondary rays and the refractive indices on both
sides of the surface).

Example:
    >>> from prism.core import Point, Ray, Vector
    >>> from prism.geometry.sphere import Sphere
    >>> from prism.scene.intersection import hit
    >>> s = Sphere()
    >>> xs = s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
    >>> [i.t for i in xs]
    [4.0, 6.0]
    >>> hit(xs).t
    4.0
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prism.core.ray import Ray
from prism.core.tuples import EPSILON, Point, Vector, float_eq

if TYPE_CHECKING:
    from prism.geometry.shape import Shape
    from prism.scene.world import World

# Refractive index used when a ray is not inside any shape
VACUUM_INDEX = 1.0


@dataclass(frozen=True, eq=False)
class Intersection:
    """A point where a ray meets a shape.

    Attributes:
        t: Distance along the ray, in units of the ray's direction.
        object: The shape that was hit.
    """

    t: float
    object: Shape

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return float_eq(self.t, other.t) and self.object == other.object

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: Intersection) -> bool:
        # Raw t; epsilon applies to equality only
        return self.t < other.t

    def prepare_computations(
        self,
        ray: Ray,
        xs: Sequence[Intersection] | None = None,
        world: World | None = None,
    ) -> Computation:
        """Precompute the shading inputs for this intersection.

        Args:
            ray: The ray that produced the intersection.
            xs: Every intersection of ``ray`` with the scene. Needed to work
                out which media the ray is passing between; defaults to just
                this intersection.
            world: World used to resolve parent groups for the normal.

        Returns:
            The Computation for this hit.
        """
        point = ray.position(self.t)
        eyev = -ray.direction
        normalv = self.object.normal_at(point, world)
        inside = False
        if normalv.dot(eyev) < 0.0:
            inside = True
            normalv = -normalv

        n1, n2 = self._refractive_indices(xs if xs is not None else [self])

        return Computation(
            t=self.t,
            object=self.object,
            point=point,
            eyev=eyev,
            normalv=normalv,
            inside=inside,
            over_point=point + normalv * EPSILON,
            under_point=point - normalv * EPSILON,
            reflectv=ray.direction.reflect(normalv),
            n1=n1,
            n2=n2,
        )

    def _refractive_indices(self, xs: Sequence[Intersection]) -> tuple[float, float]:
        # Walk the hits in order, tracking which shapes the ray is inside.
        # A shape leaves the list when the ray exits it, wherever it sits;
        # overlapping refractive volumes are not modeled beyond that.
        containers: list[Shape] = []
        n1 = n2 = VACUUM_INDEX
        for i in sorted(xs, key=_by_t):
            is_self = i == self
            if is_self:
                n1 = containers[-1].material.refractive_index if containers else VACUUM_INDEX

            if i.object in containers:
                containers.remove(i.object)
            else:
                containers.append(i.object)

            if is_self:
                n2 = containers[-1].material.refractive_index if containers else VACUUM_INDEX
                break
        return n1, n2


@dataclass(frozen=True)
class Computation:
    """Shading state for a single hit.

    Attributes:
        t: Distance along the ray.
        object: The shape that was hit.
        point: Hit point in world space.
        eyev: Unit vector toward the eye (the negated ray direction).
        normalv: Unit normal, flipped to face the eye when hit from inside.
        inside: True when the ray hit the surface from inside the shape.
        over_point: ``point`` nudged outward; origin for shadow and
            reflection rays.
        under_point: ``point`` nudged inward; origin for refraction rays.
        reflectv: Ray direction reflected about the normal.
        n1: Refractive index of the medium being exited.
        n2: Refractive index of the medium being entered.
    """

    t: float
    object: Shape
    point: Point
    eyev: Vector
    normalv: Vector
    inside: bool
    over_point: Point
    under_point: Point
    reflectv: Vector
    n1: float
    n2: float

    def schlick(self) -> float:
        """Fresnel reflectance by Schlick's approximation.

        Returns:
            Fraction of light reflected, in [0, 1]. Exactly 1.0 under total
            internal reflection.
        """
        cos = self.eyev.dot(self.normalv)
        if self.n1 > self.n2:
            ratio = self.n1 / self.n2
            sin2_t = ratio * ratio * (1.0 - cos * cos)
            if sin2_t > 1.0:
                return 1.0
            # Use the transmitted angle when going into a less dense medium
            cos = math.sqrt(1.0 - sin2_t)

        r0 = ((self.n1 - self.n2) / (self.n1 + self.n2)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cos) ** 5


def _by_t(i: Intersection) -> float:
    return i.t


def intersections(*xs: Intersection) -> list[Intersection]:
    """Collect intersections into a list sorted by t."""
    return sorted(xs, key=_by_t)


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Select the visible intersection.

    Args:
        xs: Intersections of a single ray, in any order.

    Returns:
        The intersection with the smallest non-negative t, or None when
        every intersection lies behind the ray origin.
    """
    visible = [i for i in xs if i.t >= 0.0]
    if not visible:
        return None
    return min(visible, key=lambda i: i.t)
