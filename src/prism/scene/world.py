"""World: the scene container and the recursive shading pipeline.

A World holds the top-level shapes and at most one point light. Given a
ray it finds the visible hit and shades it:

    color_at -> intersect_world -> hit -> prepare_computations -> shade_hit

``shade_hit`` adds direct Phong lighting (with a shadow test) to the
reflected and refracted contributions. Those two recurse back into
``color_at`` with one bounce fewer; when the budget reaches zero they
return black, which is what bounds the recursion between facing mirrors.

The World is only mutated while the scene is being built. Rendering reads
it and never writes, so it can be shared by worker processes.

Example:
    >>> from prism.core import Color, Point, Ray, Vector
    >>> from prism.scene.world import World
    >>> world = World.default()
    >>> world.color_at(Ray(Point(0, 0, -5), Vector(0, 0, 1))) == Color(0.38066, 0.47583, 0.2855)
    True
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Iterable
from typing import TYPE_CHECKING

from prism.core.color import BLACK, Color
from prism.core.ray import Ray
from prism.core.tuples import Point, float_eq
from prism.materials.light import PointLight
from prism.scene.intersection import Computation, Intersection, hit

if TYPE_CHECKING:
    from prism.geometry.shape import Shape

# Recursion budget for reflection and refraction
DEFAULT_REMAINING = 5


class World:
    """A collection of shapes lit by a single point light.

    Attributes:
        objects: Top-level shapes. Shapes inside groups are reached
            through their group.
        light: The light source, or None while the scene is being built.
    """

    def __init__(
        self,
        objects: Iterable[Shape] = (),
        light: PointLight | None = None,
    ) -> None:
        self.objects: list[Shape] = list(objects)
        self.light = light

    @classmethod
    def default(cls) -> World:
        """The two-sphere reference scene.

        A white light at (-10, 10, -10), an outer unit sphere colored
        (0.8, 1.0, 0.6) with diffuse 0.7 and specular 0.2, and an inner
        default-material sphere scaled by 0.5.
        """
        from prism.core.color import WHITE
        from prism.core.transform import Transformation
        from prism.geometry.sphere import Sphere
        from prism.materials.material import Material

        outer = Sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
        inner = Sphere(Transformation().scaling(0.5, 0.5, 0.5))
        return cls([outer, inner], PointLight(Point(-10.0, 10.0, -10.0), WHITE))

    def add_object(self, shape: Shape) -> None:
        """Add a top-level shape."""
        self.objects.append(shape)

    def get_object_by_id(self, shape_id: uuid.UUID) -> Shape | None:
        """Find a shape anywhere in the scene, including inside groups.

        Returns:
            The shape, or None if no shape has that id.
        """
        for obj in self.objects:
            if obj.id == shape_id:
                return obj
            found = obj.get_object_by_id(shape_id)
            if found is not None:
                return found
        return None

    def _require_light(self) -> PointLight:
        if self.light is None:
            raise RuntimeError("World has no light; set World.light before shading")
        return self.light

    # =========================================================================
    # Queries
    # =========================================================================

    def intersect_world(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every shape, sorted by t."""
        xs: list[Intersection] = []
        for obj in self.objects:
            xs.extend(obj.intersect(ray))
        return sorted(xs, key=lambda i: i.t)

    def is_shadowed(self, point: Point) -> bool:
        """Whether something lies between ``point`` and the light.

        Hits beyond the light do not count.

        Raises:
            RuntimeError: If the World has no light.
        """
        light = self._require_light()
        v = light.position - point
        distance = v.magnitude()
        h = hit(self.intersect_world(Ray(point, v.normalize())))
        return h is not None and h.t < distance

    # =========================================================================
    # Shading
    # =========================================================================

    def shade_hit(self, comps: Computation, remaining: int = DEFAULT_REMAINING) -> Color:
        """Color of a prepared hit, including reflection and refraction.

        Args:
            comps: Shading state from ``Intersection.prepare_computations``.
            remaining: Bounces left for secondary rays.

        Returns:
            The unclamped color.

        Raises:
            RuntimeError: If the World has no light.
        """
        light = self._require_light()
        material = comps.object.material
        surface = material.lighting(
            comps.object,
            light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            self.is_shadowed(comps.over_point),
        )

        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)

        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = comps.schlick()
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)
        return surface + reflected + refracted

    def color_at(self, ray: Ray, remaining: int = DEFAULT_REMAINING) -> Color:
        """Color seen along a ray; black when nothing is hit."""
        xs = self.intersect_world(ray)
        h = hit(xs)
        if h is None:
            return BLACK
        comps = h.prepare_computations(ray, xs, self)
        return self.shade_hit(comps, remaining)

    def reflected_color(self, comps: Computation, remaining: int = DEFAULT_REMAINING) -> Color:
        """Contribution of the mirror reflection at a hit."""
        reflective = comps.object.material.reflective
        if remaining <= 0 or float_eq(reflective, 0.0):
            return BLACK

        reflect_ray = Ray(comps.over_point, comps.reflectv)
        return self.color_at(reflect_ray, remaining - 1) * reflective

    def refracted_color(self, comps: Computation, remaining: int = DEFAULT_REMAINING) -> Color:
        """Contribution of light transmitted through a hit.

        Black under total internal reflection.
        """
        transparency = comps.object.material.transparency
        if remaining <= 0 or float_eq(transparency, 0.0):
            return BLACK

        # Snell's law
        n_ratio = comps.n1 / comps.n2
        cos_i = comps.eyev.dot(comps.normalv)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            return BLACK

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
        refract_ray = Ray(comps.under_point, direction)
        return self.color_at(refract_ray, remaining - 1) * transparency
