"""Surface material and the Phong illumination model.

A Material carries the Phong coefficients plus the reflection and
refraction parameters the World uses for recursive shading. Direct
lighting is computed by ``Material.lighting``:

    result = ambient + diffuse + specular

where diffuse and specular drop to black when the point is in shadow or
the light is behind the surface. Colors are not clamped.

Example:
    >>> from prism.materials.material import Material
    >>> from prism.materials.light import PointLight
    >>> from prism.geometry.sphere import Sphere
    >>> from prism.core import Point, Vector, WHITE
    >>> m = Material()
    >>> light = PointLight(Point(0, 0, -10), WHITE)
    >>> m.lighting(Sphere(), light, Point(0, 0, 0), Vector(0, 0, -1), Vector(0, 0, -1))
    Color(red=1.9, green=1.9, blue=1.9)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from prism.core.color import BLACK, WHITE, Color
from prism.core.tuples import Point, Vector
from prism.materials.light import PointLight
from prism.materials.patterns import Pattern

if TYPE_CHECKING:
    from prism.geometry.shape import Shape

# Refractive indices of common media
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.5
DIAMOND = 2.417


@dataclass
class Material:
    """Surface appearance of a shape.

    Attributes:
        color: Base surface color, used when no pattern is set.
        ambient: Phong ambient coefficient.
        diffuse: Phong diffuse coefficient.
        specular: Phong specular coefficient.
        shininess: Phong specular exponent; larger means a tighter highlight.
        reflective: Mirror reflectance in [0, 1]. 0 disables reflection.
        transparency: Transmittance in [0, 1]. 0 disables refraction.
        refractive_index: Index of refraction of the medium (> 0).
        pattern: Optional procedural pattern overriding ``color``.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM
    pattern: Pattern | None = None

    def lighting(
        self,
        obj: Shape,
        light: PointLight,
        point: Point,
        eyev: Vector,
        normalv: Vector,
        in_shadow: bool = False,
    ) -> Color:
        """Shade a surface point lit by a point light.

        Args:
            obj: The shape being shaded (needed to sample a pattern).
            light: The light source.
            point: Surface point in world space.
            eyev: Unit vector from the point toward the eye.
            normalv: Unit surface normal at the point.
            in_shadow: Whether the light is blocked at this point.

        Returns:
            The unclamped Phong color.
        """
        if self.pattern is not None:
            base = self.pattern.pattern_at_shape(obj, point)
        else:
            base = self.color

        effective_color = base * light.intensity
        ambient = effective_color * self.ambient

        lightv = (light.position - point).normalize()
        # Cosine between light and normal; negative means the light is behind
        light_dot_normal = lightv.dot(normalv)
        if in_shadow or light_dot_normal <= 0.0:
            return ambient

        diffuse = effective_color * (self.diffuse * light_dot_normal)

        reflectv = (-lightv).reflect(normalv)
        reflect_dot_eye = reflectv.dot(eyev)
        if reflect_dot_eye <= 0.0:
            specular = BLACK
        else:
            factor = reflect_dot_eye**self.shininess
            specular = light.intensity * (self.specular * factor)

        return ambient + diffuse + specular
