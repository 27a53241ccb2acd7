"""Materials module for surface appearance.

Components:
    light: Point light source
    material: Phong material with reflection/refraction parameters
    patterns: Procedural patterns (stripes, rings, checkers, gradient, blend)

Shading follows the Phong model: an ambient term, a Lambertian diffuse
term and a specular highlight, computed per light. Reflection and
refraction are not handled here; the World recurses for those and blends
the results with the direct lighting computed by ``Material.lighting``.
"""

from .light import PointLight
from .material import AIR, DIAMOND, GLASS, VACUUM, WATER, Material
from .patterns import Blend, Checkers, Gradient, Pattern, Rings, Stripes, TestPattern

__all__ = [
    "PointLight",
    "Material",
    "VACUUM",
    "AIR",
    "WATER",
    "GLASS",
    "DIAMOND",
    "Pattern",
    "Stripes",
    "Rings",
    "Checkers",
    "Gradient",
    "Blend",
    "TestPattern",
]
