"""Geometry module for shape primitives and groups.

This module provides the shapes a World is built from:

Components:
    shape: Base class handling transforms, identity and parent lookup
    sphere: Unit sphere, plus the glass_sphere helper
    plane: Infinite xz-plane
    cube: Axis-aligned cube from -1 to 1
    cylinder: Radius-1 cylinder along y, optionally truncated and capped
    cone: Double cone along y, optionally truncated and capped
    group: Container applying one transform to many children

Every primitive implements the same two hooks in its local frame:
    xs = shape.local_intersect(local_ray)
    normal = shape.local_normal_at(local_point)
"""

from .cone import Cone
from .cube import Cube
from .cylinder import Cylinder
from .group import Group
from .plane import Plane
from .shape import Shape
from .sphere import Sphere, glass_sphere
from .truncated import TruncatedShape

__all__ = [
    "Shape",
    "Sphere",
    "glass_sphere",
    "Plane",
    "Cube",
    "Cylinder",
    "Cone",
    "TruncatedShape",
    "Group",
]
