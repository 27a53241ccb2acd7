"""Scene module for the world, intersections and shading.

This module handles scene representation and ray-scene queries:

Components:
    intersection: Intersection records, hit selection and precomputed
        shading state (including Schlick reflectance)
    world: World container, shadow test and recursive shading
    config: Declarative scene description (JSON or dict)

The world owns its top-level shapes and a single point light. Rendering
only reads the world, so one world can be handed to many workers.

Note: config is NOT imported here to avoid circular imports (it builds
shapes and cameras, which themselves import from this package). Import it
directly:
    >>> from prism.scene.config import load_scene
"""

from .intersection import (
    VACUUM_INDEX,
    Computation,
    Intersection,
    hit,
    intersections,
)
from .world import DEFAULT_REMAINING, World

__all__ = [
    # Intersection module
    "Intersection",
    "Computation",
    "intersections",
    "hit",
    "VACUUM_INDEX",
    # World module
    "World",
    "DEFAULT_REMAINING",
]
