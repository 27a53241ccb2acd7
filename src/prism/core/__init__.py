"""Core numeric module.

This module contains the value types everything else is built on:

Components:
    tuples: Point and Vector with epsilon comparison
    color: RGB color arithmetic
    matrix: Square matrices with cofactor-expansion inverse
    transform: Chainable affine transformations and the view transform
    ray: Ray data structure

All types here are immutable; they are created and discarded freely
during rendering and are safe to share between worker processes.
"""

from .color import BLACK, WHITE, Color
from .matrix import Matrix
from .ray import Ray
from .transform import (
    Transformable,
    Transformation,
    rotation_x_matrix,
    rotation_y_matrix,
    rotation_z_matrix,
    scaling_matrix,
    shearing_matrix,
    translation_matrix,
    view_transform,
)
from .tuples import EPSILON, Point, Vector, float_eq

__all__ = [
    "EPSILON",
    "float_eq",
    "Point",
    "Vector",
    "Color",
    "BLACK",
    "WHITE",
    "Matrix",
    "Ray",
    "Transformation",
    "Transformable",
    "translation_matrix",
    "scaling_matrix",
    "rotation_x_matrix",
    "rotation_y_matrix",
    "rotation_z_matrix",
    "shearing_matrix",
    "view_transform",
]
