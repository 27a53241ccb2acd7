"""Affine transformations built on top of Matrix.

A Transformation is a 4x4 Matrix with chainable constructors. Each chained
operation is applied *after* the ones before it, so reading a chain left
to right gives the order in which the operations act on a point:

    >>> from math import pi
    >>> from prism.core.transform import Transformation
    >>> from prism.core.tuples import Point
    >>> t = Transformation().rotate_x(pi / 2).scaling(5, 5, 5).translation(10, 5, 7)
    >>> t * Point(1, 0, 1)
    Point(x=15.0, y=0.0, z=7.0)

Internally every step computes ``new_operation * accumulated``.
"""

from __future__ import annotations

import math

import numpy as np

from prism.core.matrix import Matrix
from prism.core.tuples import Point, Vector


def translation_matrix(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling_matrix(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x_matrix(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y_matrix(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z_matrix(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing_matrix(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear matrix; ``xy`` moves x in proportion to y, and so on."""
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


class Transformation(Matrix):
    """A chainable 4x4 affine transformation.

    ``Transformation()`` is the identity. Every builder method returns a new
    Transformation; the receiver is never modified.
    """

    __slots__ = ()

    def __init__(self, rows=None) -> None:
        super().__init__(np.identity(4) if rows is None else rows)
        if self.size != 4:
            raise ValueError(f"Transformation must be 4x4, got {self.size}x{self.size}")

    def __repr__(self) -> str:
        return f"Transformation({self.data.tolist()!r})"

    def then(self, operation: Matrix) -> Transformation:
        """Apply ``operation`` after everything accumulated so far."""
        return Transformation(operation.data @ self.data)

    def translation(self, x: float, y: float, z: float) -> Transformation:
        return self.then(translation_matrix(x, y, z))

    def scaling(self, x: float, y: float, z: float) -> Transformation:
        return self.then(scaling_matrix(x, y, z))

    def rotate_x(self, radians: float) -> Transformation:
        return self.then(rotation_x_matrix(radians))

    def rotate_y(self, radians: float) -> Transformation:
        return self.then(rotation_y_matrix(radians))

    def rotate_z(self, radians: float) -> Transformation:
        return self.then(rotation_z_matrix(radians))

    def shearing(
        self, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float
    ) -> Transformation:
        return self.then(shearing_matrix(xy, xz, yx, yz, zx, zy))


def view_transform(from_point: Point, to_point: Point, up: Vector) -> Transformation:
    """Orient the world relative to an eye.

    Builds an orthonormal basis from the viewing direction and the
    approximate up vector, then moves the scene so the eye sits at the
    origin looking down -z.

    Args:
        from_point: Eye position.
        to_point: Point the eye looks at.
        up: Approximate up direction; need not be normalized or exactly
            perpendicular to the view direction.

    Returns:
        The view Transformation.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transformation(
        (orientation * translation_matrix(-from_point.x, -from_point.y, -from_point.z)).data
    )


class Transformable:
    """Base for objects placed in space by a Transformation.

    The inverse is computed on first use and cached until ``transform`` is
    reassigned. Scenes are built once and then only read, so in practice
    each object inverts its matrix a single time.
    """

    def __init__(self, transform: Matrix | None = None) -> None:
        self.transform = transform if transform is not None else Transformation()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix) -> None:
        self._transform = value
        self._inverse: Matrix | None = None
        self._inverse_transpose: Matrix | None = None

    @property
    def inverse(self) -> Matrix:
        """Inverse of ``transform``.

        Raises:
            ValueError: If the transform is not invertible. The message names
                the offending object.
        """
        if self._inverse is None:
            try:
                self._inverse = self._transform.inverse()
            except ValueError as err:
                raise ValueError(f"{self!r} has a non-invertible transform") from err
        return self._inverse

    @property
    def inverse_transpose(self) -> Matrix:
        """Transpose of ``inverse``, used to carry normals back out of local space."""
        if self._inverse_transpose is None:
            self._inverse_transpose = self.inverse.transpose()
        return self._inverse_transpose
