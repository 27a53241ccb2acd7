"""Square matrices backed by NumPy.

The renderer only ever needs 4x4 matrices, but determinant, minor and
cofactor are dimension-parametrized so that the cofactor expansion can
recurse down to its 2x2 base case.

Multiplying a Matrix by a Point treats the point as (x, y, z, 1); a Vector
is treated as (x, y, z, 0), so the translation column never affects it.

Example:
    >>> from prism.core.matrix import Matrix
    >>> m = Matrix([[1, 2], [3, 4]])
    >>> m.determinant()
    -2.0
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from prism.core.tuples import EPSILON, Point, Vector


class Matrix:
    """An immutable n x n matrix of floats.

    Attributes:
        data: The underlying (n, n) float64 array. Treat as read-only.
    """

    __slots__ = ("data",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.NDArray[np.float64]) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        data.setflags(write=False)
        self.data = data

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls(np.identity(size))

    @property
    def size(self) -> int:
        return self.data.shape[0]

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.data[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.data.shape != other.data.shape:
            return False
        return bool(np.allclose(self.data, other.data, rtol=0.0, atol=EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self.data.tolist()!r})"

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return Matrix(self.data @ other.data)
        if isinstance(other, (Point, Vector)):
            if self.size != 4:
                raise ValueError("Only 4x4 matrices can transform points and vectors")
            x, y, z, w = self.data @ np.array(other.as_tuple())
            if isinstance(other, Point):
                return Point(float(x), float(y), float(z))
            return Vector(float(x), float(y), float(z))
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix(self.data.T)

    def submatrix(self, row: int, column: int) -> Matrix:
        """Remove one row and one column."""
        reduced = np.delete(np.delete(self.data, row, axis=0), column, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, column: int) -> float:
        return self.submatrix(row, column).determinant()

    def cofactor(self, row: int, column: int) -> float:
        minor = self.minor(row, column)
        return -minor if (row + column) % 2 else minor

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.size == 1:
            return float(self.data[0, 0])
        if self.size == 2:
            a, b = self.data[0]
            c, d = self.data[1]
            return float(a * d - b * c)
        return float(sum(self.data[0, col] * self.cofactor(0, col) for col in range(self.size)))

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Matrix:
        """Invert the matrix using cofactors.

        Returns:
            The inverse matrix.

        Raises:
            ValueError: If the determinant is exactly zero.
        """
        det = self.determinant()
        if det == 0.0:
            raise ValueError(f"Matrix is not invertible: {self.data.tolist()}")

        n = self.size
        cofactors = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                cofactors[row, col] = self.cofactor(row, col)
        # The inverse is the transposed cofactor matrix scaled by 1/det
        return Matrix(cofactors.T / det)
