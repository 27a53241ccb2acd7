"""Unit tests for matrices.

Tests cover:
- Construction, indexing and approximate equality
- Matrix and matrix-tuple products
- Transpose, submatrix, minor, cofactor and determinant
- Inversion, including the non-invertible case
"""

import numpy as np
import pytest

from prism.core.matrix import Matrix
from prism.core.tuples import Point, Vector

A = Matrix(
    [
        [-5, 2, 6, -8],
        [1, -5, 1, 8],
        [7, 7, -6, -7],
        [1, -3, 7, 4],
    ]
)


class TestMatrixBasics:
    """Tests for construction and comparison."""

    def test_indexing(self):
        """Elements are addressed as [row, column]."""
        m = Matrix([[1, 2, 3, 4], [5.5, 6.5, 7.5, 8.5], [9, 10, 11, 12], [13.5, 14.5, 15.5, 16.5]])
        assert m[0, 3] == 4
        assert m[1, 0] == 5.5
        assert m[3, 2] == 15.5

    def test_non_square_rejected(self):
        """Only square matrices are allowed."""
        with pytest.raises(ValueError, match="square"):
            Matrix([[1, 2, 3], [4, 5, 6]])

    def test_data_is_read_only(self):
        """The backing array cannot be modified in place."""
        m = Matrix.identity()
        with pytest.raises(ValueError):
            m.data[0, 0] = 5.0

    def test_equality_within_epsilon(self):
        """Matrices equal within epsilon compare equal."""
        a = Matrix([[1, 2], [3, 4]])
        assert a == Matrix([[1.00001, 2], [3, 3.99999]])
        assert a != Matrix([[1.1, 2], [3, 4]])

    def test_different_sizes_are_not_equal(self):
        """A 2x2 never equals a 3x3."""
        assert Matrix.identity(2) != Matrix.identity(3)


class TestMatrixProducts:
    """Tests for multiplication."""

    def test_matrix_product(self):
        """Two 4x4 matrices multiply as expected."""
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[-2, 1, 2, 3], [3, 2, 1, -1], [4, 3, 6, 5], [1, 2, 7, 8]])
        expected = Matrix(
            [
                [20, 22, 50, 48],
                [44, 54, 114, 108],
                [40, 58, 110, 102],
                [16, 26, 46, 42],
            ]
        )
        assert a * b == expected

    def test_matrix_times_point(self):
        """A point is treated as (x, y, z, 1)."""
        m = Matrix([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        result = m * Point(1, 2, 3)
        assert isinstance(result, Point)
        assert result == Point(18, 24, 33)

    def test_matrix_times_vector_ignores_translation(self):
        """A vector is treated as (x, y, z, 0)."""
        m = Matrix([[1, 0, 0, 5], [0, 1, 0, 5], [0, 0, 1, 5], [0, 0, 0, 1]])
        assert m * Vector(1, 2, 3) == Vector(1, 2, 3)

    def test_identity_is_neutral(self):
        """Multiplying by the identity changes nothing."""
        assert A * Matrix.identity() == A
        assert Matrix.identity() * Point(1, 2, 3) == Point(1, 2, 3)


class TestDeterminant:
    """Tests for transpose, minors, cofactors and determinants."""

    def test_transpose(self):
        """Rows become columns."""
        m = Matrix([[0, 9, 3, 0], [9, 8, 0, 8], [1, 8, 5, 3], [0, 0, 5, 8]])
        expected = Matrix([[0, 9, 1, 0], [9, 8, 8, 0], [3, 0, 5, 5], [0, 8, 3, 8]])
        assert m.transpose() == expected
        assert Matrix.identity().transpose() == Matrix.identity()

    def test_2x2_determinant(self):
        """ad - bc."""
        assert Matrix([[1, 5], [-3, 2]]).determinant() == 17

    def test_submatrix(self):
        """Removing a row and column shrinks the matrix by one."""
        m = Matrix([[1, 5, 0], [-3, 2, 7], [0, 6, -3]])
        assert m.submatrix(0, 2) == Matrix([[-3, 2], [0, 6]])

    def test_minor_and_cofactor(self):
        """The cofactor flips the minor's sign on odd positions."""
        m = Matrix([[3, 5, 0], [2, -1, -7], [6, -1, 5]])
        assert m.minor(0, 0) == -12
        assert m.cofactor(0, 0) == -12
        assert m.minor(1, 0) == 25
        assert m.cofactor(1, 0) == -25

    def test_3x3_determinant(self):
        """Cofactor expansion of a 3x3."""
        m = Matrix([[1, 2, 6], [-5, 8, -4], [2, 6, 4]])
        assert m.cofactor(0, 0) == 56
        assert m.cofactor(0, 1) == 12
        assert m.cofactor(0, 2) == -46
        assert m.determinant() == -196

    def test_4x4_determinant(self):
        """Cofactor expansion of a 4x4."""
        m = Matrix([[-2, -8, 3, 5], [-3, 1, 7, 3], [1, 2, -9, 6], [-6, 7, 7, -9]])
        assert m.determinant() == pytest.approx(-4071)

    def test_determinant_matches_numpy(self):
        """Cofactor expansion agrees with LU-based determinant."""
        assert A.determinant() == pytest.approx(np.linalg.det(A.data))


class TestInverse:
    """Tests for matrix inversion."""

    def test_invertibility(self):
        """A zero determinant means no inverse."""
        assert Matrix([[6, 4, 4, 4], [5, 5, 7, 6], [4, -9, 3, -7], [9, 1, 7, -6]]).is_invertible()
        assert not Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]]).is_invertible()

    def test_inverse_values(self):
        """Inverse computed from cofactors."""
        inverse = A.inverse()
        assert A.determinant() == pytest.approx(532)
        assert inverse[3, 2] == pytest.approx(-160 / 532)
        assert inverse[2, 3] == pytest.approx(105 / 532)
        expected = Matrix(
            [
                [0.21805, 0.45113, 0.24060, -0.04511],
                [-0.80827, -1.45677, -0.44361, 0.52068],
                [-0.07895, -0.22368, -0.05263, 0.19737],
                [-0.52256, -0.81391, -0.30075, 0.30639],
            ]
        )
        assert inverse == expected

    def test_product_times_inverse_restores(self):
        """C = A * B implies C * inverse(B) = A."""
        b = Matrix([[8, 2, 2, 2], [3, -1, 7, 0], [7, 0, 5, 4], [6, -2, 0, 5]])
        c = A * b
        assert c * b.inverse() == A

    def test_inverse_of_singular_raises(self):
        """A singular matrix cannot be inverted."""
        singular = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        with pytest.raises(ValueError, match="not invertible"):
            singular.inverse()
