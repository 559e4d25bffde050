"""
Tests for the linear algebra kernel.
"""
import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from co2ensemble.models.linalg import transpose, multiply, multiply_vector, solve
from co2ensemble.core import SingularMatrix, ForecastError


class TestMatrixOperations:
    """Tests for transpose and products."""

    def test_transpose(self):
        """Test transpose of a non-square matrix."""
        result = transpose([[1, 2, 3], [4, 5, 6]])

        np.testing.assert_array_equal(result, [[1, 4], [2, 5], [3, 6]])

    def test_multiply(self):
        """Test matrix product."""
        result = multiply([[1, 2], [3, 4]], [[5, 6], [7, 8]])

        np.testing.assert_array_equal(result, [[19, 22], [43, 50]])

    def test_multiply_shape_mismatch(self):
        """Test that incompatible shapes are rejected."""
        with pytest.raises(ValueError):
            multiply([[1, 2, 3]], [[1, 2, 3]])

    def test_multiply_vector(self):
        """Test matrix-vector product."""
        result = multiply_vector([[1, 2], [3, 4]], [1, 1])

        np.testing.assert_array_equal(result, [3, 7])

    def test_normal_equation_products(self):
        """Test X^T X built from the kernel matches numpy."""
        X = np.array([[1.0, 0.5, 0.25], [1.0, 1.5, 2.25], [1.0, 2.5, 6.25], [1.0, 3.5, 12.25]])

        np.testing.assert_allclose(multiply(transpose(X), X), X.T @ X)


class TestSolve:
    """Tests for Gaussian elimination."""

    def test_two_by_two(self):
        """Test a small well-conditioned system."""
        x = solve([[2, 1], [1, 3]], [3, 5])

        np.testing.assert_allclose(x, [0.8, 1.4])

    def test_requires_pivoting(self):
        """Test a system with a zero in the first pivot position."""
        x = solve([[0, 1], [1, 0]], [2, 3])

        np.testing.assert_allclose(x, [3, 2])

    def test_three_by_three(self):
        """Test a classic 3x3 system."""
        A = [[2, 1, -1], [-3, -1, 2], [-2, 1, 2]]
        b = [8, -11, -3]

        np.testing.assert_allclose(solve(A, b), [2, 3, -1], atol=1e-12)

    def test_input_not_modified(self):
        """Test that the caller's arrays are left untouched."""
        A = np.array([[0.0, 1.0], [1.0, 0.0]])
        b = np.array([2.0, 3.0])
        solve(A, b)

        np.testing.assert_array_equal(A, [[0.0, 1.0], [1.0, 0.0]])
        np.testing.assert_array_equal(b, [2.0, 3.0])

    def test_singular_matrix(self):
        """Test that linearly dependent rows raise SingularMatrix."""
        with pytest.raises(SingularMatrix):
            solve([[1, 2], [2, 4]], [1, 2])

    def test_zero_matrix(self):
        """Test that an all-zero matrix is singular."""
        with pytest.raises(SingularMatrix):
            solve(np.zeros((3, 3)), np.ones(3))

    def test_singular_is_forecast_error(self):
        """Test the error taxonomy."""
        assert issubclass(SingularMatrix, ForecastError)
        assert issubclass(SingularMatrix, ValueError)

    def test_non_square(self):
        """Test that a non-square system is rejected."""
        with pytest.raises(ValueError):
            solve([[1, 2, 3], [4, 5, 6]], [1, 2])

    def test_rhs_shape(self):
        """Test that a mismatched right-hand side is rejected."""
        with pytest.raises(ValueError):
            solve([[1, 0], [0, 1]], [1, 2, 3])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
