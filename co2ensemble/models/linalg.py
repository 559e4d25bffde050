"""
Small dense linear algebra kernel used by polynomial regression.
"""
import numpy as np

from ..core.exceptions import SingularMatrix

# Pivots at or below this fraction of the largest entry are treated as zero
PIVOT_TOLERANCE = 1e-12


def _as_matrix(M) -> np.ndarray:
    M = np.asarray(M, dtype=float)
    if M.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {M.shape}")
    return M


def transpose(M) -> np.ndarray:
    """Transpose of a matrix."""
    M = _as_matrix(M)
    rows, cols = M.shape
    result = np.empty((cols, rows))
    for i in range(rows):
        result[:, i] = M[i, :]
    return result


def multiply(A, B) -> np.ndarray:
    """Matrix product A @ B."""
    A = _as_matrix(A)
    B = _as_matrix(B)
    if A.shape[1] != B.shape[0]:
        raise ValueError(f"Cannot multiply shapes {A.shape} and {B.shape}")

    result = np.zeros((A.shape[0], B.shape[1]))
    for i in range(A.shape[0]):
        for j in range(B.shape[1]):
            result[i, j] = np.sum(A[i, :] * B[:, j])
    return result


def multiply_vector(A, v) -> np.ndarray:
    """Matrix-vector product A @ v."""
    A = _as_matrix(A)
    v = np.asarray(v, dtype=float)
    if v.ndim != 1 or A.shape[1] != v.shape[0]:
        raise ValueError(f"Cannot multiply shape {A.shape} by vector of shape {v.shape}")

    return np.array([np.sum(row * v) for row in A])


def solve(A, b) -> np.ndarray:
    """
    Solve A x = b by Gaussian elimination with partial pivoting.

    Args:
        A: Square coefficient matrix
        b: Right-hand side vector

    Returns:
        Solution vector x

    Raises:
        SingularMatrix: A pivot is zero or negligible relative to A
    """
    A = _as_matrix(A)
    b = np.asarray(b, dtype=float)
    n = A.shape[0]
    if A.shape[1] != n:
        raise ValueError(f"Coefficient matrix must be square, got shape {A.shape}")
    if b.shape != (n,):
        raise ValueError(f"Right-hand side must have shape ({n},), got {b.shape}")

    augmented = np.column_stack([A, b])
    scale = np.max(np.abs(A)) if A.size else 0.0
    threshold = PIVOT_TOLERANCE * scale

    # Forward elimination
    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(augmented[i:, i])))
        if pivot_row != i:
            augmented[[i, pivot_row]] = augmented[[pivot_row, i]]

        pivot = augmented[i, i]
        if scale == 0.0 or abs(pivot) <= threshold:
            raise SingularMatrix(f"Zero pivot in column {i} (|pivot|={abs(pivot):.3g})")

        for k in range(i + 1, n):
            factor = augmented[k, i] / pivot
            augmented[k, i:] -= factor * augmented[i, i:]

    # Back substitution
    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (augmented[i, n] - np.sum(augmented[i, i + 1:n] * x[i + 1:])) / augmented[i, i]

    return x
