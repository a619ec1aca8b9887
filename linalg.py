import numpy as np

import config
from errors import InvalidInputError, SingularMatrixError


def _eliminate(A, b):
    """Gaussian elimination with partial pivoting on a 3x3 system.

    Works on private float copies. Returns the solution vector, or None when a
    pivot falls below SINGULAR_EPSILON after pivoting.
    """
    m = np.array(A, dtype=float)
    v = np.array(b, dtype=float)
    if m.shape != (3, 3) or v.shape != (3,):
        raise InvalidInputError(f"Expected a 3x3 system, got A{m.shape} and b{v.shape}")
    n = 3

    for i in range(n):
        # argmax keeps the first row on ties
        pivot_row = i + int(np.argmax(np.abs(m[i:, i])))
        if pivot_row != i:
            m[[i, pivot_row]] = m[[pivot_row, i]]
            v[[i, pivot_row]] = v[[pivot_row, i]]

        if abs(m[i, i]) < config.SINGULAR_EPSILON:
            return None

        for k in range(i + 1, n):
            factor = m[k, i] / m[i, i]
            v[k] -= factor * v[i]
            m[k, i:] -= factor * m[i, i:]

    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (v[i] - m[i, i + 1:] @ x[i + 1:]) / m[i, i]
    return x


def solve_3x3(A, b):
    """Solve A @ x = b for a 3x3 A. Raises SingularMatrixError for a (nearly) singular A."""
    x = _eliminate(A, b)
    if x is None:
        raise SingularMatrixError("Matrix is singular or nearly singular")
    return x


def solve_normal_equations(A, b):
    """Least-squares solution of A @ x = b via (A^T A) x = A^T b.

    A is N x 3. Returns None instead of raising when A^T A is singular, so the
    caller can report a degenerate fit.
    """
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float)
    AtA = A.T @ A
    Atb = A.T @ b
    return _eliminate(AtA, Atb)
