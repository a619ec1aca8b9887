import logging

import numpy as np

import config
from errors import InvalidInputError, SingularMatrixError
from linalg import solve_normal_equations
from models import AffineMatrix, EstimationResult, Point, PointPair

logger = logging.getLogger(__name__)


def calculate_affine_matrix(source_points, target_points):
    """Least-squares affine transform mapping source points onto target points.

    Fits: [x']   = [a b e] @ [x]
          [y']     [c d f]   [y]
                             [1]

    Requires at least 3 correspondences. Collinear source points do not raise;
    they give EstimationResult.degenerate() (identity matrix, determinant 0).
    """
    if source_points is None or target_points is None:
        raise InvalidInputError("Source and target points are required")
    sources = [Point.coerce(p) for p in source_points]
    targets = [Point.coerce(p) for p in target_points]

    n = len(sources)
    if n != len(targets):
        raise InvalidInputError("Source and target point arrays must have same length")
    if n < 3:
        raise InvalidInputError("Minimum 3 point pairs required")

    A = np.array([[p.x, p.y, 1.0] for p in sources])
    X = np.array([p.x for p in targets])
    Y = np.array([p.y for p in targets])

    params_x = solve_normal_equations(A, X)
    params_y = solve_normal_equations(A, Y)
    if params_x is None or params_y is None:
        logger.warning("Degenerate fit from %d points: source points are collinear", n)
        return EstimationResult.degenerate()

    a, b, e = (float(v) for v in params_x)
    c, d, f = (float(v) for v in params_y)
    result = EstimationResult.fitted(AffineMatrix(a, b, c, d, e, f))
    logger.debug("Fitted %r from %d points (det=%.6g)", result.matrix, n, result.determinant)
    return result


def apply_transform(point, matrix):
    p = Point.coerce(point)
    m = matrix
    return Point(m.a * p.x + m.b * p.y + m.e, m.c * p.x + m.d * p.y + m.f)


def batch_transform(points, matrix):
    """Transform a sequence of points, preserving order and length."""
    pts = [Point.coerce(p) for p in points]
    if not pts:
        return []
    m = matrix
    xy = np.array([[p.x, p.y] for p in pts])
    linear = np.array([[m.a, m.b], [m.c, m.d]])
    out = xy @ linear.T + np.array([m.e, m.f])
    return [Point(float(x), float(y)) for x, y in out]


def inverse_transform(matrix):
    """Analytic inverse of an affine matrix. Raises SingularMatrixError if not invertible."""
    a, b, c, d, e, f = matrix.a, matrix.b, matrix.c, matrix.d, matrix.e, matrix.f
    det = a * d - b * c
    if abs(det) < config.SINGULAR_EPSILON:
        raise SingularMatrixError("Matrix is singular (not invertible)")
    return AffineMatrix(
        d / det,
        -b / det,
        -c / det,
        a / det,
        (b * f - d * e) / det,
        (c * e - a * f) / det,
    )


class AffineGeoref:
    """Stateful wrapper around calculate_affine_matrix for a single calibration.

    Holds the fitted result and per-axis RMS residuals so a caller can fit once
    and then map marker coordinates forwards or backwards.
    """

    def __init__(self):
        self.result = None
        self.residuals_x = None
        self.residuals_y = None
        self._inverse = None

    @property
    def matrix(self):
        return None if self.result is None else self.result.matrix

    def fit(self, pairs):
        """Fit from a list of PointPair objects (or (source, target) tuples)."""
        pairs = [PointPair.coerce(p) for p in pairs]
        self.result = calculate_affine_matrix(
            [p.source for p in pairs], [p.target for p in pairs]
        )
        self._inverse = None

        fitted = batch_transform([p.source for p in pairs], self.result.matrix)
        dx = np.array([q.x - p.target.x for q, p in zip(fitted, pairs)])
        dy = np.array([q.y - p.target.y for q, p in zip(fitted, pairs)])
        self.residuals_x = float(np.sqrt(np.mean(dx ** 2)))
        self.residuals_y = float(np.sqrt(np.mean(dy ** 2)))
        return self.result

    def transform(self, x, y):
        """Map source coordinates to target coordinates."""
        if self.result is None:
            raise RuntimeError("Affine transform not fitted. Call fit() first.")
        p = apply_transform(Point(x, y), self.result.matrix)
        return p.x, p.y

    def inverse(self, x, y):
        """Map target coordinates back to source coordinates."""
        if self.result is None:
            raise RuntimeError("Affine transform not fitted. Call fit() first.")
        if self._inverse is None:
            self._inverse = inverse_transform(self.result.matrix)
        p = apply_transform(Point(x, y), self._inverse)
        return p.x, p.y

    def report(self):
        """Print fit quality."""
        if self.result is None:
            print("Affine Transform: not fitted")
            return
        m = self.result.matrix
        print("Affine Transform:")
        print(f"  x' = {m.a:.6f}*x + {m.b:.6f}*y + {m.e:.2f}")
        print(f"  y' = {m.c:.6f}*x + {m.d:.6f}*y + {m.f:.2f}")
        print(f"  Determinant: {self.result.determinant:.6f}")
        if self.result.is_degenerate:
            print("  WARNING: degenerate transform - reference points may be collinear")
        if self.residuals_x is not None:
            print(f"  X RMS residual: {self.residuals_x:.2f} px")
        if self.residuals_y is not None:
            print(f"  Y RMS residual: {self.residuals_y:.2f} px")
