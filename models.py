from dataclasses import dataclass, field
from math import sqrt

import config
from errors import InvalidInputError


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @classmethod
    def coerce(cls, value):
        """Accept a Point, an (x, y) pair, a {"x", "y"} mapping or anything with x/y attributes."""
        if isinstance(value, cls):
            return value
        if value is None:
            raise InvalidInputError("Point is required")
        if isinstance(value, dict):
            try:
                return cls(float(value["x"]), float(value["y"]))
            except KeyError as exc:
                raise InvalidInputError(f"Point mapping missing key {exc}") from None
        if isinstance(value, (tuple, list)):
            if len(value) != 2:
                raise InvalidInputError(f"Point sequence must have 2 items, got {len(value)}")
            return cls(float(value[0]), float(value[1]))
        try:
            return cls(float(value.x), float(value.y))
        except AttributeError:
            raise InvalidInputError(f"Cannot interpret {value!r} as a point") from None

    def distance(self, other):
        return sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def __repr__(self):
        return f"Point({self.x:g}, {self.y:g})"


@dataclass(frozen=True)
class PointPair:
    source: Point
    target: Point

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(Point.coerce(value.get("source")), Point.coerce(value.get("target")))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(Point.coerce(value[0]), Point.coerce(value[1]))
        try:
            return cls(Point.coerce(value.source), Point.coerce(value.target))
        except AttributeError:
            raise InvalidInputError(f"Cannot interpret {value!r} as a point pair") from None


@dataclass(frozen=True)
class Bounds:
    width: float
    height: float

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        if value is None:
            raise InvalidInputError("Bounds are required")
        if isinstance(value, dict):
            try:
                return cls(float(value["width"]), float(value["height"]))
            except KeyError as exc:
                raise InvalidInputError(f"Bounds mapping missing key {exc}") from None
        try:
            return cls(float(value.width), float(value.height))
        except AttributeError:
            raise InvalidInputError(f"Cannot interpret {value!r} as bounds") from None


@dataclass(frozen=True)
class AffineMatrix:
    """Affine transform x' = a*x + b*y + e, y' = c*x + d*y + f."""

    a: float
    b: float
    c: float
    d: float
    e: float
    f: float

    @classmethod
    def identity(cls):
        return cls(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @property
    def determinant(self):
        return self.a * self.d - self.b * self.c

    def as_dict(self):
        return {"a": self.a, "b": self.b, "c": self.c, "d": self.d, "e": self.e, "f": self.f}

    def __repr__(self):
        return (
            f"AffineMatrix(a={self.a:.6g}, b={self.b:.6g}, c={self.c:.6g}, "
            f"d={self.d:.6g}, e={self.e:.6g}, f={self.f:.6g})"
        )


@dataclass(frozen=True)
class EstimationResult:
    """Outcome of an affine fit: either a fitted matrix or the degenerate sentinel."""

    matrix: AffineMatrix
    determinant: float
    is_degenerate: bool

    @classmethod
    def fitted(cls, matrix):
        det = matrix.determinant
        return cls(matrix, det, abs(det) < config.SINGULAR_EPSILON)

    @classmethod
    def degenerate(cls):
        return cls(AffineMatrix.identity(), 0.0, True)


@dataclass(frozen=True)
class AnomalyReport:
    has_negative_determinant: bool
    has_extreme_scale: bool
    has_extreme_shear: bool
    is_degenerate: bool
    scale_factors: Point
    shear_factor: float
    determinant: float
    rotation_degrees: float

    @property
    def has_anomalies(self):
        return (
            self.has_negative_determinant
            or self.has_extreme_scale
            or self.has_extreme_shear
            or self.is_degenerate
        )


@dataclass(frozen=True)
class DistributionReport:
    is_valid: bool
    warning: str = None
    area_ratio: float = 1.0


@dataclass(frozen=True)
class PointSuggestion:
    x: float
    y: float
    reason: str

    def __repr__(self):
        return f"PointSuggestion(({self.x:g}, {self.y:g}), {self.reason!r})"


@dataclass(frozen=True)
class FitAssessment:
    rmse: float
    grade: str
    anomalies: AnomalyReport
    warnings: tuple = field(default_factory=tuple)

    @property
    def is_acceptable(self):
        return self.grade != "error" and not self.anomalies.is_degenerate


@dataclass(frozen=True)
class MigrationResult:
    points: tuple
    out_of_bounds: tuple = field(default_factory=tuple)

    def __repr__(self):
        return f"MigrationResult(points={len(self.points)}, out_of_bounds={len(self.out_of_bounds)})"
