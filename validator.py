import dataclasses
import logging
from math import atan2, degrees, hypot, sqrt

import config
from georef import apply_transform
from models import AnomalyReport, FitAssessment, Point, PointPair

logger = logging.getLogger(__name__)


def calculate_rmse(pairs, matrix):
    """Root mean square distance between transformed sources and their targets.

    Returns 0.0 for an empty list.
    """
    if not pairs:
        return 0.0
    pairs = [PointPair.coerce(p) for p in pairs]

    total = 0.0
    for pair in pairs:
        moved = apply_transform(pair.source, matrix)
        dx = moved.x - pair.target.x
        dy = moved.y - pair.target.y
        total += dx * dx + dy * dy
    return sqrt(total / len(pairs))


def detect_anomalies(matrix):
    a, b, c, d = matrix.a, matrix.b, matrix.c, matrix.d
    det = a * d - b * c

    # lengths of the transformed unit basis vectors
    scale_x = hypot(a, c)
    scale_y = hypot(b, d)

    # cosine of the angle between transformed axes: 0 orthogonal, 1 parallel
    if scale_x == 0 or scale_y == 0:
        shear = 0.0
    else:
        shear = abs(a * b + c * d) / (scale_x * scale_y)

    rotation = degrees(atan2(c, a))

    return AnomalyReport(
        has_negative_determinant=det < 0,
        has_extreme_scale=(
            scale_x > config.MAX_SCALE
            or scale_y > config.MAX_SCALE
            or scale_x < config.MIN_SCALE
            or scale_y < config.MIN_SCALE
        ),
        has_extreme_shear=shear > config.MAX_SHEAR,
        is_degenerate=abs(det) < config.SINGULAR_EPSILON,
        scale_factors=Point(scale_x, scale_y),
        shear_factor=shear,
        determinant=det,
        rotation_degrees=rotation,
    )


def rmse_grade(rmse):
    if rmse < config.RMSE_GOOD:
        return "good"
    if rmse < config.RMSE_WARNING:
        return "warning"
    return "error"


def assess_fit(pairs, matrix, is_degenerate=False):
    """RMSE, anomalies and user-facing warnings for a fitted matrix.

    Pass is_degenerate=True for the identity stand-in returned by a degenerate
    fit, so the assessment is flagged even though the matrix itself is clean.
    """
    rmse = calculate_rmse(pairs, matrix)
    anomalies = detect_anomalies(matrix)
    if is_degenerate:
        anomalies = dataclasses.replace(anomalies, is_degenerate=True)
    sx, sy = anomalies.scale_factors.x, anomalies.scale_factors.y

    warnings = []
    if rmse > config.RMSE_WARNING:
        warnings.append("High RMSE error - point placement may be inaccurate")
    largest = max(sx, sy)
    if largest > 0 and abs(sx - sy) / largest > config.UNEQUAL_SCALE_RATIO:
        warnings.append("Unequal scaling detected - maps may have different aspect ratios")
    if abs(matrix.b + matrix.c) > config.SHEAR_TERM_LIMIT:
        warnings.append("Shear transformation detected - maps may be skewed")
    if anomalies.has_negative_determinant:
        warnings.append("Transformation includes reflection/mirroring")
    if anomalies.has_extreme_scale:
        warnings.append("Extreme scaling detected - verify your reference points")
    if anomalies.has_extreme_shear:
        warnings.append("Extreme shear detected - maps may be heavily skewed")
    if anomalies.is_degenerate:
        warnings.append("Degenerate transformation - points may be collinear")

    grade = rmse_grade(rmse)
    logger.debug("Fit RMSE %.3f px (%s), %d warning(s)", rmse, grade, len(warnings))
    return FitAssessment(rmse=rmse, grade=grade, anomalies=anomalies, warnings=tuple(warnings))
