"""
Migration of marker coordinates from a source map image onto a replacement image.

Reference pairs and markers are stored normalized (0-1) against the pixel size
of their map. Fitting and quality checks happen in pixel space so that RMSE
thresholds are in pixels of the target image.
"""
import logging
from math import ceil

import config
from errors import InvalidInputError
from georef import batch_transform, calculate_affine_matrix
from models import Bounds, MigrationResult, Point, PointPair
from validator import assess_fit

logger = logging.getLogger(__name__)


def to_pixels(point, bounds):
    p = Point.coerce(point)
    b = Bounds.coerce(bounds)
    return Point(p.x * b.width, p.y * b.height)


def to_normalized(point, bounds):
    p = Point.coerce(point)
    b = Bounds.coerce(bounds)
    if b.width == 0 or b.height == 0:
        raise InvalidInputError(f"Cannot normalize against zero-sized bounds {b}")
    return Point(p.x / b.width, p.y / b.height)


def calibrate(normalized_pairs, source_bounds, target_bounds):
    """Fit source map pixels -> target map pixels from normalized reference pairs.

    Returns (EstimationResult, FitAssessment).
    """
    pairs = [PointPair.coerce(p) for p in normalized_pairs]
    pixel_pairs = [
        PointPair(to_pixels(p.source, source_bounds), to_pixels(p.target, target_bounds))
        for p in pairs
    ]
    result = calculate_affine_matrix(
        [p.source for p in pixel_pairs], [p.target for p in pixel_pairs]
    )
    assessment = assess_fit(pixel_pairs, result.matrix, is_degenerate=result.is_degenerate)
    for warning in assessment.warnings:
        logger.warning(warning)
    logger.info(
        "Calibrated from %d reference pairs: RMSE %.2f px (%s)",
        len(pixel_pairs), assessment.rmse, assessment.grade,
    )
    return result, assessment


def migrate_points(points, matrix, target_bounds, clamp=True):
    """Transform pixel points onto the target map.

    Indices of points landing outside [0, width] x [0, height] are reported in
    out_of_bounds; with clamp=True those points are pulled onto the map edge.
    """
    bounds = Bounds.coerce(target_bounds)
    moved = batch_transform(points, matrix)

    out_of_bounds = tuple(
        i for i, p in enumerate(moved)
        if not (0 <= p.x <= bounds.width and 0 <= p.y <= bounds.height)
    )
    if clamp and out_of_bounds:
        moved = [
            Point(min(max(p.x, 0.0), bounds.width), min(max(p.y, 0.0), bounds.height))
            for p in moved
        ]
    if out_of_bounds:
        logger.warning(
            "%d marker(s) fall outside the target map bounds%s",
            len(out_of_bounds), " and were clamped" if clamp else "",
        )
    return MigrationResult(points=tuple(moved), out_of_bounds=out_of_bounds)


def recommended_tolerance(rmse):
    """Pixel tolerance for matching duplicate markers when merging into an existing export."""
    if rmse is None:
        rmse = config.DEFAULT_RMSE_PX
    return max(config.MIN_TOLERANCE_PX, ceil(rmse * config.TOLERANCE_RMSE_FACTOR))
