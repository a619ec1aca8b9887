import logging

import config
from models import DistributionReport, Point

logger = logging.getLogger(__name__)

SAME_LOCATION_WARNING = "All reference points are at the same location"
COLLINEAR_WARNING = "Reference points are nearly collinear - add points further apart"


def bounding_box(points):
    """Returns (min_x, min_y, max_x, max_y) of the points."""
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def _cross(o, a, b):
    # (o->a) x (o->b)
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def convex_hull(points):
    """Gift-wrapping hull, starting from the leftmost (then lowest y) point.

    Returns hull vertices in wrapping order. Never visits more vertices than
    there are input points, so duplicate or collinear input terminates.
    """
    pts = [Point.coerce(p) for p in points]
    if len(pts) < 3:
        return pts

    start = min(range(len(pts)), key=lambda i: (pts[i].x, pts[i].y))
    hull = []
    current = start
    while True:
        hull.append(pts[current])
        nxt = 0
        for i, candidate in enumerate(pts):
            if i == current:
                continue
            cross = _cross(pts[current], candidate, pts[nxt])
            if (
                nxt == current
                or cross > 0
                or (cross == 0
                    and pts[current].distance(candidate) > pts[current].distance(pts[nxt]))
            ):
                nxt = i
        current = nxt
        if current == start or len(hull) >= len(pts):
            break
    return hull


def polygon_area(vertices):
    """Shoelace area of an ordered polygon (absolute value)."""
    if len(vertices) < 3:
        return 0.0
    total = 0.0
    for i, p in enumerate(vertices):
        q = vertices[(i + 1) % len(vertices)]
        total += p.x * q.y - q.x * p.y
    return abs(total) / 2.0


def covered_area(points):
    if len(points) < 3:
        return 0.0
    if len(points) == 3:
        p1, p2, p3 = points
        return abs(_cross(p1, p2, p3)) / 2.0
    return polygon_area(convex_hull(points))


def validate_point_distribution(points):
    """Check reference points span the plane well enough for a stable fit."""
    pts = [Point.coerce(p) for p in points]
    if len(pts) < 3:
        return DistributionReport(is_valid=True, warning=None, area_ratio=1.0)

    min_x, min_y, max_x, max_y = bounding_box(pts)
    bbox_area = (max_x - min_x) * (max_y - min_y)
    if bbox_area == 0:
        logger.debug("Zero-area bounding box for %d points", len(pts))
        return DistributionReport(is_valid=False, warning=SAME_LOCATION_WARNING, area_ratio=0.0)

    ratio = covered_area(pts) / bbox_area
    is_valid = ratio > config.MIN_AREA_RATIO
    logger.debug("Point distribution area ratio %.3f (%d points)", ratio, len(pts))
    return DistributionReport(
        is_valid=is_valid,
        warning=None if is_valid else COLLINEAR_WARNING,
        area_ratio=ratio,
    )
