import config
from models import Bounds, Point, PointSuggestion


def _quadrants(bounds):
    mid_x = bounds.width / 2
    mid_y = bounds.height / 2
    return [
        ("top-left", 0.0, mid_x, 0.0, mid_y),
        ("top-right", mid_x, bounds.width, 0.0, mid_y),
        ("bottom-left", 0.0, mid_x, mid_y, bounds.height),
        ("bottom-right", mid_x, bounds.width, mid_y, bounds.height),
    ]


def _corners(bounds):
    return [
        ("top-left", 0.0, 0.0),
        ("top-right", bounds.width, 0.0),
        ("bottom-left", 0.0, bounds.height),
        ("bottom-right", bounds.width, bounds.height),
    ]


def suggest_additional_points(current_points, bounds):
    """Propose reference point locations that would improve coverage of the map.

    With no points, the three corners needed for a first fit. Otherwise the
    centre of every empty quadrant, and once all quadrants are covered, any
    corner without a point nearby.
    """
    bounds = Bounds.coerce(bounds)
    points = [Point.coerce(p) for p in current_points or []]

    if not points:
        return [
            PointSuggestion(0.0, 0.0, "Top-left corner (origin)"),
            PointSuggestion(bounds.width, 0.0, "Top-right corner"),
            PointSuggestion(0.0, bounds.height, "Bottom-left corner"),
        ]

    suggestions = []
    for name, min_x, max_x, min_y, max_y in _quadrants(bounds):
        occupied = any(min_x <= p.x <= max_x and min_y <= p.y <= max_y for p in points)
        if not occupied:
            suggestions.append(PointSuggestion(
                (min_x + max_x) / 2, (min_y + max_y) / 2, f"No points in {name} quadrant"
            ))

    if suggestions:
        return suggestions

    threshold = min(bounds.width, bounds.height) * config.CORNER_PROXIMITY
    for name, cx, cy in _corners(bounds):
        nearby = any(abs(p.x - cx) < threshold and abs(p.y - cy) < threshold for p in points)
        if not nearby:
            suggestions.append(PointSuggestion(
                cx, cy, f"Add point near {name} corner for better coverage"
            ))
    return suggestions
