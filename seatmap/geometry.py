from __future__ import annotations

import math
from typing import Any, Optional

from shapely.geometry import Point, Polygon as ShapelyPolygon


def circle_contains(cx: float, cy: float, r: float, x: float, y: float) -> bool:
    return math.hypot(x - cx, y - cy) <= r


def rect_contains(x1: float, y1: float, x2: float, y2: float, x: float, y: float) -> bool:
    # Closed on all four edges; corners may come in any order.
    return min(x1, x2) <= x <= max(x1, x2) and min(y1, y2) <= y <= max(y1, y2)


def ellipse_contains(cx: float, cy: float, rx: float, ry: float, x: float, y: float) -> bool:
    if rx <= 0 or ry <= 0:
        return False
    dx = (x - cx) / rx
    dy = (y - cy) / ry
    return dx * dx + dy * dy <= 1.0


def polygon_contains_point(poly_points: list[tuple[float, float]], x: float, y: float) -> bool:
    if len(poly_points) < 3:
        return False
    # close polygon if needed
    pts = poly_points
    if pts[0] != pts[-1]:
        pts = pts + [pts[0]]
    return ShapelyPolygon(pts).contains(Point(x, y))


def area_contains(area: Any, x: float, y: float) -> bool:
    """
    Containment test in the area's local frame: (x, y) is the query point minus
    the area's absolute position.

    Rotation is a drawing transform only and is not applied here, so a rotated
    ellipse or polygon is hit-tested as if it were drawn un-rotated.
    Text areas are decorative and never match.
    """
    shape = area.shape
    if shape == "rectangle" and area.rectangle is not None:
        return rect_contains(0.0, 0.0, area.rectangle.width, area.rectangle.height, x, y)
    if shape == "circle" and area.circle is not None:
        return circle_contains(0.0, 0.0, area.circle.radius, x, y)
    if shape == "ellipse" and area.ellipse is not None:
        return ellipse_contains(0.0, 0.0, area.ellipse.radius_x, area.ellipse.radius_y, x, y)
    if shape == "polygon" and area.polygon is not None:
        return polygon_contains_point([(p.x, p.y) for p in area.polygon.points], x, y)
    return False


def area_bounds(area: Any) -> Optional[tuple[float, float, float, float]]:
    """Local (min_x, min_y, max_x, max_y) of an area's un-rotated geometry, or None if it has none."""
    shape = area.shape
    if shape == "rectangle" and area.rectangle is not None:
        w, h = area.rectangle.width, area.rectangle.height
        return (min(0.0, w), min(0.0, h), max(0.0, w), max(0.0, h))
    if shape == "circle" and area.circle is not None:
        r = abs(area.circle.radius)
        return (-r, -r, r, r)
    if shape == "ellipse" and area.ellipse is not None:
        rx, ry = abs(area.ellipse.radius_x), abs(area.ellipse.radius_y)
        return (-rx, -ry, rx, ry)
    if shape == "polygon" and area.polygon is not None and area.polygon.points:
        poly = ShapelyPolygon([(p.x, p.y) for p in area.polygon.points]) if len(area.polygon.points) >= 3 else None
        if poly is not None:
            return tuple(float(v) for v in poly.bounds)  # type: ignore[return-value]
        xs = [p.x for p in area.polygon.points]
        ys = [p.y for p in area.polygon.points]
        return (min(xs), min(ys), max(xs), max(ys))
    return None
