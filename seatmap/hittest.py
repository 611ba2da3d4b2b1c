from __future__ import annotations

import logging
from typing import Optional, Sequence

from .coords import absolute
from .geometry import area_contains, circle_contains, rect_contains
from .model import ObjectRef, Position, Scene

logger = logging.getLogger(__name__)


def hit_test(scene: Scene, point: Position) -> list[ObjectRef]:
    """
    All objects whose geometry contains a scene-space point.

    Seats come first, then areas; each group in traversal order
    (zone, then row/seat or area index).
    """
    seats: list[ObjectRef] = []
    areas: list[ObjectRef] = []
    for zi, zone in enumerate(scene.zones):
        for ri, row in enumerate(zone.rows):
            for si, seat in enumerate(row.seats):
                c = absolute(seat.position, (zone.position, row.position))
                if circle_contains(c.x, c.y, seat.effective_radius, point.x, point.y):
                    seats.append(ObjectRef.seat(zi, ri, si))
        for ai, area in enumerate(zone.areas):
            origin = absolute(area.position, (zone.position,))
            if area_contains(area, point.x - origin.x, point.y - origin.y):
                areas.append(ObjectRef.area(zi, ai))
    return seats + areas


def pick(candidates: Sequence[ObjectRef], previous: Optional[ObjectRef] = None) -> Optional[ObjectRef]:
    """
    Choose one candidate. Repeated picks with the last result as `previous`
    cycle through overlapping candidates, wrapping after the last one.
    """
    if not candidates:
        return None
    if previous is not None and len(candidates) > 1:
        try:
            i = list(candidates).index(previous)
        except ValueError:
            return candidates[0]
        return candidates[(i + 1) % len(candidates)]
    return candidates[0]


def hit_test_select(scene: Scene, point: Position, previous: Optional[ObjectRef] = None) -> Optional[ObjectRef]:
    candidates = hit_test(scene, point)
    chosen = pick(candidates, previous)
    logger.debug("hit test at (%.2f, %.2f): %d candidates, picked %s", point.x, point.y, len(candidates), chosen)
    return chosen


def seats_in_rect(scene: Scene, a: Position, b: Position) -> list[str]:
    """
    Identifiers of seats whose absolute centre lies inside the rectangle spanned
    by a and b, edges included. Rows and seats are visited back to front so
    later-drawn seats come first.
    """
    out: list[str] = []
    for zone in scene.zones:
        for row in reversed(zone.rows):
            for seat in reversed(row.seats):
                c = absolute(seat.position, (zone.position, row.position))
                if rect_contains(a.x, a.y, b.x, b.y, c.x, c.y):
                    out.append(seat.seat_guid)
    return out
