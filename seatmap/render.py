from __future__ import annotations

import math
from typing import Iterable, Optional

from .coords import absolute, absolute_position
from .geometry import area_bounds, area_contains
from .model import ObjectKind, ObjectRef, Scene, SeatStatus, resolve
from .selection import SelectionController


# Outline offsets used to highlight the selected or hovered object.
SEAT_HIGHLIGHT = 3.0
AREA_HIGHLIGHT = 2.0

_STATUS_CHARS = {
    SeatStatus.available: "o",
    SeatStatus.unavailable: "x",
    SeatStatus.void: "-",
    SeatStatus.sold: "#",
}


def highlight_outline(scene: Scene, ref: ObjectRef) -> Optional[dict]:
    """Scene-space outline to draw around a selected seat or area."""
    if ref.kind == ObjectKind.seat:
        seat = resolve(scene, ref)
        c = absolute_position(scene, ref)
        return {"shape": "circle", "cx": c.x, "cy": c.y, "r": seat.effective_radius + SEAT_HIGHLIGHT}
    if ref.kind == ObjectKind.area:
        area = resolve(scene, ref)
        bounds = area_bounds(area)
        if bounds is None:
            return None
        o = absolute_position(scene, ref)
        pad = AREA_HIGHLIGHT
        return {
            "shape": "rect",
            "x": o.x + bounds[0] - pad,
            "y": o.y + bounds[1] - pad,
            "width": bounds[2] - bounds[0] + 2 * pad,
            "height": bounds[3] - bounds[1] + 2 * pad,
            "rotation": area.rotation or 0.0,
        }
    return None


def marquee_rect(controller: SelectionController) -> Optional[tuple[float, float, float, float]]:
    """(x, y, width, height) of the marquee being dragged, if any."""
    if controller.marquee is None:
        return None
    x1, y1, x2, y2 = controller.marquee.bounds()
    return (x1, y1, x2 - x1, y2 - y1)


def render_ascii(scene: Scene, *, selected: Iterable[str] = (), cell_size: float = 10.0) -> str:
    """
    Coarse character raster of the scene: one character per cell_size square.
    Seats show their status ('*' when selected), areas fill with '+'.
    """
    cell_size = max(1.0, float(cell_size))
    cols = max(1, int(math.ceil(scene.size.width / cell_size)))
    rows = max(1, int(math.ceil(scene.size.height / cell_size)))
    grid = [[" "] * cols for _ in range(rows)]
    chosen = set(selected)

    for zone in scene.zones:
        for area in zone.areas:
            o = absolute(area.position, (zone.position,))
            for r in range(rows):
                for c in range(cols):
                    cx = (c + 0.5) * cell_size
                    cy = (r + 0.5) * cell_size
                    if area_contains(area, cx - o.x, cy - o.y):
                        grid[r][c] = "+"

    for zone in scene.zones:
        for row in zone.rows:
            for seat in row.seats:
                p = absolute(seat.position, (zone.position, row.position))
                c = int(p.x // cell_size)
                r = int(p.y // cell_size)
                if 0 <= r < rows and 0 <= c < cols:
                    grid[r][c] = "*" if seat.seat_guid in chosen else _STATUS_CHARS[seat.status]

    border = "+" + "-" * cols + "+"
    lines = [scene.name, border] if scene.name else [border]
    lines.extend("|" + "".join(line) + "|" for line in grid)
    lines.append(border)
    return "\n".join(lines)
