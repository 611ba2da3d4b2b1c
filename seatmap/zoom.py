from __future__ import annotations

from .model import Position


ZOOM_MIN = 0.3
ZOOM_MAX = 3.0
ZOOM_STEP = 0.1


def clamp_zoom(value: float) -> float:
    return max(ZOOM_MIN, min(ZOOM_MAX, round(float(value), 4)))


class Zoom:
    """
    Display magnification. Drawing is scaled by `factor`; pointer coordinates
    are divided by it before any hit-test, selection or drag math.
    """

    def __init__(self, factor: float = 1.0):
        self.factor = clamp_zoom(factor)

    def set(self, value: float) -> float:
        self.factor = clamp_zoom(value)
        return self.factor

    def zoom_in(self) -> float:
        return self.set(self.factor + ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set(self.factor - ZOOM_STEP)

    def wheel(self, delta_y: float) -> float:
        # Scrolling up (negative delta) magnifies.
        if delta_y < 0:
            return self.zoom_in()
        if delta_y > 0:
            return self.zoom_out()
        return self.factor

    def to_scene(self, screen_x: float, screen_y: float) -> Position:
        return Position(x=float(screen_x) / self.factor, y=float(screen_y) / self.factor)

    def to_screen(self, point: Position) -> tuple[float, float]:
        return (point.x * self.factor, point.y * self.factor)
