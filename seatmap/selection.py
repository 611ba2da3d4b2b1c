from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .coords import absolute_position
from .drag import DragState, begin_drag, drag_to
from .hittest import hit_test, pick, seats_in_rect
from .model import ObjectKind, ObjectRef, Position, Scene, SeatMapError, resolve, try_resolve

logger = logging.getLogger(__name__)


# Scene units, measured before zoom is applied.
DRAG_TOLERANCE = 20.0


class SelectionMode(str, Enum):
    area = "area"
    row = "row"
    object = "object"


@dataclass
class Marquee:
    anchor: Position
    current: Position

    def bounds(self) -> tuple[float, float, float, float]:
        return (
            min(self.anchor.x, self.current.x),
            min(self.anchor.y, self.current.y),
            max(self.anchor.x, self.current.x),
            max(self.anchor.y, self.current.y),
        )


class SelectionController:
    """
    Pointer-gesture state machine for one editing session.

    All points handed to the pointer_* methods are scene-space (already divided
    by zoom). Methods that can edit the scene take the current Scene and return
    the Scene to use afterwards; the others only touch selection state.
    """

    def __init__(self, mode: SelectionMode = SelectionMode.area, *, move_enabled: bool = False):
        self.mode = SelectionMode(mode)
        self.move_enabled = bool(move_enabled)
        self.selected_seat_ids: set[str] = set()
        self.selected_object: Optional[ObjectRef] = None
        self.marquee: Optional[Marquee] = None
        self.drag: Optional[DragState] = None

    # ------------------------------------------------------------------
    @property
    def is_dragging(self) -> bool:
        return self.drag is not None

    def clear_selection(self) -> None:
        self.selected_seat_ids = set()
        self.selected_object = None

    def set_mode(self, mode: SelectionMode | str) -> None:
        try:
            new_mode = SelectionMode(mode)
        except ValueError as e:
            raise SeatMapError(f"unknown selection mode: {mode!r}") from e
        self.clear_selection()
        self.marquee = None
        self.drag = None
        self.mode = new_mode
        logger.debug("selection mode -> %s", new_mode.value)

    def set_move_enabled(self, enabled: bool) -> None:
        self.move_enabled = bool(enabled)
        if not self.move_enabled:
            self.drag = None

    def select_object(self, scene: Scene, ref: Optional[ObjectRef]) -> None:
        if ref is not None:
            resolve(scene, ref)
        self.selected_object = ref

    def current_object(self, scene: Scene) -> Optional[ObjectRef]:
        """The selected reference, or None if it no longer resolves against `scene`."""
        if try_resolve(scene, self.selected_object) is None:
            return None
        return self.selected_object

    # ------------------------------------------------------------------
    def pointer_down(self, scene: Scene, p: Position) -> None:
        self.marquee = None
        self.drag = None
        if self.mode == SelectionMode.area:
            self._area_down(scene, p)
        elif self.mode == SelectionMode.row:
            self._row_down(scene, p)
        else:
            self._object_down(scene, p)

    def pointer_move(self, scene: Scene, p: Position) -> Scene:
        if self.drag is not None:
            if try_resolve(scene, self.drag.target) is None:
                self.drag = None
                return scene
            return drag_to(scene, self.drag, p)
        if self.marquee is not None:
            self.marquee.current = p
        return scene

    def pointer_up(self, scene: Scene, p: Optional[Position] = None) -> None:
        """
        Finish the active gesture. With no point (pointer left the canvas) the
        marquee closes at its last tracked corner.
        """
        if self.drag is not None:
            logger.debug("drag end on %s", self.drag.target)
            self.drag = None
        if self.marquee is not None:
            if p is not None:
                self.marquee.current = p
            self.selected_seat_ids = set(seats_in_rect(scene, self.marquee.anchor, self.marquee.current))
            logger.debug("marquee %s selected %d seats", self.marquee.bounds(), len(self.selected_seat_ids))
            self.marquee = None

    # ------------------------------------------------------------------
    def _area_down(self, scene: Scene, p: Position) -> None:
        target = self.current_object(scene)
        if self.move_enabled and target is not None and target.kind != ObjectKind.category:
            anchor = absolute_position(scene, target)
            if math.hypot(p.x - anchor.x, p.y - anchor.y) <= DRAG_TOLERANCE:
                self.drag = begin_drag(scene, target, p)
                return
        self.clear_selection()
        self.marquee = Marquee(anchor=p, current=p)

    def _row_down(self, scene: Scene, p: Position) -> None:
        candidates = hit_test(scene, p)
        if not candidates or candidates[0].kind != ObjectKind.seat:
            self.clear_selection()
            return
        seat_ref = candidates[0]
        row_ref = ObjectRef.for_row(seat_ref.zone, seat_ref.row)
        row = resolve(scene, row_ref)
        self.selected_object = row_ref
        self.selected_seat_ids = {s.seat_guid for s in row.seats}
        self._maybe_begin_drag(scene, p)

    def _object_down(self, scene: Scene, p: Position) -> None:
        chosen = pick(hit_test(scene, p), self.current_object(scene))
        self.selected_seat_ids = set()
        self.selected_object = chosen
        if chosen is not None:
            self._maybe_begin_drag(scene, p)

    def _maybe_begin_drag(self, scene: Scene, p: Position) -> None:
        if self.move_enabled and self.selected_object is not None:
            self.drag = begin_drag(scene, self.selected_object, p)
