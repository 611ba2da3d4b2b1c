from __future__ import annotations

import logging
from typing import Any, Optional

from .model import ObjectRef, Scene
from .properties import get_properties, parse_status, rename_category, seat_stats, set_property, set_seat_status
from .selection import SelectionController, SelectionMode
from .zoom import Zoom

logger = logging.getLogger(__name__)


class EditorSession:
    """
    One operator editing one Scene.

    Owns the current Scene value, the zoom factor and the selection
    controller. Pointer coordinates arrive in screen space and are mapped to
    scene space here, before any other component sees them. Every edit replaces
    `scene` with a new value.
    """

    def __init__(self, scene: Scene, *, mode: SelectionMode = SelectionMode.area, zoom: float = 1.0):
        self.scene = scene
        self.zoom = Zoom(zoom)
        self.controller = SelectionController(mode)

    # Pointer input (screen coordinates) ---------------------------------
    def pointer_down(self, x: float, y: float) -> None:
        self.controller.pointer_down(self.scene, self.zoom.to_scene(x, y))

    def pointer_move(self, x: float, y: float) -> None:
        self.scene = self.controller.pointer_move(self.scene, self.zoom.to_scene(x, y))

    def pointer_up(self, x: float, y: float) -> None:
        self.controller.pointer_up(self.scene, self.zoom.to_scene(x, y))

    def pointer_leave(self) -> None:
        self.controller.pointer_up(self.scene, None)

    def wheel(self, delta_y: float, *, modifier: bool) -> float:
        # Plain wheel scrolls the page; only modifier+wheel zooms.
        if modifier:
            self.zoom.wheel(delta_y)
        return self.zoom.factor

    # Commands ---------------------------------------------------------------
    def set_mode(self, mode: SelectionMode | str) -> None:
        self.controller.set_mode(mode)

    def set_move_enabled(self, enabled: bool) -> None:
        self.controller.set_move_enabled(enabled)

    def select_object(self, ref: Optional[ObjectRef]) -> None:
        self.controller.select_object(self.scene, ref)

    def clear_selection(self) -> None:
        self.controller.clear_selection()

    def properties(self) -> Optional[dict[str, Any]]:
        ref = self.controller.current_object(self.scene)
        if ref is None:
            return None
        return get_properties(self.scene, ref)

    def apply_property(self, name: str, value: Any, ref: Optional[ObjectRef] = None) -> bool:
        """Write one property on `ref` (default: the selected object). Returns whether the Scene changed."""
        target = ref if ref is not None else self.controller.current_object(self.scene)
        if target is None:
            return False
        before = self.scene
        self.scene = set_property(self.scene, target, name, value)
        return self.scene is not before

    def rename_category(self, old_name: str, new_name: str) -> bool:
        before = self.scene
        self.scene = rename_category(self.scene, old_name, new_name)
        return self.scene is not before

    def apply_status(self, status: str) -> int:
        """Set `status` on every selected seat, then clear the seat selection."""
        value = parse_status(status)
        ids = set(self.controller.selected_seat_ids)
        if not ids:
            return 0
        self.scene = set_seat_status(self.scene, ids, value)
        self.controller.selected_seat_ids = set()
        logger.debug("status %s applied to %d seats", value.value, len(ids))
        return len(ids)

    def stats(self) -> dict[str, int]:
        return seat_stats(self.scene)

    def snapshot(self) -> dict[str, Any]:
        c = self.controller
        ref = c.current_object(self.scene)
        return {
            "mode": c.mode.value,
            "zoom": self.zoom.factor,
            "move_enabled": c.move_enabled,
            "dragging": c.is_dragging,
            "selected_seat_ids": sorted(c.selected_seat_ids),
            "selected_object": str(ref) if ref is not None else None,
            "marquee": list(c.marquee.bounds()) if c.marquee is not None else None,
        }
