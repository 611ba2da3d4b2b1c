from __future__ import annotations

import logging
from dataclasses import dataclass

from .coords import absolute_position, relative_position
from .model import ObjectKind, ObjectRef, Position, Scene, SeatMapError, with_position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragState:
    target: ObjectRef
    # absolute(target) - pointer at drag start
    offset: Position


def begin_drag(scene: Scene, target: ObjectRef, pointer: Position) -> DragState:
    if target.kind == ObjectKind.category:
        raise SeatMapError("categories cannot be dragged")
    offset = absolute_position(scene, target) - pointer
    logger.debug("drag start on %s, offset (%.2f, %.2f)", target, offset.x, offset.y)
    return DragState(target=target, offset=offset)


def drag_to(scene: Scene, drag: DragState, pointer: Position) -> Scene:
    """
    Move the dragged node so its absolute position is `pointer + offset`.

    Only the node's own position is written. Moving a row leaves its seats'
    positions untouched; they follow because they are row-relative.
    """
    target_abs = pointer + drag.offset
    return with_position(scene, drag.target, relative_position(scene, drag.target, target_abs))
