from __future__ import annotations

from typing import Iterable

from .model import ObjectKind, ObjectRef, Position, Scene, SeatMapError, resolve


def absolute(position: Position, ancestors: Iterable[Position]) -> Position:
    """Scene-space position of a node given its ancestors' relative positions (root first)."""
    x, y = position.x, position.y
    for a in ancestors:
        x += a.x
        y += a.y
    return Position(x=x, y=y)


def to_relative(point: Position, ancestors: Iterable[Position]) -> Position:
    """Inverse of absolute(): the value to store on a node so it lands at `point`."""
    x, y = point.x, point.y
    for a in ancestors:
        x -= a.x
        y -= a.y
    return Position(x=x, y=y)


def ancestor_chain(scene: Scene, ref: ObjectRef) -> list[Position]:
    # Recomputed from the tree on every call; any ancestor may have moved.
    if ref.kind == ObjectKind.category:
        raise SeatMapError("categories have no position")
    zone = scene.zones[ref.zone] if 0 <= ref.zone < len(scene.zones) else None
    if zone is None:
        raise SeatMapError(f"zone index out of range: {ref.zone}")
    if ref.kind == ObjectKind.seat:
        row = resolve(scene, ObjectRef.for_row(ref.zone, ref.row))
        return [zone.position, row.position]
    return [zone.position]


def absolute_position(scene: Scene, ref: ObjectRef) -> Position:
    node = resolve(scene, ref)
    return absolute(node.position, ancestor_chain(scene, ref))


def relative_position(scene: Scene, ref: ObjectRef, point: Position) -> Position:
    return to_relative(point, ancestor_chain(scene, ref))
