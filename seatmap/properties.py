from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .coords import absolute_position, relative_position
from .geometry import area_bounds
from .model import (
    ObjectKind,
    ObjectRef,
    Position,
    Scene,
    SeatMapError,
    SeatStatus,
    area_id,
    iter_seats,
    replace_object,
    replace_seat,
    resolve,
    with_position,
)

logger = logging.getLogger(__name__)


# Area field -> (shape it applies to or None for any shape, sub-structure, attribute).
AREA_FIELDS: dict[str, tuple[Optional[str], str, str]] = {
    "width": ("rectangle", "rectangle", "width"),
    "height": ("rectangle", "rectangle", "height"),
    "radius": ("circle", "circle", "radius"),
    "radius_x": ("ellipse", "ellipse", "radius_x"),
    "radius_y": ("ellipse", "ellipse", "radius_y"),
    "text": (None, "text", "text"),
    "text_color": (None, "text", "color"),
    "text_size": (None, "text", "size"),
}

_NUMERIC = {"width", "height", "radius", "radius_x", "radius_y", "text_size", "rotation", "position_x", "position_y",
            "text_offset_x", "text_offset_y"}


def _to_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise SeatMapError(f"{name} must be a number, got {value!r}") from e


def parse_status(value: Any) -> SeatStatus:
    try:
        return SeatStatus(str(value).strip().lower())
    except ValueError as e:
        raise SeatMapError(f"unknown seat status: {value!r}") from e


def _ignored(ref: ObjectRef, name: str) -> None:
    logger.debug("property %r does not apply to %s; ignored", name, ref)


# ----------------------------------------------------------------------
# Reading


def get_properties(scene: Scene, ref: ObjectRef) -> dict[str, Any]:
    """Editable fields of an object. Positions are reported in scene space."""
    obj = resolve(scene, ref)
    if ref.kind == ObjectKind.category:
        return {"kind": "category", "name": obj.name, "color": obj.color}

    pos = absolute_position(scene, ref)
    props: dict[str, Any] = {"kind": ref.kind.value, "position_x": pos.x, "position_y": pos.y}

    if ref.kind == ObjectKind.seat:
        props.update(
            id=obj.seat_guid,
            seat_number=obj.seat_number,
            category=obj.category,
            status=obj.status.value,
            radius=obj.effective_radius,
        )
        return props

    if ref.kind == ObjectKind.row:
        props.update(label=obj.label, seats=len(obj.seats))
        return props

    props.update(
        id=area_id(ref.zone, ref.index, obj),
        shape=obj.shape,
        color=obj.color,
        border_color=obj.border_color,
        rotation=obj.rotation or 0.0,
    )
    if obj.shape == "rectangle" and obj.rectangle is not None:
        props.update(width=obj.rectangle.width, height=obj.rectangle.height)
    elif obj.shape == "circle" and obj.circle is not None:
        props.update(radius=obj.circle.radius)
    elif obj.shape == "ellipse" and obj.ellipse is not None:
        props.update(radius_x=obj.ellipse.radius_x, radius_y=obj.ellipse.radius_y)
    elif obj.shape == "polygon" and obj.polygon is not None:
        props.update(points=len(obj.polygon.points))
    if obj.text is not None:
        props.update(text=obj.text.text, text_color=obj.text.color, text_size=obj.text.size)
        if obj.shape == "polygon":
            offset = obj.text.offset or Position()
            props.update(text_offset_x=offset.x, text_offset_y=offset.y)
    bounds = area_bounds(obj)
    if bounds is not None:
        props["bounds"] = [bounds[0] + pos.x, bounds[1] + pos.y, bounds[2] + pos.x, bounds[3] + pos.y]
    return props


# ----------------------------------------------------------------------
# Writing


def set_property(scene: Scene, ref: ObjectRef, name: str, value: Any) -> Scene:
    """
    Apply one edit and return the new Scene.

    A field that has no home on the target (e.g. `radius` on a rectangle area,
    `text` on an area without a label) leaves the Scene unchanged.
    """
    obj = resolve(scene, ref)
    if name in _NUMERIC:
        value = _to_float(name, value)

    if name in ("position_x", "position_y"):
        if ref.kind == ObjectKind.category:
            _ignored(ref, name)
            return scene
        current = absolute_position(scene, ref)
        target = Position(x=value, y=current.y) if name == "position_x" else Position(x=current.x, y=value)
        return with_position(scene, ref, relative_position(scene, ref, target))

    if ref.kind == ObjectKind.category:
        if name == "name":
            return rename_category(scene, obj.name, value, index=ref.index)
        if name == "color":
            return replace_object(scene, ref, obj.model_copy(update={"color": str(value)}))
        _ignored(ref, name)
        return scene

    if ref.kind == ObjectKind.seat:
        if name == "seat_number":
            return replace_object(scene, ref, obj.model_copy(update={"seat_number": value}))
        if name == "category":
            category = None if value is None or str(value) == "" else str(value)
            return replace_object(scene, ref, obj.model_copy(update={"category": category}))
        if name == "status":
            return replace_object(scene, ref, obj.model_copy(update={"status": parse_status(value)}))
        if name == "radius":
            return replace_object(scene, ref, obj.model_copy(update={"radius": _to_float(name, value)}))
        _ignored(ref, name)
        return scene

    if ref.kind == ObjectKind.row:
        if name == "label":
            return replace_object(scene, ref, obj.model_copy(update={"label": None if value is None else str(value)}))
        _ignored(ref, name)
        return scene

    return _set_area_property(scene, ref, obj, name, value)


def _set_area_property(scene: Scene, ref: ObjectRef, area: Any, name: str, value: Any) -> Scene:
    if name in ("color", "border_color"):
        return replace_object(scene, ref, area.model_copy(update={name: str(value)}))
    if name == "rotation":
        return replace_object(scene, ref, area.model_copy(update={"rotation": value}))

    if name in ("text_offset_x", "text_offset_y"):
        if area.shape != "polygon" or area.text is None:
            _ignored(ref, name)
            return scene
        offset = area.text.offset or Position()
        offset = Position(x=value, y=offset.y) if name == "text_offset_x" else Position(x=offset.x, y=value)
        text = area.text.model_copy(update={"offset": offset})
        return replace_object(scene, ref, area.model_copy(update={"text": text}))

    route = AREA_FIELDS.get(name)
    if route is None:
        _ignored(ref, name)
        return scene
    shape, part, attr = route
    sub = getattr(area, part, None) if shape is None or area.shape == shape else None
    if sub is None:
        _ignored(ref, name)
        return scene
    if attr in ("text", "color"):
        value = str(value)
    sub = sub.model_copy(update={attr: value})
    return replace_object(scene, ref, area.model_copy(update={part: sub}))


# ----------------------------------------------------------------------
# Scene-wide edits


def rename_category(scene: Scene, old_name: str, new_name: Any, *, index: Optional[int] = None) -> Scene:
    """
    Rename a category and rewrite every seat whose category equals the old name
    (exact, case-sensitive match). A blank new name leaves the Scene unchanged.
    Names are not required to be unique.
    """
    new_name = str(new_name or "").strip()
    if not new_name or new_name == old_name:
        return scene
    if index is None:
        index = next((i for i, c in enumerate(scene.categories) if c.name == old_name), None)
        if index is None:
            logger.debug("rename of unknown category %r ignored", old_name)
            return scene
    cat = resolve(scene, ObjectRef.category(index))
    out = replace_object(scene, ObjectRef.category(index), cat.model_copy(update={"name": new_name}))
    renamed = 0
    for ref, _, _, seat in iter_seats(out):
        if seat.category == old_name:
            out = replace_seat(out, ref.zone, ref.row, ref.index, seat.model_copy(update={"category": new_name}))
            renamed += 1
    logger.debug("category %r -> %r, %d seats rewritten", old_name, new_name, renamed)
    return out


def set_seat_status(scene: Scene, seat_ids: Iterable[str], status: Any) -> Scene:
    status = parse_status(status)
    wanted = set(seat_ids)
    out = scene
    for ref, _, _, seat in iter_seats(scene):
        if seat.seat_guid in wanted and seat.status != status:
            out = replace_seat(out, ref.zone, ref.row, ref.index, seat.model_copy(update={"status": status}))
    return out


def seat_stats(scene: Scene) -> dict[str, int]:
    stats = {s.value: 0 for s in SeatStatus}
    for _, _, _, seat in iter_seats(scene):
        stats[seat.status.value] += 1
    return stats
