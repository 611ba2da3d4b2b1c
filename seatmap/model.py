from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_serializer


DEFAULT_SEAT_RADIUS = 8.0


class SeatMapError(Exception):
    pass


class _Node(BaseModel):
    # Unknown document keys survive a load/save round-trip.
    model_config = ConfigDict(frozen=True, extra="allow")

    @model_serializer(mode="wrap")
    def _drop_unset_nulls(self, handler):
        # Nulls are written only where the document (or an edit) put them.
        data = handler(self)
        given = self.model_fields_set | set(self.model_extra or ())
        return {k: v for k, v in data.items() if v is not None or k in given}


class Position(_Node):
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def of(cls, x: float, y: float) -> "Position":
        return cls(x=float(x), y=float(y))

    def __add__(self, other: "Position") -> "Position":
        return Position(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(x=self.x - other.x, y=self.y - other.y)


ORIGIN = Position()


class Size(_Node):
    width: float
    height: float


class SeatStatus(str, Enum):
    available = "available"
    unavailable = "unavailable"
    void = "void"
    sold = "sold"


class Seat(_Node):
    seat_guid: str
    seat_number: Union[int, str] = ""
    position: Position = ORIGIN
    # Join key into Scene.categories by name, not a reference.
    category: Optional[str] = None
    status: SeatStatus = SeatStatus.available
    radius: Optional[float] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_case(cls, v: Any) -> Any:
        if v is None:
            return SeatStatus.available
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in SeatStatus.__members__:
                raise ValueError(
                    f"unknown seat status {v.upper()!r}; expected one of "
                    + ", ".join(s.value.upper() for s in SeatStatus)
                )
        return v

    @field_serializer("status")
    def _status_upper(self, v: SeatStatus) -> str:
        # Documents carry statuses upper-case ("AVAILABLE").
        return v.value.upper()

    @property
    def effective_radius(self) -> float:
        return DEFAULT_SEAT_RADIUS if self.radius is None else float(self.radius)


class Row(_Node):
    position: Position = ORIGIN
    label: Optional[str] = None
    seats: list[Seat] = Field(default_factory=list)


class TextLabel(_Node):
    text: str = ""
    color: str = "#000000"
    size: float = 12.0
    # Polygon areas only: label offset in the area's un-rotated frame.
    offset: Optional[Position] = None


class RectangleGeom(_Node):
    width: float
    height: float


class CircleGeom(_Node):
    radius: float


class EllipseGeom(_Node):
    radius_x: float
    radius_y: float


class PolygonGeom(_Node):
    points: list[Position] = Field(default_factory=list)

    @field_validator("points", mode="before")
    @classmethod
    def _pairs(cls, v: Any) -> Any:
        # Accept [[x, y], ...] as well as [{"x": .., "y": ..}, ...].
        if isinstance(v, list):
            return [{"x": p[0], "y": p[1]} if isinstance(p, (list, tuple)) else p for p in v]
        return v


class _AreaBase(_Node):
    uuid: Optional[str] = None
    position: Position = ORIGIN
    color: str = "#cccccc"
    border_color: Optional[str] = None
    rotation: Optional[float] = None
    text: Optional[TextLabel] = None


class RectangleArea(_AreaBase):
    shape: Literal["rectangle"]
    # Anchored at its top-left corner.
    rectangle: Optional[RectangleGeom] = None


class CircleArea(_AreaBase):
    shape: Literal["circle"]
    circle: Optional[CircleGeom] = None


class EllipseArea(_AreaBase):
    shape: Literal["ellipse"]
    ellipse: Optional[EllipseGeom] = None


class PolygonArea(_AreaBase):
    shape: Literal["polygon"]
    # Vertices relative to the area position.
    polygon: Optional[PolygonGeom] = None


class TextArea(_AreaBase):
    shape: Literal["text"]


Area = Annotated[
    Union[RectangleArea, CircleArea, EllipseArea, PolygonArea, TextArea],
    Field(discriminator="shape"),
]


class Zone(_Node):
    position: Position = ORIGIN
    rows: list[Row] = Field(default_factory=list)
    areas: list[Area] = Field(default_factory=list)


class Category(_Node):
    name: str
    color: str = "#cccccc"


class Scene(_Node):
    name: str = ""
    size: Size
    zones: list[Zone] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)


class ObjectKind(str, Enum):
    seat = "seat"
    row = "row"
    area = "area"
    category = "category"


@dataclass(frozen=True)
class ObjectRef:
    """
    Address of a selectable object inside a Scene.

    Seats use (zone, row, index), rows (zone, row), areas (zone, index) and
    categories (index). References are indices, so they are only meaningful
    against the Scene they were produced from or one with the same structure.
    """

    kind: ObjectKind
    zone: int = 0
    row: int = 0
    index: int = 0

    @classmethod
    def seat(cls, zone: int, row: int, index: int) -> "ObjectRef":
        return cls(ObjectKind.seat, zone, row, index)

    @classmethod
    def for_row(cls, zone: int, row: int) -> "ObjectRef":
        return cls(ObjectKind.row, zone, row, 0)

    @classmethod
    def area(cls, zone: int, index: int) -> "ObjectRef":
        return cls(ObjectKind.area, zone, 0, index)

    @classmethod
    def category(cls, index: int) -> "ObjectRef":
        return cls(ObjectKind.category, 0, 0, index)

    def __str__(self) -> str:
        if self.kind == ObjectKind.seat:
            return f"seat:{self.zone}/{self.row}/{self.index}"
        if self.kind == ObjectKind.row:
            return f"row:{self.zone}/{self.row}"
        if self.kind == ObjectKind.area:
            return f"area:{self.zone}/{self.index}"
        return f"category:{self.index}"

    @classmethod
    def parse(cls, text: str) -> "ObjectRef":
        kind, _, rest = (text or "").partition(":")
        try:
            parts = [int(p) for p in rest.split("/")] if rest else []
            k = ObjectKind(kind.strip().lower())
        except ValueError as e:
            raise SeatMapError(f"invalid object reference: {text!r}") from e
        arity = {ObjectKind.seat: 3, ObjectKind.row: 2, ObjectKind.area: 2, ObjectKind.category: 1}[k]
        if len(parts) != arity:
            raise SeatMapError(f"invalid object reference: {text!r}")
        if k == ObjectKind.seat:
            return cls.seat(*parts)
        if k == ObjectKind.row:
            return cls.for_row(*parts)
        if k == ObjectKind.area:
            return cls.area(*parts)
        return cls.category(parts[0])


def area_id(zone_index: int, area_index: int, area: Any) -> str:
    return area.uuid or f"zone{zone_index}-area{area_index}"


def _at(items: list, i: int, what: str) -> Any:
    if not (0 <= i < len(items)):
        raise SeatMapError(f"{what} index out of range: {i}")
    return items[i]


def resolve(scene: Scene, ref: ObjectRef) -> Any:
    if ref.kind == ObjectKind.category:
        return _at(scene.categories, ref.index, "category")
    zone = _at(scene.zones, ref.zone, "zone")
    if ref.kind == ObjectKind.area:
        return _at(zone.areas, ref.index, "area")
    row = _at(zone.rows, ref.row, "row")
    if ref.kind == ObjectKind.row:
        return row
    return _at(row.seats, ref.index, "seat")


def try_resolve(scene: Scene, ref: Optional[ObjectRef]) -> Any:
    if ref is None:
        return None
    try:
        return resolve(scene, ref)
    except SeatMapError:
        return None


def iter_seats(scene: Scene) -> Iterator[tuple[ObjectRef, Zone, Row, Seat]]:
    for zi, zone in enumerate(scene.zones):
        for ri, row in enumerate(zone.rows):
            for si, seat in enumerate(row.seats):
                yield ObjectRef.seat(zi, ri, si), zone, row, seat


def find_seat(scene: Scene, seat_guid: str) -> Optional[ObjectRef]:
    for ref, _, _, seat in iter_seats(scene):
        if seat.seat_guid == seat_guid:
            return ref
    return None


# Copy-on-write writers: each returns a new Scene sharing every untouched subtree.


def _replaced(items: list, i: int, value: Any) -> list:
    out = list(items)
    out[i] = value
    return out


def replace_zone(scene: Scene, zi: int, zone: Zone) -> Scene:
    _at(scene.zones, zi, "zone")
    return scene.model_copy(update={"zones": _replaced(scene.zones, zi, zone)})


def replace_row(scene: Scene, zi: int, ri: int, row: Row) -> Scene:
    zone = _at(scene.zones, zi, "zone")
    _at(zone.rows, ri, "row")
    return replace_zone(scene, zi, zone.model_copy(update={"rows": _replaced(zone.rows, ri, row)}))


def replace_seat(scene: Scene, zi: int, ri: int, si: int, seat: Seat) -> Scene:
    row = _at(_at(scene.zones, zi, "zone").rows, ri, "row")
    _at(row.seats, si, "seat")
    return replace_row(scene, zi, ri, row.model_copy(update={"seats": _replaced(row.seats, si, seat)}))


def replace_area(scene: Scene, zi: int, ai: int, area: Any) -> Scene:
    zone = _at(scene.zones, zi, "zone")
    _at(zone.areas, ai, "area")
    return replace_zone(scene, zi, zone.model_copy(update={"areas": _replaced(zone.areas, ai, area)}))


def replace_category(scene: Scene, ci: int, category: Category) -> Scene:
    _at(scene.categories, ci, "category")
    return scene.model_copy(update={"categories": _replaced(scene.categories, ci, category)})


def replace_object(scene: Scene, ref: ObjectRef, obj: Any) -> Scene:
    if ref.kind == ObjectKind.seat:
        return replace_seat(scene, ref.zone, ref.row, ref.index, obj)
    if ref.kind == ObjectKind.row:
        return replace_row(scene, ref.zone, ref.row, obj)
    if ref.kind == ObjectKind.area:
        return replace_area(scene, ref.zone, ref.index, obj)
    return replace_category(scene, ref.index, obj)


def with_position(scene: Scene, ref: ObjectRef, position: Position) -> Scene:
    """Write a parent-relative position into the referenced node."""
    if ref.kind == ObjectKind.category:
        raise SeatMapError("categories have no position")
    obj = resolve(scene, ref)
    return replace_object(scene, ref, obj.model_copy(update={"position": position}))
