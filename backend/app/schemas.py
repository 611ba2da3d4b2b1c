from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from seatmap.selection import SelectionMode


class PointerEvent(BaseModel):
    # Screen-space canvas coordinates; the session divides by its zoom.
    x: float
    y: float


class ZoomRequest(BaseModel):
    # Either a wheel delta (zooms only with the modifier held) or a fixed step.
    delta_y: Optional[float] = None
    modifier: bool = True
    step: Optional[int] = Field(default=None, ge=-1, le=1)
    value: Optional[float] = None


class ModeUpdate(BaseModel):
    mode: SelectionMode


class MoveEnabledUpdate(BaseModel):
    enabled: bool


class SelectRequest(BaseModel):
    # Object reference such as "seat:0/1/2", "row:0/1", "area:0/3"; null clears.
    ref: Optional[str] = None


class PropertyApply(BaseModel):
    name: str
    value: Any = None
    ref: Optional[str] = None


class CategoryRename(BaseModel):
    old_name: str
    new_name: str


class StatusApply(BaseModel):
    status: str


class SessionState(BaseModel):
    session_id: str
    scene_id: int
    mode: str
    zoom: float
    move_enabled: bool
    dragging: bool
    selected_seat_ids: list[str]
    selected_object: Optional[str] = None
    marquee: Optional[list[float]] = None
    properties: Optional[dict] = None
