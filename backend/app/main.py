from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session, select

from seatmap.model import ObjectRef, SeatMapError
from seatmap.properties import get_properties as read_properties
from seatmap.render import highlight_outline
from seatmap.storage import scene_from_dict, scene_to_dict

from .db import get_session, init_db
from .models import SceneDocument, _utc_now
from .schemas import (
    CategoryRename,
    ModeUpdate,
    MoveEnabledUpdate,
    PointerEvent,
    PropertyApply,
    SelectRequest,
    SessionState,
    StatusApply,
    ZoomRequest,
)
from .sessions import SessionHandle, registry

logger = logging.getLogger(__name__)


app = FastAPI(title="Seat Map Editor API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup() -> None:
    init_db()


def _session() -> Session:
    return get_session()


def _handle(session_id: str) -> SessionHandle:
    handle = registry.get(session_id)
    if handle is None:
        raise HTTPException(status_code=404, detail="session not found")
    return handle


def _ref(text: Optional[str]) -> Optional[ObjectRef]:
    if text is None:
        return None
    try:
        return ObjectRef.parse(text)
    except SeatMapError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _state(handle: SessionHandle) -> SessionState:
    editor = handle.editor
    return SessionState(
        session_id=handle.id,
        scene_id=handle.scene_id,
        properties=editor.properties(),
        **editor.snapshot(),
    )


@app.get("/health")
def health() -> dict:
    return {"ok": True}


# Scene documents ---------------------------------------------------------


@app.post("/scenes")
def create_scene(payload: dict = Body(...), session: Session = Depends(_session)) -> dict:
    try:
        scene = scene_from_dict(payload)
    except SeatMapError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    doc = SceneDocument(name=scene.name, doc_json=json.dumps(scene_to_dict(scene)))
    session.add(doc)
    session.commit()
    session.refresh(doc)
    logger.info("stored scene %s (%r)", doc.id, doc.name)
    return {"id": doc.id, "name": doc.name}


@app.get("/scenes")
def list_scenes(session: Session = Depends(_session)) -> list[dict]:
    docs = session.exec(select(SceneDocument).order_by(SceneDocument.created_at.desc())).all()
    return [{"id": d.id, "name": d.name} for d in docs]


@app.get("/scenes/{scene_id}")
def get_scene(scene_id: int, session: Session = Depends(_session)) -> dict:
    doc = session.get(SceneDocument, scene_id)
    if not doc:
        raise HTTPException(status_code=404, detail="scene not found")
    return doc.doc()


@app.delete("/scenes/{scene_id}")
def delete_scene(scene_id: int, session: Session = Depends(_session)) -> dict:
    doc = session.get(SceneDocument, scene_id)
    if not doc:
        raise HTTPException(status_code=404, detail="scene not found")
    session.delete(doc)
    session.commit()
    closed = registry.close_for_scene(scene_id)
    return {"deleted": True, "sessions_closed": closed}


@app.post("/scenes/{scene_id}/sessions")
def open_session(scene_id: int, session: Session = Depends(_session)) -> SessionState:
    doc = session.get(SceneDocument, scene_id)
    if not doc:
        raise HTTPException(status_code=404, detail="scene not found")
    try:
        scene = scene_from_dict(doc.doc())
    except SeatMapError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _state(registry.open(scene_id, scene))


# Editing sessions ----------------------------------------------------------


@app.get("/sessions/{session_id}")
def session_state(session_id: str) -> SessionState:
    handle = _handle(session_id)
    with handle.lock:
        return _state(handle)


@app.delete("/sessions/{session_id}")
def close_session(session_id: str) -> dict:
    if not registry.close(session_id):
        raise HTTPException(status_code=404, detail="session not found")
    return {"closed": True}


@app.get("/sessions/{session_id}/scene")
def session_scene(session_id: str) -> dict:
    handle = _handle(session_id)
    with handle.lock:
        return scene_to_dict(handle.editor.scene)


@app.post("/sessions/{session_id}/pointer/{action}")
def pointer(session_id: str, action: str, payload: Optional[PointerEvent] = None) -> SessionState:
    handle = _handle(session_id)
    if action not in ("down", "move", "up", "leave"):
        raise HTTPException(status_code=404, detail=f"unknown pointer action: {action}")
    if action != "leave" and payload is None:
        raise HTTPException(status_code=400, detail="pointer position required")
    with handle.lock:
        editor = handle.editor
        try:
            if action == "down":
                editor.pointer_down(payload.x, payload.y)
            elif action == "move":
                editor.pointer_move(payload.x, payload.y)
            elif action == "up":
                editor.pointer_up(payload.x, payload.y)
            else:
                editor.pointer_leave()
        except SeatMapError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return _state(handle)


@app.post("/sessions/{session_id}/zoom")
def zoom(session_id: str, payload: ZoomRequest) -> dict:
    handle = _handle(session_id)
    with handle.lock:
        z = handle.editor.zoom
        if payload.value is not None:
            z.set(payload.value)
        elif payload.step:
            if payload.step > 0:
                z.zoom_in()
            else:
                z.zoom_out()
        elif payload.delta_y is not None:
            handle.editor.wheel(payload.delta_y, modifier=payload.modifier)
        return {"zoom": z.factor}


@app.put("/sessions/{session_id}/mode")
def set_mode(session_id: str, payload: ModeUpdate) -> SessionState:
    handle = _handle(session_id)
    with handle.lock:
        handle.editor.set_mode(payload.mode)
        return _state(handle)


@app.put("/sessions/{session_id}/move-enabled")
def set_move_enabled(session_id: str, payload: MoveEnabledUpdate) -> SessionState:
    handle = _handle(session_id)
    with handle.lock:
        handle.editor.set_move_enabled(payload.enabled)
        return _state(handle)


@app.put("/sessions/{session_id}/selection")
def select_object(session_id: str, payload: SelectRequest) -> SessionState:
    handle = _handle(session_id)
    ref = _ref(payload.ref)
    with handle.lock:
        try:
            handle.editor.select_object(ref)
        except SeatMapError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return _state(handle)


@app.delete("/sessions/{session_id}/selection")
def clear_selection(session_id: str) -> SessionState:
    handle = _handle(session_id)
    with handle.lock:
        handle.editor.clear_selection()
        return _state(handle)


@app.get("/sessions/{session_id}/highlight")
def highlight(session_id: str) -> dict:
    handle = _handle(session_id)
    with handle.lock:
        editor = handle.editor
        ref = editor.controller.current_object(editor.scene)
        outline: Optional[dict[str, Any]] = highlight_outline(editor.scene, ref) if ref is not None else None
        return {"selected_object": str(ref) if ref is not None else None, "outline": outline}


@app.get("/sessions/{session_id}/properties")
def get_properties(session_id: str, ref: Optional[str] = None) -> dict:
    handle = _handle(session_id)
    target = _ref(ref)
    with handle.lock:
        editor = handle.editor
        if target is None:
            props = editor.properties()
            if props is None:
                raise HTTPException(status_code=404, detail="no object selected")
            return props
        try:
            return read_properties(editor.scene, target)
        except SeatMapError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e


@app.put("/sessions/{session_id}/properties")
def apply_property(session_id: str, payload: PropertyApply) -> dict:
    handle = _handle(session_id)
    target = _ref(payload.ref)
    with handle.lock:
        try:
            changed = handle.editor.apply_property(payload.name, payload.value, target)
        except SeatMapError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return {"changed": changed, "properties": handle.editor.properties()}


@app.post("/sessions/{session_id}/categories/rename")
def rename_category(session_id: str, payload: CategoryRename) -> dict:
    handle = _handle(session_id)
    with handle.lock:
        changed = handle.editor.rename_category(payload.old_name, payload.new_name)
        return {"changed": changed, "categories": [c.model_dump(mode="json") for c in handle.editor.scene.categories]}


@app.post("/sessions/{session_id}/status")
def apply_status(session_id: str, payload: StatusApply) -> dict:
    handle = _handle(session_id)
    with handle.lock:
        try:
            updated = handle.editor.apply_status(payload.status)
        except SeatMapError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return {"updated": updated, "stats": handle.editor.stats()}


@app.get("/sessions/{session_id}/stats")
def stats(session_id: str) -> dict:
    handle = _handle(session_id)
    with handle.lock:
        counts = handle.editor.stats()
        return {**counts, "total": sum(counts.values())}


@app.post("/sessions/{session_id}/save")
def save_session(session_id: str, session: Session = Depends(_session)) -> dict:
    handle = _handle(session_id)
    doc = session.get(SceneDocument, handle.scene_id)
    if not doc:
        raise HTTPException(status_code=404, detail="scene not found")
    with handle.lock:
        scene = handle.editor.scene
        doc.name = scene.name
        doc.doc_json = json.dumps(scene_to_dict(scene))
    doc.updated_at = _utc_now()
    session.add(doc)
    session.commit()
    logger.info("session %s saved to scene %s", session_id, doc.id)
    return {"saved": True, "scene_id": doc.id}
