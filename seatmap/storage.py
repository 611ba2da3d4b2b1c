from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .model import Scene, SeatMapError

logger = logging.getLogger(__name__)


def scene_from_dict(data: Any) -> Scene:
    try:
        return Scene.model_validate(data)
    except ValidationError as e:
        raise SeatMapError(f"invalid scene document: {e}") from e


def scene_to_dict(scene: Scene) -> dict:
    return scene.model_dump(mode="json")


def load_scene(path: str | Path) -> Scene:
    p = Path(path)
    if not p.exists():
        raise SeatMapError(f"scene file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except Exception as e:  # noqa: BLE001
        raise SeatMapError(f"failed to read scene JSON: {e}") from e

    scene = scene_from_dict(data)
    logger.info("loaded scene %r from %s", scene.name, p)
    return scene


def save_scene(scene: Scene, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(scene_to_dict(scene), indent=2) + "\n", encoding="utf-8")
    logger.info("saved scene %r to %s", scene.name, p)
