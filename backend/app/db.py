from __future__ import annotations

import logging
import os
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger(__name__)


def _default_db_url() -> str:
    # Scene documents live next to the working directory unless told otherwise.
    data_dir = Path(os.environ.get("SEATMAP_DATA_DIR", Path.cwd() / "data"))
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{data_dir / 'seatmap.db'}"


DB_URL = os.environ.get("SEATMAP_DB_URL") or _default_db_url()

engine = create_engine(
    DB_URL,
    echo=os.environ.get("SEATMAP_DB_ECHO", "").lower() in ("1", "true", "yes"),
    connect_args={"check_same_thread": False} if DB_URL.startswith("sqlite") else {},
)


def init_db() -> None:
    from . import models  # noqa: F401 - ensure models are registered

    SQLModel.metadata.create_all(engine)
    logger.info("scene store ready at %s", engine.url)


def get_session() -> Session:
    return Session(engine)
