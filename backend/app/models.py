from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SceneDocument(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = ""

    # Full scene document as uploaded or last saved from a session.
    doc_json: str

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    def doc(self) -> dict:
        return json.loads(self.doc_json)
