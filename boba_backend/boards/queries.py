from __future__ import annotations

from typing import Optional

from boba_backend.db import BoardRecord, DbClient


def get_boards(db: DbClient, *, firebase_id: str | None = None) -> Optional[list[BoardRecord]]:
    """All boards visible to ``firebase_id``, with that user's visit/mute state."""
    return db.get_boards(firebase_id)
