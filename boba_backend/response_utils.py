"""
Shapes shared by multiple routers when returning boards to clients.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from boba_backend.db import BoardRecord


def to_iso_timestamp(value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


def process_boards_summary(
    *, boards: Optional[Iterable[BoardRecord]], is_logged_in: bool
) -> list[dict]:
    """
    Public summary of each board. Logged-in-only boards are hidden from
    anonymous callers; delisted boards are kept with their flag set so
    clients can leave them out of navigation.
    """
    summaries = []
    for board in boards or []:
        if board.logged_in_only and not is_logged_in:
            continue
        summaries.append(
            {
                "id": board.id,
                "realm_id": board.realm_id,
                "slug": board.slug,
                "tagline": board.tagline,
                "avatar_url": board.avatar_url,
                "accent_color": board.accent_color,
                "logged_in_only": board.logged_in_only,
                "delisted": board.delisted,
            }
        )
    return summaries
