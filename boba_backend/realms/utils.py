from __future__ import annotations

from typing import Iterable, Optional

from boba_backend.db import BoardRecord
from boba_backend.response_utils import to_iso_timestamp


def process_realm_activity(*, boards: Optional[Iterable[BoardRecord]]) -> dict[str, dict]:
    """Per-board activity keyed by board id."""
    activity: dict[str, dict] = {}
    for board in boards or []:
        activity[board.id] = {
            "id": board.id,
            "last_post_at": to_iso_timestamp(board.last_post_at),
            "last_comment_at": to_iso_timestamp(board.last_comment_at),
            "last_activity_at": to_iso_timestamp(board.last_activity_at),
            "last_activity_from_others_at": to_iso_timestamp(
                board.last_activity_from_others_at
            ),
            "last_visit_at": to_iso_timestamp(board.last_visit_at),
            "muted": board.muted,
            "pinned_order": board.pinned_order,
            "has_updates": board.has_updates,
        }
    return activity
