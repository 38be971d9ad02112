"""
Load boards, realm settings and user settings from a JSON fixture.

Fixture layout::

    {
      "realms": {"v0": {"root": [...], "index_page": [...]}},
      "boards": [{"id": "...", "realm_id": "...", "slug": "gore", ...}],
      "users": {
        "<firebase uid>": {
          "settings": [{"name": "...", "type": "...", "value": ...}],
          "boards": {"<board id>": {"last_visit_at": 0, "muted": false}}
        }
      }
    }

The whole fixture is validated before anything is written, so a bad entry
never leaves the database half seeded.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from boba_backend.db import BoardRecord, BoardUserState, DbClient


class BoardFixture(BaseModel):
    # Per-user fields are derived at read time, not stored on the board.
    model_config = ConfigDict(extra="forbid")

    id: str
    realm_id: str
    slug: str
    tagline: str = ""
    avatar_url: Optional[str] = None
    accent_color: Optional[str] = None
    logged_in_only: bool = False
    delisted: bool = False
    last_post_at: Optional[float] = None
    last_comment_at: Optional[float] = None
    last_activity_at: Optional[float] = None
    last_activity_from_others_at: Optional[float] = None


class BoardStateFixture(BaseModel):
    model_config = ConfigDict(extra="forbid")

    last_visit_at: Optional[float] = None
    muted: bool = False
    pinned_order: Optional[int] = None


class UserSettingFixture(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    type: str = "STRING"
    value: Any = None


class UserFixture(BaseModel):
    model_config = ConfigDict(extra="forbid")

    settings: list[UserSettingFixture] = Field(default_factory=list)
    boards: dict[str, BoardStateFixture] = Field(default_factory=dict)


class RealmFixture(BaseModel):
    model_config = ConfigDict(extra="forbid")

    realms: dict[str, dict] = Field(default_factory=dict)
    boards: list[BoardFixture] = Field(default_factory=list)
    users: dict[str, UserFixture] = Field(default_factory=dict)


def load_fixture(db: DbClient, fixture: dict) -> dict[str, int]:
    """Validate ``fixture`` and write it to ``db``; raises ``ValueError`` on bad input."""
    parsed = RealmFixture.model_validate(fixture)

    for realm_slug, settings in parsed.realms.items():
        db.save_realm_settings(realm_slug, settings)

    for board in parsed.boards:
        db.save_board(BoardRecord(**board.model_dump()))

    for firebase_id, user in parsed.users.items():
        db.save_user_settings(
            firebase_id, [setting.model_dump() for setting in user.settings]
        )
        for board_id, state in user.boards.items():
            db.save_board_user_state(
                BoardUserState(
                    firebase_id=firebase_id, board_id=board_id, **state.model_dump()
                )
            )

    return {
        "realms": len(parsed.realms),
        "boards": len(parsed.boards),
        "users": len(parsed.users),
    }
