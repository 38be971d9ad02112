"""
Pydantic schemas for the realms API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class BoardSummary(BaseModel):
    id: str
    realm_id: str
    slug: str
    tagline: str
    avatar_url: Optional[str] = None
    accent_color: Optional[str] = None
    logged_in_only: bool
    delisted: bool


class RealmResponse(BaseModel):
    slug: str
    settings: dict
    boards: list[BoardSummary]


class BoardActivity(BaseModel):
    id: str
    last_post_at: Optional[str] = None
    last_comment_at: Optional[str] = None
    last_activity_at: Optional[str] = None
    last_activity_from_others_at: Optional[str] = None
    last_visit_at: Optional[str] = None
    muted: bool
    pinned_order: Optional[int] = None
    has_updates: bool


class RealmActivityResponse(BaseModel):
    boards: dict[str, BoardActivity]


class ErrorResponse(BaseModel):
    message: str
