"""
HTTP routes for realm metadata and realm activity.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from boba_backend.auth import CurrentUser
from boba_backend.boards.queries import get_boards
from boba_backend.db import DbClient
from boba_backend.dependencies import get_db_client
from boba_backend.handlers import is_logged_in, with_user_settings
from boba_backend.realms.queries import get_settings_by_slug
from boba_backend.realms.utils import process_realm_activity
from boba_backend.response_utils import process_boards_summary
from boba_backend.schemas import ErrorResponse, RealmActivityResponse, RealmResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realms"])

REALM_FETCH_ERROR = "There was an error fetching realm data."


def _realm_fetch_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": REALM_FETCH_ERROR})


@router.get(
    "/slug/{realm_slug}",
    response_model=RealmResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_realm_by_slug(
    realm_slug: str,
    current_user: CurrentUser = Depends(with_user_settings),
    db: DbClient = Depends(get_db_client),
):
    """
    Fetches the top-level realm metadata by slug.
    """
    try:
        settings = get_settings_by_slug(
            db,
            realm_slug=realm_slug,
            user_settings=current_user.settings or [],
        )

        # TODO: fetch only the boards belonging to this realm.
        boards = get_boards(db, firebase_id=current_user.uid)
        if not boards:
            logger.warning(
                "No boards found for realm %s (user %s)", realm_slug, current_user.uid
            )

        realm_boards = process_boards_summary(
            boards=boards, is_logged_in=bool(current_user.uid)
        )
        return RealmResponse(slug=realm_slug, settings=settings, boards=realm_boards)
    except Exception:
        logger.exception("Failed to fetch realm %s", realm_slug)
        return _realm_fetch_error()


@router.get(
    "/{realm_id}/activity",
    response_model=RealmActivityResponse,
    responses={500: {"model": ErrorResponse}},
)
def get_realm_activity(
    realm_id: UUID,
    current_user: CurrentUser = Depends(is_logged_in),
    db: DbClient = Depends(get_db_client),
):
    """
    Fetches latest activity summary for the realm.
    """
    try:
        # TODO: fetch only the boards belonging to realm_id.
        boards = get_boards(db, firebase_id=current_user.uid)
        if not boards:
            logger.warning(
                "No boards found for realm %s (user %s)", realm_id, current_user.uid
            )

        realm_boards = process_realm_activity(boards=boards)
        return RealmActivityResponse(boards=realm_boards)
    except Exception:
        logger.exception("Failed to fetch activity for realm %s", realm_id)
        return _realm_fetch_error()
