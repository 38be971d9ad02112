"""
Request gates shared by the routers.

``is_logged_in`` rejects requests without a verifiable ID token before any
route code runs. ``with_user_settings`` builds on it and attaches the
caller's stored settings.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, status

from boba_backend.auth import CurrentUser, InvalidTokenError, TokenVerifier
from boba_backend.db import DbClient
from boba_backend.dependencies import get_db_client, get_token_verifier

logger = logging.getLogger(__name__)


def _extract_token(authorization: str) -> str:
    scheme, _, credentials = authorization.partition(" ")
    if credentials and scheme.lower() == "bearer":
        return credentials.strip()
    return authorization.strip()


def is_logged_in(
    authorization: str | None = Header(default=None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> CurrentUser:
    token = _extract_token(authorization or "")
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    try:
        uid = verifier.verify(token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return CurrentUser(uid=uid)


def with_user_settings(
    current_user: CurrentUser = Depends(is_logged_in),
    db: DbClient = Depends(get_db_client),
) -> CurrentUser:
    current_user.settings = db.get_user_settings(current_user.uid)
    logger.debug(
        "Resolved %d settings for user %s", len(current_user.settings), current_user.uid
    )
    return current_user
