"""
Identity verification for Firebase ID tokens, plus an in-memory test double.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin import exceptions as firebase_exceptions

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "boba-realms"


class InvalidTokenError(Exception):
    """Raised when an ID token cannot be verified."""


@dataclass
class CurrentUser:
    uid: str
    # None until resolved by the settings gate.
    settings: Optional[list[dict]] = None


class TokenVerifier(Protocol):
    """Turns a client-supplied ID token into a firebase uid."""

    def verify(self, token: str) -> str:
        ...


class FirebaseTokenVerifier:
    """Verifies ID tokens against Firebase Auth using firebase_admin."""

    def __init__(
        self,
        project_id: str | None = None,
        credentials_path: str | None = None,
    ):
        try:
            self.app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            credential = (
                credentials.Certificate(credentials_path) if credentials_path else None
            )
            options = {"projectId": project_id} if project_id else None
            self.app = firebase_admin.initialize_app(
                credential, options, name=FIREBASE_APP_NAME
            )

    def verify(self, token: str) -> str:
        try:
            decoded = firebase_auth.verify_id_token(token, app=self.app)
        except firebase_auth.InvalidIdTokenError as exc:
            logger.info("Rejected firebase ID token: %s", exc)
            raise InvalidTokenError(str(exc)) from exc
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            # Missing project id, certificate fetch failures and the like.
            logger.warning("Firebase token verification failed: %s", exc)
            raise InvalidTokenError(str(exc)) from exc
        return decoded["uid"]


class InMemoryTokenVerifier:
    """Token -> uid lookup table for tests and local development."""

    def __init__(self, tokens: dict[str, str] | None = None):
        self.tokens: dict[str, str] = dict(tokens or {})

    def add_token(self, token: str, uid: str) -> None:
        self.tokens[token] = uid

    def verify(self, token: str) -> str:
        uid = self.tokens.get(token)
        if uid is None:
            raise InvalidTokenError("Unknown token")
        return uid
