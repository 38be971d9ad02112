"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from boba_backend.auth import FirebaseTokenVerifier, InMemoryTokenVerifier, TokenVerifier
from boba_backend.config import get_settings
from boba_backend.db import DbClient, InMemoryDbClient, PostgresDbClient

_db_client: DbClient | None = None
_token_verifier: TokenVerifier | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client shared across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client


def get_token_verifier() -> TokenVerifier:
    global _token_verifier
    if _token_verifier:
        return _token_verifier

    settings = get_settings()
    if settings.use_in_memory_backends:
        _token_verifier = InMemoryTokenVerifier(settings.parsed_dev_tokens())
    else:
        _token_verifier = FirebaseTokenVerifier(
            project_id=settings.firebase_project_id,
            credentials_path=settings.firebase_credentials_path,
        )
    return _token_verifier
