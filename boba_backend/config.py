"""
Configuration and settings for the realms backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_prefix="BOBA_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Database (Postgres expected, any SQLAlchemy URL works)
    database_url: Optional[str] = Field(default=None)

    # Firebase auth
    firebase_project_id: Optional[str] = Field(default=None)
    firebase_credentials_path: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)
    # Comma-separated "token:uid" pairs accepted by the in-memory verifier.
    dev_auth_tokens: str = Field(default="")

    log_level: str = Field(default="INFO")

    def parsed_dev_tokens(self) -> dict[str, str]:
        tokens: dict[str, str] = {}
        for pair in self.dev_auth_tokens.split(","):
            token, sep, uid = pair.strip().partition(":")
            if sep and token and uid:
                tokens[token] = uid
        return tokens


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
