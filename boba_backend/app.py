"""
FastAPI application entry point for the realms backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from boba_backend.config import get_settings
from boba_backend.realms.routes import router as realms_router


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    app = FastAPI(title="Boba Realms Backend (FastAPI)", version="0.1.0")
    app.include_router(realms_router, prefix=f"{settings.api_prefix}/realms")
    return app


app = create_app()
