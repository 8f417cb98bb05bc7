"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (shared HTTP
client, Firestore client).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.firebase import close_firebase, init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client, Firestore client (skipped with a
    warning when no credentials are configured). Shutdown order: Firestore
    client close, shared HTTP client close.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for Resend, the CMS and Firebase Storage (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=30.0)
    app.state.firestore_ready = init_firebase(app.state.http_client)
    logger.info(
        "%s %s started (firestore=%s, storage=%s)",
        settings.app_name,
        settings.app_version,
        app.state.firestore_ready,
        settings.storage_backend,
    )

    yield

    # ---- Shutdown ----
    await close_firebase()
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("Shared HTTP client closed")
