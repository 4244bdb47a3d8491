"""
VO Foundry views service — FastAPI application.

Entry point for the API server:

  uvicorn backend.main:app
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import settings
from backend.routes import views as view_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Configures logging on startup; nothing to release on shutdown.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("views service started (environment=%s, views_file=%s)", settings.ENVIRONMENT, settings.VIEWS_FILE)

    yield

    logger.info("views service stopped")


app = FastAPI(
    title="VO Foundry Views",
    docs_url="/docs" if settings.is_development else None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(view_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
