"""
FastAPI Main Application - API entry point.

Run with: uvicorn gscnews.interfaces.api.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gscnews import __version__
from gscnews.config import get_settings

from .deps import cleanup_services, init_services
from .middleware import ErrorHandlerMiddleware, LatencyMiddleware, RequestIDMiddleware
from .routes import health, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting GSC News API...")
    logger.info("  Database: %s", settings.db_path)
    logger.info(
        "  Query enhancement: %s",
        "enabled" if settings.enhancement_configured else "disabled (no API key)",
    )

    await init_services()
    logger.info("  Services initialized")

    yield

    logger.info("Shutting down GSC News API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="GSC News API",
        description="Supply chain news search with AI query enhancement",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters - first added = innermost)
    # 1. Error handling (catch exceptions from route handlers)
    app.add_middleware(ErrorHandlerMiddleware)

    # 2. Latency tracking
    app.add_middleware(LatencyMiddleware)

    # 3. Request ID (outermost custom - sets the ID before the others log)
    app.add_middleware(RequestIDMiddleware)

    # 4. CORS (framework middleware)
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5000",
    ]
    if settings.api_debug:
        allowed_origins.append("http://localhost:5173")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(search.router, prefix="/api/search", tags=["Search"])

    return app


# Create app instance
app = create_app()
