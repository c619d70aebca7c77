"""
FastAPI application for the Standings Dashboard.

Serves current standings tables and per-team statistic series to the
dashboard front end. Historical ranges are cached through StatsCache;
current-season standings are always fetched live.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import msgspec
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from ..core.config import get_settings
from ..core.errors import StandingsError
from .dependencies import CacheDependency, close_client
from .errors import APIError, api_error_handler, standings_error_handler
from .routers import standings, statistics, teams

logger = logging.getLogger(__name__)


class MSGSpecResponse(Response):
    """Custom response class using msgspec for JSON serialization."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        if content is None:
            return b""
        return msgspec.json.encode(content)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the shared standings client on shutdown."""
    logger.info("Starting Standings Dashboard API...")
    yield
    logger.info("Shutting down Standings Dashboard API...")
    await close_client()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="MLB standings tables and historical team statistics",
        version=settings.app_version,
        default_response_class=MSGSpecResponse,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["Accept", "Content-Type"],
        expose_headers=["X-Process-Time"],
    )

    @app.middleware("http")
    async def add_timing_header(request: Request, call_next):
        """Add timing header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"
        return response

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StandingsError, standings_error_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with consistent format."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        show_detail = settings.debug and settings.environment != "production"
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "detail": str(exc) if show_detail else None,
                    "retryable": False,
                }
            },
        )

    @app.get("/health", tags=["health"])
    async def health_check(cache: CacheDependency):
        """Basic health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
            "cached_entries": len(cache.store.keys()),
        }

    app.include_router(standings.router, prefix=f"{settings.api_prefix}/standings", tags=["standings"])
    app.include_router(teams.router, prefix=f"{settings.api_prefix}/teams", tags=["teams"])
    app.include_router(statistics.router, prefix=f"{settings.api_prefix}/statistics", tags=["statistics"])

    return app


app = create_app()
