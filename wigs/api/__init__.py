"""WIGs REST API — FastAPI application factory.

Run with::

    uvicorn wigs.api:create_app --factory
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wigs import __version__
from wigs.api.deps import dispose_engine, get_engine, init_session_factory
from wigs.api.errors import register_error_handlers
from wigs.api.middleware.request_id import RequestIDMiddleware
from wigs.api.routers import wigs as wigs_routes
from wigs.core.database import create_tables
from wigs.core.logging import setup_logging

log = structlog.get_logger("wigs.api")


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: init DB (and tables). Shutdown: dispose engine."""
    init_session_factory()
    if _env_flag("WIGS_CREATE_TABLES", "1"):
        await create_tables(get_engine())
    log.info("app.started", version=__version__)
    yield
    await dispose_engine()
    log.info("app.stopped")


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title="WIGs",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=_lifespan,
    )

    register_error_handlers(app)

    cors_origins = os.environ.get("WIGS_CORS_ORIGINS", "http://localhost:3000")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(wigs_routes.router, prefix="/api/wigs", tags=["wigs"])

    return app
