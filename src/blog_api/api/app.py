"""
blog_api.api.app

FastAPI app factory for the Blog API service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory) in the lifespan.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blog_api import __version__
from blog_api.api.handlers import register_exception_handlers
from blog_api.api.routers.auth import router as auth_router
from blog_api.api.routers.health import router as health_router
from blog_api.api.routers.posts import router as posts_router
from blog_api.api.routers.users import router as users_router
from blog_api.db.init_db import init_db
from blog_api.db.seed import ensure_admin
from blog_api.db.session import create_engine, create_sessionmaker
from blog_api.observability.logging import configure_logging, get_logger
from blog_api.observability.middleware import RequestContextMiddleware
from blog_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Create the async DB engine and session factory once and stash them on app.state.
        # Routers obtain sessions via dependencies (see `blog_api.api.deps`).
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        await ensure_admin(app.state.sessionmaker, settings)
        try:
            yield
        finally:
            # Dispose the engine to close pools/FDs gracefully.
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Blog API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; business rules stay
# in services, and HTTP translation stays in routers and `api.handlers`.
