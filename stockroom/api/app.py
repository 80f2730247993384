"""
FastAPI application for the Stockroom API.

Public routes: /, /health, /signup, /login.
Everything under /api sits behind the access guard.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from stockroom.api import products, providers
from stockroom.api.errors import register_error_handlers
from stockroom.auth.guard import AccessGuard, require_auth
from stockroom.auth.jwt import TokenIssuer
from stockroom.auth.routes import router as auth_router
from stockroom.config import Settings, get_settings
from stockroom.integrations.sentry import init_sentry
from stockroom.storage.session import create_db_engine, create_session_factory, init_db

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """
    Build the application.

    Raises ConfigurationError if JWT_SECRET is missing, so a misconfigured
    process never starts serving.

    Args:
        settings: Settings to use; defaults to the cached environment settings
        engine: Database engine; defaults to one built from settings.database_url
    """
    settings = settings or get_settings()
    auth_config = settings.auth_config()
    engine = engine or create_db_engine(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup app resources."""
        configure_logging(settings.log_level)
        init_sentry(settings)
        init_db(engine)
        logger.info(f"Stockroom API starting in {settings.environment} mode")

        yield

        engine.dispose()
        logger.info("Stockroom API shutting down")

    app = FastAPI(
        title="Stockroom API",
        description="Products and providers with bearer-token authentication",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.issuer = TokenIssuer(auth_config)
    app.state.guard = AccessGuard(auth_config)
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms")
        return response

    register_error_handlers(app)

    @app.get("/")
    async def root():
        return {"message": "Hello, World!"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok"}

    app.include_router(auth_router)

    guarded = [Depends(require_auth)]
    app.include_router(products.router, prefix="/api", dependencies=guarded)
    app.include_router(providers.router, prefix="/api", dependencies=guarded)

    return app
