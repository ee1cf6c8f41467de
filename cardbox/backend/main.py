"""
FastAPI application for the cards API.

`uvicorn cardbox.backend.main:app` builds the app on first access of `app`,
so importing this module never reads configuration. Tests call create_app().
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardbox.backend.api import health
from cardbox.backend.api.v1 import router as api_v1_router
from cardbox.backend.core.config import get_app_config
from cardbox.backend.core.database import create_tables, dispose_engine
from cardbox.backend.core.exception_handlers import register_exception_handlers
from cardbox.backend.core.logging import get_logger, setup_logging
from cardbox.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config = get_app_config()
    setup_logging()
    if config.database.create_tables_on_startup:
        await create_tables()
    logger.info(
        "Application starting",
        extra={"app_name": config.application.name, "env": config.application.environment},
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Application stopped")


def create_app() -> FastAPI:
    settings = get_app_config().application
    app = FastAPI(
        title=settings.name,
        description=settings.description,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    if settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors.origins,
            allow_methods=settings.cors.allow_methods,
            allow_headers=settings.cors.allow_headers,
            allow_credentials=settings.cors.allow_credentials,
        )
    # Outermost, so CORS preflight responses carry a request id too
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=settings.api_prefix)
    return app


_app: FastAPI | None = None


def __getattr__(name: str) -> FastAPI:
    global _app
    if name != "app":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    if _app is None:
        _app = create_app()
    return _app
