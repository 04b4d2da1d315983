from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from gestao_colaboradores.api.health import router as health_router
from gestao_colaboradores.api.router import api_router
from gestao_colaboradores.config import Settings, get_settings
from gestao_colaboradores.exceptions import setup_exception_handlers
from gestao_colaboradores.logging_config import setup_logging
from gestao_colaboradores.middleware import build_rate_limiter, setup_middleware
from gestao_colaboradores.services.colaborador import ColaboradorStore, InMemoryColaboradorStore
from gestao_colaboradores.services.security import RateLimiter

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        "Starting %s v%s [%s] on port %s",
        settings.app_name,
        settings.app_version,
        settings.environment,
        settings.port,
    )
    yield
    logger.info("Shutting down %s", settings.app_name)


def create_app(
    settings: Settings | None = None,
    store: ColaboradorStore | None = None,
    rate_limiter: RateLimiter | None = None,
) -> FastAPI:
    """Application factory.

    Each application owns its record store and rate limiter, so separate
    instances never share state. A given ``rate_limiter`` replaces the one
    built from settings, unless rate limiting is disabled.
    """
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=settings.description,
        # Starlette debug mode answers 500s with a plain-text traceback
        debug=settings.debug and settings.is_development,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )

    application.state.settings = settings
    application.state.started_at = time.monotonic()
    application.state.colaborador_store = store if store is not None else InMemoryColaboradorStore()
    application.state.rate_limiter = None
    if settings.rate_limit_enabled:
        application.state.rate_limiter = rate_limiter if rate_limiter is not None else build_rate_limiter(settings)

    setup_middleware(application, settings, application.state.rate_limiter)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()
