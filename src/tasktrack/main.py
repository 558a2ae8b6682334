"""Entry point for the TaskTrack FastAPI application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .db.session import dispose_engine, init_db
from .deps import SettingsDependency
from .errors import register_exception_handlers
from .schemas.system import RootResponse
from .services import MAX_PROJECTS_PER_USER

logger = logging.getLogger(__name__)


def _normalise_prefix(raw_prefix: str) -> str:
    prefix = raw_prefix.strip()
    if prefix and not prefix.startswith("/"):
        prefix = f"/{prefix}"
    prefix = prefix.rstrip("/")
    return "" if prefix == "/" else prefix


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings)

    router_prefix = _normalise_prefix(settings.api_prefix)
    openapi_url = f"{router_prefix}/openapi.json"

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if settings.create_schema_on_startup:
            await init_db()
            logger.info("Database schema ensured")
        try:
            yield
        finally:
            await dispose_engine()

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Multi-tenant project and task tracker.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=openapi_url,
        lifespan=lifespan,
    )

    application.state.settings = settings

    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    application.include_router(api_router, prefix=router_prefix)
    application.include_router(health_router)

    @application.get(
        f"{router_prefix}/metadata",
        response_model=RootResponse,
        summary="Service metadata",
    )
    async def read_metadata(settings: SettingsDependency) -> RootResponse:
        """Expose minimal service metadata for API clients."""

        return RootResponse(
            name=settings.project_name,
            environment=settings.environment,
            version=settings.version,
            api_prefix=settings.api_prefix,
            max_projects_per_user=MAX_PROJECTS_PER_USER,
        )

    register_exception_handlers(application)

    return application


def run() -> None:
    """Console entry point: ``tasktrack``."""

    settings: Settings = get_settings()
    uvicorn.run(
        "tasktrack.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )
