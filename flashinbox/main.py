"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from dependency_injector import providers
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flashinbox.config import Settings, configure_logging, get_settings
from flashinbox.core import Container
from flashinbox.database import Database
from flashinbox.infrastructure.inbox.routers import cards, entries, ingest
from flashinbox.infrastructure.settings.routers import settings as settings_router
from flashinbox.infrastructure.sync.routers import anki

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration to use; read from the environment when omitted
        database: Database handle to use; when omitted one is built from
            settings.DATABASE_URL and disposed on shutdown

    Returns:
        The configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings.ENVIRONMENT)

    owns_database = database is None
    database = database or Database(settings.DATABASE_URL)
    container = Container()
    container.settings.override(providers.Object(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.CREATE_SCHEMA_ON_STARTUP:
            database.create_all()
        settings.STORAGE_PATH.mkdir(parents=True, exist_ok=True)
        logger.info("application_started", environment=settings.ENVIRONMENT)
        yield
        container.shutdown_resources()
        if owns_database:
            database.dispose()
        logger.info("application_stopped")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    for router in (entries.router, cards.router, ingest.router, anki.router, settings_router.router):
        app.include_router(router, prefix=settings.API_V1_PREFIX)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("flashinbox.main:create_app", factory=True, host="0.0.0.0", port=8000)  # noqa: S104
