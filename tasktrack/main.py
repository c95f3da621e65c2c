"""tasktrack - personal task tracker API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from tasktrack.core.config import Settings, constants, settings
from tasktrack.core.db_client import Database
from tasktrack.core.logging import configure_logfire, instrument_fastapi
from tasktrack.interface.auth import TokenVerifier
from tasktrack.interface.categories_router import router as categories_router
from tasktrack.interface.error_handlers import register_exception_handlers
from tasktrack.interface.tasks_router import router as tasks_router


logger = logging.getLogger(__name__)


def validate_startup_configuration(app_settings: Settings) -> None:
    """Fail fast on configuration that would break every request.

    Raises:
        ValueError: If the signing secret is missing, the default secret is
            used in production, or the timezone is unknown
    """
    app_settings.require_credential("secret_key", "Token signing")
    if app_settings.is_production and app_settings.secret_key == Settings.model_fields["secret_key"].default:
        raise ValueError("SECRET_KEY must be changed from its default in production.")
    # Resolving the zone raises for unknown names
    _ = app_settings.tzinfo
    logger.info("startup_validation", extra={"stage": "configuration", "status": "ok"})


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application around the given settings."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan: the database handle lives exactly as long as the process."""
        # Startup
        validate_startup_configuration(app_settings)
        db = await Database.open(app_settings.sqlite_db_path)
        app.state.db = db
        logger.info("Database initialized", extra={"db_path": db.path})
        try:
            yield
        finally:
            # Shutdown
            await db.close()

    app = FastAPI(
        title=constants.SERVICE_NAME,
        description="Personal task tracker with owner-scoped tasks and categories",
        version=constants.SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.verifier = TokenVerifier(app_settings.secret_key, max_age_seconds=app_settings.token_max_age_seconds)

    configure_logfire(app_settings)
    instrument_fastapi(app)
    register_exception_handlers(app)

    app.include_router(categories_router)
    app.include_router(tasks_router)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy"}, status_code=constants.HTTP_OK)

    return app


app = create_app()
