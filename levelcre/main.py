"""
Level CRE FastAPI application entry point.

Prospects are owned by one user and shared through workspaces.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from levelcre import __version__
from levelcre.config import get_settings
from levelcre.db.session import check_db_connection, engine
from levelcre.services.activity import ActivityNotifier
from levelcre.services.errors import AccessError
from levelcre.storage import MemoryStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    settings = get_settings()
    logger.info("Level CRE starting (storage=%s)", settings.storage_backend)
    try:
        if settings.storage_backend == "database":
            try:
                check_db_connection()
                logger.info("Database connection verified")
            except Exception as e:
                logger.critical("Database unreachable: %s", e)
                raise
        yield
    finally:
        logger.info("Level CRE shutting down")
        engine.dispose()
        logger.info("Database connection pool closed")


async def access_error_handler(request: Request, exc: AccessError) -> JSONResponse:
    """NotFound → 404, Forbidden → 403, Conflict → 409."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # One dataset per process for the memory backend
    app.state.memory_store = (
        MemoryStore(settings.demo_data_path or None)
        if settings.storage_backend == "memory"
        else None
    )
    app.state.activity_notifier = ActivityNotifier()

    app.add_exception_handler(AccessError, access_error_handler)

    # Mount API routes
    from levelcre.api.auth import router as auth_router
    from levelcre.api.prospects import router as prospects_router
    from levelcre.api.workspaces import router as workspaces_router

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(prospects_router, prefix="/api/prospects", tags=["prospects"])
    app.include_router(workspaces_router, prefix="/api/workspaces", tags=["workspaces"])

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint. Confirms DB connectivity for the database backend."""
        if settings.storage_backend == "memory":
            return {"status": "ok", "version": __version__, "storage": "memory"}

        from sqlalchemy import text

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": "ok",
                "version": __version__,
                "storage": "database",
                "database": "connected",
            }
        except Exception:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": __version__,
                    "storage": "database",
                    "database": "disconnected",
                },
            )

    return app


app = create_app()
