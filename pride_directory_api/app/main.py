"""
Main entrypoint for the Pride Directory API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app``::

    uvicorn pride_directory_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

from datetime import datetime, timezone

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .core.db import init_db


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Logging is configured first so that startup messages are captured.
    The document store schema is migrated when the application starts.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.api_version,
        }

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    return app


app = create_app()
