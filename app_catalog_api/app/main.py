"""
Main entrypoint for the App Catalog API.

This module assembles the FastAPI application, sets up logging and
includes the API routers.  ``create_app`` is the composition root: it
builds the document store (or accepts one from the caller), wires the
``AppService`` on top of it and ties the store's lifetime to the
application lifespan.  The module‑level ``app`` makes the application
discoverable by uvicorn::

    uvicorn app_catalog_api.app.main:app --reload

Building the default store requires ``DATABASE_URL``; when it is not
set the lifespan startup fails and the server refuses to start.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.responses import error_response
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.store import AppStore, build_store
from .services.app_service import AppService

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"


def create_app(settings: Optional[Settings] = None, store: Optional[AppStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the process‑wide settings
        read from the environment.
    store : Optional[AppStore]
        Document store to serve from.  When omitted the store is built
        from ``settings.database_url`` during startup.  The application
        opens the store on startup and closes it on shutdown in both
        cases.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that startup messages
    # are formatted consistently.
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_store = store if store is not None else build_store(settings)
        await app_store.open()
        app.state.store = app_store
        app.state.app_service = AppService(app_store)
        logger.info("%s %s started", settings.project_name, settings.api_version)
        try:
            yield
        finally:
            await app_store.close()
            logger.info("%s stopped", settings.project_name)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Every response, including framework‑level rejections, uses the
    # ``{success, message}`` envelope.
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        return error_response(400, _describe_validation_error(exc))

    app.include_router(v1_router, prefix="/api")

    @app.get("/health", tags=["meta"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
