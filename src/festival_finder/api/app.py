"""FastAPI application for the Festival Finder search API."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from festival_finder.api.responses import error_envelope
from festival_finder.api.routes import router
from festival_finder.config import Config
from festival_finder.errors import (
    InvalidQueryError,
    SearchError,
    SearchUnavailableError,
)
from festival_finder.search.service import Service

logger = logging.getLogger(__name__)


async def _unavailable_handler(
    request: Request, exc: SearchUnavailableError
) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content=error_envelope(f"Search is temporarily unavailable: {exc}"),
    )


async def _search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content=error_envelope(str(exc)))


async def _invalid_query_handler(
    request: Request, exc: InvalidQueryError
) -> JSONResponse:
    return JSONResponse(status_code=400, content=error_envelope(str(exc)))


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} raised: {exc!r}")
    return JSONResponse(status_code=500, content=error_envelope(str(exc)))


def create_app(
    service: Service | None = None, storage_base_url: str | None = None
) -> FastAPI:
    """Create the API application.

    Args:
        service: Search service to serve. When omitted, one is created on
            startup from the configured database URL and disposed on shutdown.
        storage_base_url: Public image bucket URL. Defaults to config.

    Returns:
        Configured FastAPI application with routes under /api.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.service is not None:
            yield
            return

        app.state.service = Service()
        logger.info(f"Search service connected to {app.state.service.engine.db_url}")
        try:
            yield
        finally:
            await app.state.service.engine.dispose()
            app.state.service = None

    app = FastAPI(
        title="Festival Finder API",
        description="Search blues and swing dance festivals, teachers and musicians.",
        lifespan=lifespan,
    )
    app.state.service = service
    app.state.storage_base_url = (
        storage_base_url if storage_base_url is not None else Config.STORAGE_PUBLIC_URL
    )

    app.add_exception_handler(SearchUnavailableError, _unavailable_handler)
    app.add_exception_handler(SearchError, _search_error_handler)
    app.add_exception_handler(InvalidQueryError, _invalid_query_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
    app.include_router(router, prefix="/api")
    return app
