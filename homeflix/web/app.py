"""
Application FastAPI de Homeflix.

Initialise l'application web avec le Container DI, convertit les erreurs
en réponses JSON {"status": "error", "message": ...}, journalise chaque
requête et sert les images téléchargées sous /data.
"""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..container import Container
from ..core.exceptions import (
    HomeflixError,
    MediaNotFoundError,
    RangeNotSatisfiableError,
    ScanConfigurationError,
    ScanFailedError,
    ScanInProgressError,
)
from ..logging_config import configure_logging
from ..utils.constants import ASSETS_URL_PREFIX
from .routes.media import router as media_router

# Code HTTP par erreur du domaine (500 par défaut)
_ERROR_STATUS: dict[type[HomeflixError], int] = {
    MediaNotFoundError: 404,
    ScanInProgressError: 409,
    RangeNotSatisfiableError: 416,
    ScanConfigurationError: 500,
    ScanFailedError: 500,
}


def _error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure les logs, crée les tables au démarrage et libère les clients HTTP à l'arrêt."""
    container: Container = app.state.container
    configure_logging(container.config())
    container.database.init()
    logger.info(f"Homeflix API v{__version__} started")
    yield
    await container.tmdb_client().close()
    await container.image_downloader().close()
    container.api_cache().close()


def register_error_handlers(app: FastAPI) -> None:
    """Convertit toutes les erreurs en JSON, sans jamais exposer de trace."""

    @app.exception_handler(HomeflixError)
    async def domain_error_handler(_request: Request, exc: HomeflixError):
        status_code = _ERROR_STATUS.get(type(exc), 500)
        headers = None
        if isinstance(exc, RangeNotSatisfiableError):
            headers = {"Content-Range": f"bytes */{exc.file_size}"}
        if status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc}")
        else:
            logger.warning(f"{type(exc).__name__}: {exc}")
        return _error_response(status_code, str(exc), headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return _error_response(exc.status_code, message, getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError):
        errors = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return _error_response(400, f"Invalid request: {errors}")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return _error_response(500, "Internal server error")


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application FastAPI.

    Args:
        container: Container DI (un container par défaut est créé si absent)
    """
    container = container or Container()
    settings = container.config()

    app = FastAPI(
        title="Homeflix API",
        description="API for managing and streaming media files",
        version=__version__,
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.container = container
    app.state.scan_lock = asyncio.Lock()

    register_error_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                f"{request.method} {request.url.path} {status_code} ({duration_ms:.1f} ms)"
            )

    # Images téléchargées (affiches, fonds)
    settings.assets_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        ASSETS_URL_PREFIX,
        StaticFiles(directory=settings.assets_dir),
        name="data",
    )

    app.include_router(media_router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Homeflix API is running"

    return app


app = create_app()
