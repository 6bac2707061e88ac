"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (logging, CORS)
- Exception handlers for failures that reach the application level
- Registry startup/shutdown

Run with:
    uvicorn shorturl.main:app
"""

import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from shorturl.api import endpoints
from shorturl.api.schemas import HealthResponse
from shorturl.core.exceptions import (
    CodeSpaceExhaustedError,
    DatabaseError,
    ServiceUnavailableError,
)
from shorturl.core.logging_config import configure_logging
from shorturl.core.registry_manager import get_registry, initialize_registry, shutdown_registry
from shorturl.core.setting import EnvSettingsOptions, Settings, settings
from shorturl.middleware.logging import add_logging_middleware
from shorturl.services.registry import URLRegistry

logger = logging.getLogger(__name__)

VIEWS_DIR = Path(__file__).resolve().parent / "views"


def docs_options(config: Settings) -> dict:
    """Interactive docs and the OpenAPI schema are not served in production."""
    if config.ENV_SETTING is EnvSettingsOptions.production:
        return {"docs_url": None, "redoc_url": None, "openapi_url": None}
    return {"docs_url": "/docs", "redoc_url": "/redoc", "openapi_url": "/openapi.json"}


app = FastAPI(
    title="Short URL Registry",
    description="Maps URLs to short numeric codes and redirects codes back to their URLs",
    version="1.0.0",
    **docs_options(settings),
)

add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CodeSpaceExhaustedError)
async def code_space_exhausted_handler(request: Request, exc: CodeSpaceExhaustedError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Unable to generate unique short URL"},
    )


@app.exception_handler(DatabaseError)
async def database_error_handler(request: Request, exc: DatabaseError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc.original_error)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "storage error"},
    )


@app.exception_handler(ServiceUnavailableError)
async def service_unavailable_handler(request: Request, exc: ServiceUnavailableError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": str(exc)},
    )


@app.get("/", include_in_schema=False)
async def index():
    """Landing page with the shortening form."""
    return FileResponse(VIEWS_DIR / "index.html")


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(registry: URLRegistry = Depends(get_registry)):
    """
    Health check endpoint for monitoring.

    Reads the store, so an unreadable store reports as a 500.
    """
    return HealthResponse(
        status="healthy",
        storage=registry.store.name,
        entries=await registry.count(),
    )


app.include_router(endpoints.router, tags=["URL Shortener"])


@app.on_event("startup")
async def startup_event():
    """Configure logging and build the registry."""
    configure_logging(settings.LOG_LEVEL)
    await initialize_registry(settings)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    await shutdown_registry()
