"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from catalog_api.api.health import router as health_router
from catalog_api.api.middleware import failure_response, setup_middleware
from catalog_api.api.products import router as products_router
from catalog_api.domain.exceptions import (
    CatalogError,
    ProductNotFoundError,
    QueryError,
    ValidationError,
)
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import create_tables, engine
from catalog_api.infrastructure.logging import configure_logging

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ensured")

    yield

    logger.info("Shutting down Catalog API")
    await engine.dispose()


app = FastAPI(
    title="Catalog API",
    description="Product catalog search and management",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)

# Uploaded product images
app.mount(
    settings.media_url_prefix,
    StaticFiles(directory=settings.media_dir, check_dir=False),
    name="media",
)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Map catalog errors onto the failure envelope."""
    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, ProductNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    # Query failures are already logged with their cause by the service
    if not isinstance(exc, QueryError):
        logger.warning(
            "Catalog request rejected",
            path=request.url.path,
            status_code=status_code,
            error=exc.message,
        )

    return failure_response(request, status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies with the failure envelope."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {location or 'request'}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"

    logger.warning("Request validation failed", path=request.url.path, error=message)
    return failure_response(request, status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return failure_response(request, exc.status_code, message)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return failure_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An internal error occurred",
    )


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "catalog_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
