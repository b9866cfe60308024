"""HTTP middleware and the shared failure envelope.

Every request gets a correlation ID, echoed in ``X-Request-ID`` and bound
into the structlog context for the duration of the request. Exceptions
that escape the routers are answered with the standard failure envelope.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def failure_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Build ``{success: false, message, requestId}`` for a request."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "requestId": getattr(request.state, "request_id", None),
        },
    )


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to the request, its logs and its response.

    A client-supplied ``X-Request-ID`` is reused; otherwise a UUID4 is
    generated. One access log line is written per request.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Answer unhandled exceptions with a generic 500 failure envelope.

    The exception and traceback are logged; the caller only sees a
    summary message and the request ID.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return failure_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An internal error occurred",
            )


def setup_middleware(app: FastAPI) -> None:
    """Install catalog middleware on the app.

    Starlette runs the most recently added middleware first, so request
    IDs are assigned before the error handler can need one.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
