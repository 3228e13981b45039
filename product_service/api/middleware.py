"""API middleware for the product service.

Every request gets a correlation ID (taken from ``X-Request-ID`` or
generated) that is bound into the structlog context, echoed back in the
response and used by the error envelope. Each request is logged once on
completion with its route template and the names of the query
parameters it used, so listing traffic can be grouped by filter shape
without logging filter values.

Unhandled errors are not caught here; the application's exception
handlers build the error envelope.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()


def route_template(request: Request) -> str:
    """Path template of the matched route (``/products/{identifier}``), else the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request ID correlation and per-request access log."""

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                method=request.method,
                route=route_template(request),
                params=sorted(request.query_params.keys()),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Configure custom middleware for the application.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(RequestContextMiddleware)
