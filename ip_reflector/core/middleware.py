"""Middleware configuration."""

import time

from fastapi import FastAPI, Request

from ip_reflector.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every served request at debug level."""
        started = time.perf_counter()
        response = await call_next(request)
        log_with_context(
            logger,
            "debug",
            "HTTP Request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            client=request.client.host if request.client else None,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            event_type="http_request",
        )
        return response
