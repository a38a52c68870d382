"""Exception handlers for the application."""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from ip_reflector.exceptions import ReflectorException
from ip_reflector.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

INTERNAL_ERROR_TEXT = "Internal Server Error"


async def reflector_exception_handler(request: Request, exc: ReflectorException) -> PlainTextResponse:
    """Handle reflector exceptions raised while serving a request.

    The cause is logged with its details; the client only gets a generic
    plain-text message with the exception's status code.
    """
    log_with_context(
        logger,
        "error",
        "Request failed",
        error_code=exc.code.value,
        error_message=exc.message,
        error_details=exc.details,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="request_error",
    )

    return PlainTextResponse(INTERNAL_ERROR_TEXT, status_code=exc.status_code)


async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Handle general exceptions with logging."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=str(request.url),
        event_type="unhandled_error",
    )
    # Also log the traceback separately for debugging
    logger.error("Exception traceback:", exc_info=exc)

    # Don't expose internal error details to clients
    return PlainTextResponse(INTERNAL_ERROR_TEXT, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ReflectorException, reflector_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
