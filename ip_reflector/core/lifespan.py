"""Application lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ip_reflector import __version__
from ip_reflector.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log application startup and shutdown.

    The page template is compiled in create_app, before the server ever
    starts, so nothing needs initializing here.
    """
    log_with_context(
        logger,
        "info",
        "Starting IP Reflector application",
        version=__version__,
        template=app.state.page_renderer.template_name,
        event_type="app_startup",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down IP Reflector application",
            event_type="app_shutdown",
        )
