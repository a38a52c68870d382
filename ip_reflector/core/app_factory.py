"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from ip_reflector import __version__
from ip_reflector.config import Settings, get_settings
from ip_reflector.core.lifespan import lifespan
from ip_reflector.core.middleware import setup_middleware
from ip_reflector.logging_config import get_logger, log_with_context
from ip_reflector.middleware.error_handlers import register_error_handlers
from ip_reflector.routers import page_router
from ip_reflector.views.page_renderer import PageRenderer

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The page template is compiled here, once, so a broken template stops
    the application before it can accept any request.

    Args:
        settings: Settings to use, defaults to the process-wide instance

    Returns:
        Configured FastAPI application instance

    Raises:
        TemplateCompileException: If the page template is missing or malformed
    """
    if settings is None:
        settings = get_settings()

    renderer = PageRenderer.from_directory(settings.template_dir, settings.template_name)
    log_with_context(
        logger,
        "info",
        "Page template ready",
        template_dir=str(settings.template_dir),
        template=settings.template_name,
        event_type="template_ready",
    )

    # Docs routes are disabled: every path renders the address page
    app = FastAPI(
        title="IP Reflector",
        description="Shows clients the IP address they connect from.",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Read-only after startup, shared by all requests
    app.state.page_renderer = renderer

    # Configure middleware
    setup_middleware(app)

    # Register exception handlers
    register_error_handlers(app)

    app.include_router(page_router.router, tags=["page"])

    return app
