"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from ip_reflector.address import format_peer_address
from ip_reflector.views.page_renderer import PageRenderer


async def get_page_renderer(request: Request) -> PageRenderer:
    """
    Get the shared page renderer from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The PageRenderer holding the precompiled template.

    Raises:
        RuntimeError: If the renderer is not initialized.
    """
    renderer: PageRenderer | None = getattr(request.app.state, "page_renderer", None)

    if renderer is None:
        raise RuntimeError("Page renderer not initialized. This should never happen.")

    return renderer


async def get_peer_address(request: Request) -> str:
    """
    Get the raw host:port address of the connected client.

    Args:
        request: The FastAPI request object.

    Returns:
        The peer address as reported by the server, e.g. '192.0.2.1:54321'.
    """
    client = (request.client.host, request.client.port) if request.client else None
    return format_peer_address(client)
