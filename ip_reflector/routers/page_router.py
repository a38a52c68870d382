"""Page route showing clients their own address.

Every path and every method renders the same page. The request body is
never read.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ip_reflector.address import extract_host
from ip_reflector.dependencies import get_page_renderer, get_peer_address
from ip_reflector.models import RenderContext
from ip_reflector.views.page_renderer import PageRenderer

router = APIRouter()

PAGE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/", methods=PAGE_METHODS, response_class=HTMLResponse)
@router.api_route("/{path:path}", methods=PAGE_METHODS, response_class=HTMLResponse)
async def show_peer_address(
    peer_address: str = Depends(get_peer_address),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    """Render the page with the client's IP address."""
    context = RenderContext(peer_ip=extract_host(peer_address))
    return renderer.render_response(context)
