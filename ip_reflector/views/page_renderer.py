"""Template rendering for the address page."""

from pathlib import Path

from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from ip_reflector.exceptions import TemplateCompileException, TemplateRenderException
from ip_reflector.logging_config import get_logger, log_with_context
from ip_reflector.models import RenderContext

logger = get_logger(__name__)


class PageRenderer:
    """Renders the address page from a template compiled once up front.

    The compiled template is shared read-only by all requests.
    """

    def __init__(self, templates: Jinja2Templates, template_name: str = "index.html"):
        """Load and compile the page template.

        Args:
            templates: Jinja2 template collection the page is looked up in
            template_name: File name of the page template

        Raises:
            TemplateCompileException: If the template is missing or malformed
        """
        self.template_name = template_name
        try:
            self.template = templates.get_template(template_name)
        except TemplateError as e:
            raise TemplateCompileException(
                f"Failed to compile page template {template_name!r}: {e}",
                details={"template": template_name, "error": str(e), "error_type": type(e).__name__},
            ) from e

        log_with_context(
            logger,
            "debug",
            "Page template compiled",
            template=template_name,
            event_type="template_compiled",
        )

    @classmethod
    def from_directory(cls, directory: Path, template_name: str = "index.html") -> "PageRenderer":
        """Build a renderer for a template living in ``directory``."""
        return cls(Jinja2Templates(directory=directory), template_name)

    def render(self, context: RenderContext) -> bytes:
        """Render the page for one request.

        Args:
            context: Values exposed to the template

        Returns:
            UTF-8 encoded HTML

        Raises:
            TemplateRenderException: If template execution fails
        """
        try:
            html = self.template.render(context.model_dump())
        except Exception as e:
            raise TemplateRenderException(
                details={
                    "template": self.template_name,
                    "peer_ip": context.peer_ip,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            ) from e
        return html.encode("utf-8")

    def render_response(self, context: RenderContext) -> HTMLResponse:
        """Render the page wrapped in an HTML response."""
        return HTMLResponse(content=self.render(context))
