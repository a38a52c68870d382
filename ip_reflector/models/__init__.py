"""IP Reflector models"""

from ip_reflector.models.render_context import RenderContext

__all__ = [
    "RenderContext",
]
