"""Pydantic models for page rendering."""

from pydantic import BaseModel, ConfigDict, Field


class RenderContext(BaseModel):
    """Fields available to the page template for one request."""

    model_config = ConfigDict(frozen=True)

    peer_ip: str = Field(..., min_length=1, description="Address the client connected from")
    local_ip: str = Field(default="", description="Reserved, never populated")
