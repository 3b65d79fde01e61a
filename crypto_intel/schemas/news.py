"""Pydantic models for the news feed."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NewsItem(BaseModel):
    """A headline plus whatever metadata the provider attached to it.

    Only ``title`` is load-bearing; the remaining fields are kept as-is so
    the view can link to sources, show images, etc.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    title: str
