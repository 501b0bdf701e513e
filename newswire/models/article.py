"""Normalized article record produced by the feed mappers."""

from typing import Optional

from pydantic import ConfigDict, Field

from .base import WireModel

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500


class Article(WireModel):
    """Article derived from one feed entry."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Headline")
    description: str = Field(
        ..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH, description="Summary text"
    )
    link: str = Field(..., description="Link to the full article, may be empty")
    published_at: int = Field(..., description="Publication time in epoch milliseconds")
    source_id: str = Field(..., description="Id of the feed the article came from")
    image_url: Optional[str] = Field(None, description="Article image")
    source_logo_url: Optional[str] = Field(None, description="Logo of the source feed")
