"""Data models for ingestion."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import Article


class FetchResult(BaseModel):
    """Outcome of fetching one feed document."""

    feed_id: str = Field(..., description="Feed id")
    url: str = Field(..., description="Requested URL")
    success: bool = Field(..., description="Whether a usable document was received")
    body: Optional[bytes] = Field(None, description="Raw feed document, undecoded")
    status_code: Optional[int] = Field(None, description="HTTP status code, if any")
    error: Optional[str] = Field(None, description="Diagnostic message if failed")


class FeedResult(BaseModel):
    """Outcome of fetching and parsing one feed within a poll cycle."""

    feed_id: str = Field(..., description="Feed id")
    success: bool = Field(..., description="Whether the feed was fetched and parsed")
    articles: List[Article] = Field(default_factory=list, description="Normalized articles")
    error: Optional[str] = Field(None, description="Diagnostic message if failed")

    @property
    def article_count(self) -> int:
        """Number of articles produced by the feed."""
        return len(self.articles)
