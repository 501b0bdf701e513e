"""Merge per-feed results into the article cache."""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from ..ingestion import FeedResult
from ..mappers.normalize import now_ms
from ..models import Article
from ..store import KeyValueStore, keys

logger = logging.getLogger(__name__)


class AggregateResult(BaseModel):
    """Outcome of one poll cycle."""

    articles: List[Article] = Field(default_factory=list, description="Merged articles, newest first")
    attempted: int = Field(0, description="Feeds polled")
    succeeded: int = Field(0, description="Feeds that produced at least one article")

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    @property
    def is_offline(self) -> bool:
        """True when feeds were polled and none produced an article."""
        return self.attempted > 0 and self.succeeded == 0


def sort_articles(articles: List[Article]) -> List[Article]:
    """Sort newest first.

    Equal timestamps are ordered by source id, then by their original
    position within the feed (the sort is stable).
    """
    return sorted(articles, key=lambda article: (-article.published_at, article.source_id))


def aggregate(results: List[FeedResult]) -> AggregateResult:
    """Flatten and order the articles of every feed in a cycle."""
    articles = [article for result in results for article in result.articles]
    return AggregateResult(
        articles=sort_articles(articles),
        attempted=len(results),
        succeeded=sum(1 for result in results if result.articles),
    )


async def persist(
    store: KeyValueStore,
    result: AggregateResult,
    updated_at: Optional[int] = None,
) -> None:
    """
    Write a cycle's outcome to the store.

    A non-empty article list replaces the cache wholesale; an empty one
    leaves the previous cache in place. The cache is written before the
    status keys that describe it.
    """
    if result.articles:
        await store.set(keys.CACHED_ARTICLES, [article.to_store() for article in result.articles])
    else:
        existing = await store.get(keys.CACHED_ARTICLES, [])
        logger.info("No articles fetched, keeping %d cached article(s)", len(existing or []))

    await store.set(keys.LAST_UPDATED_AT, updated_at if updated_at is not None else now_ms())
    await store.set(keys.IS_OFFLINE, result.is_offline)
