"""One poll cycle: fetch selected feeds, map, aggregate, persist."""

import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError

from ..errors import FeedParseError
from ..ingestion import FeedFetcher, FeedResult, FetchResult
from ..mappers import MapperRegistry, default_registry
from ..models import Article, Feed
from ..store import KeyValueStore, keys
from .aggregator import AggregateResult, aggregate, persist

logger = logging.getLogger(__name__)


class FeedPoller:
    """Run poll cycles against a store.

    At most one cycle runs at a time. A trigger that arrives while a cycle
    is in flight is coalesced into a single follow-up cycle.
    """

    def __init__(
        self,
        store: KeyValueStore,
        fetcher: Optional[FeedFetcher] = None,
        registry: Optional[MapperRegistry] = None,
    ) -> None:
        """Initialize poller."""
        self.store = store
        self.fetcher = fetcher or FeedFetcher()
        self.registry = registry or default_registry()
        self._lock = asyncio.Lock()
        self._rerun_requested = False
        self.cycles_completed = 0

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def trigger(self) -> Optional[AggregateResult]:
        """
        Run a cycle now, or request a follow-up if one is already running.

        Returns:
            Result of the last cycle run by this call, or None if the
            trigger was coalesced into the in-flight cycle
        """
        if self._lock.locked():
            logger.debug("Poll already in progress, queueing a follow-up cycle")
            self._rerun_requested = True
            return None

        async with self._lock:
            while True:
                self._rerun_requested = False
                result = await self.run_cycle()
                if not self._rerun_requested:
                    return result
                logger.info("Running queued follow-up poll")

    async def run_cycle(self) -> Optional[AggregateResult]:
        """Run one cycle. Errors end the cycle as a no-op and are logged."""
        try:
            return await self._run_cycle()
        except Exception:
            logger.exception("Error during feed poll")
            return None
        finally:
            self.cycles_completed += 1

    async def load_selected_feeds(self) -> List[Feed]:
        """Configured feeds that are selected, in configuration order."""
        raw_feeds = await self.store.get(keys.RSS_FEEDS, []) or []
        selected = await self.store.get(keys.SELECTED_FEEDS, []) or []

        if not raw_feeds:
            logger.info("No feeds configured")
            return []
        if not selected:
            logger.info("No feeds selected")
            return []

        selected_ids = set(selected)
        feeds = []
        for raw_feed in raw_feeds:
            try:
                feed = Feed.model_validate(raw_feed)
            except ValidationError as e:
                logger.warning("Skipping invalid feed configuration %r: %s", raw_feed, e)
                continue
            if feed.id in selected_ids:
                feeds.append(feed)

        if not feeds:
            logger.info("No selected feeds to poll")
        return feeds

    def map_feed(self, feed: Feed, fetched: FetchResult) -> FeedResult:
        """Turn a fetch outcome into a per-feed result."""
        if not fetched.success:
            return FeedResult(feed_id=feed.id, success=False, error=fetched.error)

        try:
            articles = self.registry.parse(fetched.body or b"", feed.id, feed.logo_url)
        except FeedParseError as e:
            logger.warning("Failed to parse feed %s (%s): %s", feed.name, feed.id, e)
            return FeedResult(feed_id=feed.id, success=False, error=str(e))
        except Exception as e:
            logger.warning("Unexpected error parsing feed %s (%s): %s", feed.name, feed.id, e)
            return FeedResult(feed_id=feed.id, success=False, error=f"Unexpected error: {e}")

        logger.info("Successfully parsed %d articles from %s", len(articles), feed.name)
        return FeedResult(feed_id=feed.id, success=True, articles=articles)

    async def _run_cycle(self) -> Optional[AggregateResult]:
        logger.info("Starting feed poll...")
        feeds = await self.load_selected_feeds()
        if not feeds:
            return None

        logger.info("Polling %d selected feed(s)...", len(feeds))
        fetched = await self.fetcher.fetch_all(feeds)
        results = [self.map_feed(feed, outcome) for feed, outcome in zip(feeds, fetched)]

        result = aggregate(results)
        self._log_images(result.articles)
        await persist(self.store, result)

        if result.is_offline:
            logger.warning(
                "Feed poll complete but all %d feed(s) failed. Marking as offline.", result.attempted
            )
        elif result.failed:
            logger.info(
                "Feed poll complete. %d succeeded, %d failed. Cached %d articles.",
                result.succeeded,
                result.failed,
                len(result.articles),
            )
        else:
            logger.info("Feed poll complete. Cached %d articles.", len(result.articles))
        return result

    def _log_images(self, articles: List[Article]) -> None:
        with_images = [article for article in articles if article.image_url]
        if not with_images:
            logger.debug("No articles with images found in this poll")
            return
        logger.debug("Found %d article(s) with images", len(with_images))
        for article in with_images:
            logger.debug('  - "%s" (%s): %s', article.title, article.source_id, article.image_url)
