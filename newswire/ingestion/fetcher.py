"""Feed document fetcher with per-feed timeouts."""

import asyncio
import logging
from typing import List, Optional

import httpx

from ..config import FETCH_TIMEOUT_SECONDS
from ..models import Feed
from .models import FetchResult

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Fetch raw feed documents over HTTP.

    Every failure (timeout, transport error, non-2xx status, empty body) is
    returned as an unsuccessful ``FetchResult``; ``fetch`` never raises.
    """

    def __init__(
        self,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        user_agent: str = "Newswire/1.0 (+feed poller)",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize feed fetcher.

        Args:
            timeout: Seconds to wait for a complete response before aborting
            user_agent: User-Agent header sent with every request
            transport: Optional httpx transport, used to stub the network
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
            transport=self.transport,
        )

    def _failure(self, feed: Feed, error: str, status_code: Optional[int] = None) -> FetchResult:
        logger.warning("Failed to fetch feed %s (%s): %s", feed.name, feed.id, error)
        return FetchResult(
            feed_id=feed.id,
            url=feed.url,
            success=False,
            status_code=status_code,
            error=error,
        )

    async def fetch(self, feed: Feed, client: Optional[httpx.AsyncClient] = None) -> FetchResult:
        """Fetch a single feed document."""
        logger.info("Fetching feed: %s (%s)", feed.name, feed.id)
        try:
            if client is None:
                async with self._client() as own_client:
                    response = await asyncio.wait_for(own_client.get(feed.url), self.timeout)
            else:
                response = await asyncio.wait_for(client.get(feed.url), self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return self._failure(feed, f"Timed out after {self.timeout:g}s")
        except httpx.HTTPError as e:
            return self._failure(feed, f"HTTP error: {e}")
        except Exception as e:
            return self._failure(feed, f"Unexpected error: {e}")

        if not response.is_success:
            return self._failure(
                feed,
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        # Raw bytes: the XML declaration decides the encoding
        body = response.content
        if not body or not body.strip():
            return self._failure(feed, "Empty response from feed", status_code=response.status_code)

        return FetchResult(
            feed_id=feed.id,
            url=feed.url,
            success=True,
            body=body,
            status_code=response.status_code,
        )

    async def fetch_all(self, feeds: List[Feed]) -> List[FetchResult]:
        """Fetch all feeds concurrently, one result per feed in input order."""
        if not feeds:
            return []

        async with self._client() as client:
            tasks = [self.fetch(feed, client) for feed in feeds]
            return list(await asyncio.gather(*tasks))
