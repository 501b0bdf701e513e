"""Shared fixtures for feed engine tests."""

from typing import Callable, Dict, List, Optional

import httpx
import pytest

from newswire.ingestion import FeedFetcher, FetchResult
from newswire.models import Article, Feed

RSS_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:media="http://search.yahoo.com/mrss/"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>Example News</title>
    <link>https://example.com</link>
    <atom:link href="https://example.com/feed.xml" rel="self" type="application/rss+xml"/>
    <image>
      <url>https://example.com/logo.png</url>
      <title>Example News</title>
      <link>https://example.com</link>
    </image>
    <item>
      <title>First story</title>
      <description>First description</description>
      <link>https://example.com/1</link>
      <pubDate>Mon, 06 Sep 2021 16:45:00 GMT</pubDate>
      <enclosure url="https://example.com/1.jpg" type="image/jpeg" length="1"/>
      <media:content url="https://example.com/1-media.jpg" type="image/jpeg"/>
    </item>
    <item>
      <title>Second story</title>
      <description>Second description</description>
      <link>https://example.com/2</link>
      <pubDate>Tue, 07 Sep 2021 08:00:00 +0000</pubDate>
      <media:content url="https://example.com/2-media.jpg" type="image/jpeg"/>
    </item>
    <item>
      <title>Third story</title>
      <content:encoded><![CDATA[<p>Third body</p>]]></content:encoded>
      <link>https://example.com/3</link>
    </item>
  </channel>
</rss>
"""

ATOM_DOCUMENT = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:media="http://search.yahoo.com/mrss/">
  <title>Example Atom</title>
  <entry>
    <title>Atom one</title>
    <link rel="alternate" href="https://example.org/a1"/>
    <updated>2021-09-06T16:45:00Z</updated>
    <summary>Atom summary one</summary>
    <media:thumbnail url="https://example.org/a1-thumb.jpg"/>
    <media:content url="https://example.org/a1-content.jpg" type="image/jpeg"/>
  </entry>
  <entry>
    <title>Atom two</title>
    <link rel="enclosure" type="image/png" href="https://example.org/a2.png"/>
    <link href="https://example.org/a2"/>
    <published>2021-09-05T10:00:00+02:00</published>
    <content type="html">&lt;p&gt;Atom content two&lt;/p&gt;</content>
  </entry>
</feed>
"""


def rss_with_items(*items: str, channel_extra: str = "") -> str:
    """Wrap item markup in an RSS document declaring the common namespaces."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/"'
        ' xmlns:content="http://purl.org/rss/1.0/modules/content/">'
        "<channel><title>Test</title>"
        f"{channel_extra}{''.join(items)}"
        "</channel></rss>"
    )


def make_article(
    published_at: int,
    source_id: str = "feed-a",
    title: Optional[str] = None,
) -> Article:
    return Article(
        title=title or f"{source_id} at {published_at}",
        description="Description",
        link=f"https://example.com/{source_id}/{published_at}",
        published_at=published_at,
        source_id=source_id,
    )


def make_feed(feed_id: str, **kwargs) -> Feed:
    return Feed(
        id=feed_id,
        name=kwargs.pop("name", feed_id.title()),
        url=kwargs.pop("url", f"https://{feed_id}.example.com/feed.xml"),
        **kwargs,
    )


class StubFetcher:
    """Fetcher returning canned documents keyed by feed id."""

    def __init__(self, documents: Dict[str, Optional[str]]) -> None:
        self.documents = documents
        self.calls: List[List[str]] = []

    async def fetch_all(self, feeds: List[Feed]) -> List[FetchResult]:
        self.calls.append([feed.id for feed in feeds])
        results = []
        for feed in feeds:
            body = self.documents.get(feed.id)
            if body is None:
                results.append(
                    FetchResult(feed_id=feed.id, url=feed.url, success=False, error="HTTP 500: Internal Server Error")
                )
            else:
                results.append(
                    FetchResult(feed_id=feed.id, url=feed.url, success=True, body=body.encode(), status_code=200)
                )
        return results


@pytest.fixture
def rss_document() -> str:
    return RSS_DOCUMENT


@pytest.fixture
def atom_document() -> str:
    return ATOM_DOCUMENT


@pytest.fixture
def mock_fetcher() -> Callable[[Callable], FeedFetcher]:
    """Build a ``FeedFetcher`` whose requests are answered by ``handler``."""

    def build(handler: Callable, timeout: float = 1.0) -> FeedFetcher:
        return FeedFetcher(timeout=timeout, transport=httpx.MockTransport(handler))

    return build
