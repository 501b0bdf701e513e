"""Tests for the HTTP feed fetcher."""

import asyncio

import httpx
import pytest

from conftest import make_feed, rss_with_items
from newswire.mappers import RSSMapper


class TestFeedFetcher:
    """Tests for FeedFetcher."""

    @pytest.mark.asyncio
    async def test_success(self, mock_fetcher, rss_document):
        fetcher = mock_fetcher(lambda request: httpx.Response(200, text=rss_document))

        result = await fetcher.fetch(make_feed("example"))

        assert result.success
        assert result.body == rss_document.encode()
        assert result.status_code == 200
        assert result.error is None

    @pytest.mark.asyncio
    async def test_body_keeps_declared_encoding(self, mock_fetcher):
        """The body stays undecoded so the XML declaration picks the encoding."""
        document = (
            rss_with_items("<item><title>Café crème</title><description>Déjà vu</description></item>")
            .replace('encoding="UTF-8"', 'encoding="ISO-8859-1"')
            .encode("iso-8859-1")
        )
        fetcher = mock_fetcher(
            lambda request: httpx.Response(200, content=document, headers={"Content-Type": "application/rss+xml"})
        )

        result = await fetcher.fetch(make_feed("example"))

        assert result.body == document
        article = RSSMapper().parse(result.body, "example")[0]
        assert article.title == "Café crème"
        assert article.description == "Déjà vu"

    @pytest.mark.asyncio
    async def test_sends_user_agent(self, mock_fetcher):
        seen = {}

        def handler(request):
            seen["user_agent"] = request.headers["User-Agent"]
            return httpx.Response(200, text="<rss/>")

        await mock_fetcher(handler).fetch(make_feed("example"))
        assert seen["user_agent"].startswith("Newswire/")

    @pytest.mark.asyncio
    async def test_http_error_status(self, mock_fetcher):
        fetcher = mock_fetcher(lambda request: httpx.Response(500))

        result = await fetcher.fetch(make_feed("example"))

        assert not result.success
        assert result.status_code == 500
        assert result.error == "HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_empty_body(self, mock_fetcher):
        fetcher = mock_fetcher(lambda request: httpx.Response(200, text="  \n "))

        result = await fetcher.fetch(make_feed("example"))

        assert not result.success
        assert result.error == "Empty response from feed"

    @pytest.mark.asyncio
    async def test_transport_error(self, mock_fetcher):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        result = await mock_fetcher(handler).fetch(make_feed("example"))

        assert not result.success
        assert result.error.startswith("HTTP error:")

    @pytest.mark.asyncio
    async def test_timeout(self, mock_fetcher):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200, text="<rss/>")

        result = await mock_fetcher(handler, timeout=0.05).fetch(make_feed("slow"))

        assert not result.success
        assert result.error.startswith("Timed out")

    @pytest.mark.asyncio
    async def test_fetch_all_keeps_input_order(self, mock_fetcher):
        async def handler(request):
            host = request.url.host
            if host.startswith("slow"):
                await asyncio.sleep(0.05)
            if host.startswith("broken"):
                return httpx.Response(404)
            return httpx.Response(200, text=f"<rss>{host}</rss>")

        feeds = [make_feed("slow"), make_feed("broken"), make_feed("fast")]
        results = await mock_fetcher(handler).fetch_all(feeds)

        assert [result.feed_id for result in results] == ["slow", "broken", "fast"]
        assert [result.success for result in results] == [True, False, True]
        assert results[1].error == "HTTP 404: Not Found"

    @pytest.mark.asyncio
    async def test_fetch_all_empty(self, mock_fetcher):
        fetcher = mock_fetcher(lambda request: httpx.Response(200, text="<rss/>"))
        assert await fetcher.fetch_all([]) == []
