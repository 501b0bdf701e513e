"""Tests for cycle aggregation and persistence."""

import pytest

from conftest import make_article
from newswire.ingestion import FeedResult
from newswire.pipeline import aggregate, persist, sort_articles
from newswire.store import MemoryStore, keys


class TestSortArticles:
    """Tests for sort_articles."""

    def test_newest_first(self):
        articles = [make_article(100), make_article(300), make_article(200)]
        assert [a.published_at for a in sort_articles(articles)] == [300, 200, 100]

    def test_ties_ordered_by_source_then_feed_order(self):
        articles = [
            make_article(100, "zeta", title="z1"),
            make_article(100, "alpha", title="a1"),
            make_article(100, "alpha", title="a2"),
            make_article(200, "zeta", title="z2"),
        ]
        assert [a.title for a in sort_articles(articles)] == ["z2", "a1", "a2", "z1"]


class TestAggregate:
    """Tests for aggregate."""

    def test_merges_and_counts(self):
        results = [
            FeedResult(feed_id="a", success=True, articles=[make_article(100, "a"), make_article(300, "a")]),
            FeedResult(feed_id="b", success=False, error="HTTP 500: Internal Server Error"),
            FeedResult(feed_id="c", success=True, articles=[make_article(200, "c")]),
        ]

        result = aggregate(results)

        assert [a.published_at for a in result.articles] == [300, 200, 100]
        assert result.attempted == 3
        assert result.succeeded == 2
        assert result.failed == 1
        assert not result.is_offline

    def test_feed_without_articles_is_not_a_success(self):
        results = [
            FeedResult(feed_id="a", success=True, articles=[]),
            FeedResult(feed_id="b", success=False, error="boom"),
        ]
        result = aggregate(results)

        assert result.succeeded == 0
        assert result.is_offline

    def test_nothing_attempted_is_not_offline(self):
        assert not aggregate([]).is_offline


class TestPersist:
    """Tests for persist."""

    @pytest.mark.asyncio
    async def test_replaces_cache(self):
        store = MemoryStore({keys.CACHED_ARTICLES: [make_article(1, "old").to_store()]})
        result = aggregate([FeedResult(feed_id="a", success=True, articles=[make_article(5, "a")])])

        await persist(store, result, updated_at=1234)

        cached = await store.get(keys.CACHED_ARTICLES)
        assert [item["sourceId"] for item in cached] == ["a"]
        assert cached[0]["publishedAt"] == 5
        assert await store.get(keys.LAST_UPDATED_AT) == 1234
        assert await store.get(keys.IS_OFFLINE) is False

    @pytest.mark.asyncio
    async def test_empty_result_keeps_cache(self):
        previous = [make_article(1, "old").to_store()]
        store = MemoryStore({keys.CACHED_ARTICLES: previous})
        result = aggregate([FeedResult(feed_id="a", success=False, error="boom")])

        await persist(store, result, updated_at=99)

        assert await store.get(keys.CACHED_ARTICLES) == previous
        assert await store.get(keys.LAST_UPDATED_AT) == 99
        assert await store.get(keys.IS_OFFLINE) is True

    @pytest.mark.asyncio
    async def test_cache_written_before_status(self):
        store = MemoryStore()
        order = []
        original = store._write

        async def recording_write(key, value):
            order.append(key)
            await original(key, value)

        store._write = recording_write
        result = aggregate([FeedResult(feed_id="a", success=True, articles=[make_article(5, "a")])])

        await persist(store, result)

        assert order == [keys.CACHED_ARTICLES, keys.LAST_UPDATED_AT, keys.IS_OFFLINE]
