"""Tests for the key-value stores."""

import asyncio
import json
import logging
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

import psycopg
import pytest

from newswire.config import PostgresConfig
from newswire.store import MemoryStore, PostgresStore, keys
from newswire.store.postgres import NOTIFY_CHANNEL


class TestMemoryStore:
    """Tests for MemoryStore."""

    @pytest.mark.asyncio
    async def test_get_default(self):
        store = MemoryStore()
        assert await store.get(keys.SELECTED_FEEDS) is None
        assert await store.get(keys.SELECTED_FEEDS, []) == []

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        store = MemoryStore()
        await store.set(keys.REFRESH_INTERVAL_MIN, 30)
        assert await store.get(keys.REFRESH_INTERVAL_MIN) == 30

    @pytest.mark.asyncio
    async def test_stored_falsy_value_is_returned(self):
        store = MemoryStore({keys.IS_OFFLINE: False})
        assert await store.get(keys.IS_OFFLINE, True) is False

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        selected = ["bbc-news"]
        store = MemoryStore()
        await store.set(keys.SELECTED_FEEDS, selected)
        selected.append("cnn")

        value = await store.get(keys.SELECTED_FEEDS)
        value.append("nasa")

        assert await store.get(keys.SELECTED_FEEDS) == ["bbc-news"]

    @pytest.mark.asyncio
    async def test_handler_receives_new_value(self):
        store = MemoryStore()
        received = []
        store.subscribe(keys.SELECTED_FEEDS, received.append)

        await store.set(keys.SELECTED_FEEDS, ["cnn"])
        await store.drain()

        assert received == [["cnn"]]

    @pytest.mark.asyncio
    async def test_async_handler(self):
        store = MemoryStore()
        received = []

        async def handler(value):
            received.append(value)

        store.subscribe(keys.REFRESH_INTERVAL_MIN, handler)
        await store.set(keys.REFRESH_INTERVAL_MIN, 10)
        await store.drain()

        assert received == [10]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_reach_writer(self):
        store = MemoryStore()

        def handler(value):
            raise RuntimeError("handler bug")

        store.subscribe(keys.SELECTED_FEEDS, handler)
        await store.set(keys.SELECTED_FEEDS, ["cnn"])
        await store.drain()

        assert await store.get(keys.SELECTED_FEEDS) == ["cnn"]

    @pytest.mark.asyncio
    async def test_subscribe_replaces_handler(self):
        store = MemoryStore()
        first, second = [], []
        store.subscribe(keys.SELECTED_FEEDS, first.append)
        store.subscribe(keys.SELECTED_FEEDS, second.append)

        await store.set(keys.SELECTED_FEEDS, ["cnn"])
        await store.drain()

        assert first == []
        assert second == [["cnn"]]

    @pytest.mark.asyncio
    async def test_other_keys_do_not_notify(self):
        store = MemoryStore()
        received = []
        store.subscribe(keys.SELECTED_FEEDS, received.append)

        await store.set(keys.CACHED_ARTICLES, [])
        await store.drain()

        assert received == []


def fake_connection(cursor: MagicMock):
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor

    @contextmanager
    def get_connection(config):
        yield conn

    return conn, get_connection


class TestPostgresStore:
    """Tests for PostgresStore without a database."""

    def test_write_upserts_and_notifies(self):
        store = PostgresStore(PostgresConfig())
        cursor = MagicMock()
        conn, get_connection = fake_connection(cursor)

        with patch("newswire.store.postgres.get_connection", get_connection):
            store._write_sync(keys.SELECTED_FEEDS, ["cnn"])

        upsert, notify = cursor.execute.call_args_list
        assert "INSERT INTO kv_store" in upsert.args[0]
        assert upsert.args[1][0] == keys.SELECTED_FEEDS
        assert upsert.args[1][1].obj == ["cnn"]
        assert notify.args[1][0] == NOTIFY_CHANNEL
        assert json.loads(notify.args[1][1]) == {"key": keys.SELECTED_FEEDS, "origin": store.origin}
        conn.commit.assert_called_once()

    def test_read_missing_key(self):
        store = PostgresStore(PostgresConfig())
        cursor = MagicMock()
        cursor.fetchone.return_value = None
        _, get_connection = fake_connection(cursor)

        with patch("newswire.store.postgres.get_connection", get_connection):
            assert store._read_sync(keys.IS_OFFLINE) == (False, None)

    def test_read_existing_key(self):
        store = PostgresStore(PostgresConfig())
        cursor = MagicMock()
        cursor.fetchone.return_value = {"value": 30}
        _, get_connection = fake_connection(cursor)

        with patch("newswire.store.postgres.get_connection", get_connection):
            assert store._read_sync(keys.REFRESH_INTERVAL_MIN) == (True, 30)

    @pytest.mark.asyncio
    async def test_notification_from_other_process_dispatches(self):
        store = PostgresStore(PostgresConfig())
        received = []
        store.subscribe(keys.SELECTED_FEEDS, received.append)

        async def fake_get(key, default=None):
            return ["nasa"]

        with patch.object(store, "get", fake_get):
            await store.handle_notification(json.dumps({"key": keys.SELECTED_FEEDS, "origin": "elsewhere"}))
            await store.drain()

        assert received == [["nasa"]]

    @pytest.mark.asyncio
    async def test_own_notification_ignored(self):
        store = PostgresStore(PostgresConfig())
        received = []
        store.subscribe(keys.SELECTED_FEEDS, received.append)

        with patch.object(store, "get") as get:
            await store.handle_notification(json.dumps({"key": keys.SELECTED_FEEDS, "origin": store.origin}))
            await store.handle_notification("not json")
            await store.handle_notification(json.dumps({"key": keys.CACHED_ARTICLES, "origin": "elsewhere"}))

        get.assert_not_called()
        assert received == []

    @pytest.mark.asyncio
    async def test_listener_logs_and_retries_failed_connection(self, caplog):
        """A refused LISTEN connection is logged and retried until the store closes."""
        store = PostgresStore(PostgresConfig())
        store.retry_delay = 0.01
        attempts = []

        async def refuse(conninfo, **kwargs):
            attempts.append(conninfo)
            raise psycopg.OperationalError("connection refused")

        with patch.object(psycopg.AsyncConnection, "connect", refuse):
            with caplog.at_level(logging.ERROR, logger="newswire.store.postgres"):
                listener = store.start_listening()
                for _ in range(100):
                    if len(attempts) >= 2:
                        break
                    await asyncio.sleep(0.01)

                assert not listener.done()
                await store.close()

        assert len(attempts) >= 2
        assert listener.cancelled()
        failures = [r for r in caplog.records if "Store change listener failed" in r.getMessage()]
        assert failures
        assert failures[0].levelno == logging.ERROR
        assert failures[0].exc_info is not None
