"""Postgres-backed key-value store.

Values live in the ``kv_store`` table as JSONB. Every write also issues a
``pg_notify`` so that stores in other processes (e.g. a CLI command changing
the feed selection while the poller runs) can dispatch the change to their
own subscribers.
"""

import asyncio
import json
import logging
import uuid
from typing import Any, Optional, Tuple

import psycopg
from psycopg.types.json import Jsonb

from ..config import PostgresConfig
from ..db import DatabaseConfig, get_connection
from .base import KeyValueStore

logger = logging.getLogger(__name__)

NOTIFY_CHANNEL = "newswire_kv"


class PostgresStore(KeyValueStore):
    """Key-value store on top of the shared psycopg connection pool."""

    retry_delay = 5.0

    def __init__(self, db_config: PostgresConfig) -> None:
        """Initialize store for the configured database."""
        super().__init__()
        self.db_config = db_config
        self.origin = uuid.uuid4().hex
        self._listener: Optional[asyncio.Task] = None

    async def _read(self, key: str) -> Tuple[bool, Any]:
        return await asyncio.to_thread(self._read_sync, key)

    async def _write(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._write_sync, key, value)

    def _read_sync(self, key: str) -> Tuple[bool, Any]:
        with get_connection(self.db_config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
                row = cur.fetchone()
        if row is None:
            return False, None
        return True, row["value"]

    def _write_sync(self, key: str, value: Any) -> None:
        payload = json.dumps({"key": key, "origin": self.origin})
        with get_connection(self.db_config) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO kv_store (key, value)
                    VALUES (%s, %s)
                    ON CONFLICT (key) DO UPDATE SET
                        value = EXCLUDED.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (key, Jsonb(value)),
                )
                cur.execute("SELECT pg_notify(%s, %s)", (NOTIFY_CHANNEL, payload))
            conn.commit()

    async def handle_notification(self, payload: str) -> None:
        """Dispatch a change made by another process to the local handler."""
        try:
            message = json.loads(payload)
        except ValueError:
            logger.warning("Ignoring malformed store notification: %r", payload)
            return

        if message.get("origin") == self.origin:
            return
        key = message.get("key")
        if key not in self._handlers:
            return

        value = await self.get(key)
        self.notify(key, value)

    async def listen(self) -> None:
        """Consume change notifications until cancelled.

        A dropped or refused connection is logged and retried every
        ``retry_delay`` seconds.
        """
        conninfo = DatabaseConfig(self.db_config).connection_string
        while True:
            try:
                async with await psycopg.AsyncConnection.connect(conninfo, autocommit=True) as conn:
                    await conn.execute(f"LISTEN {NOTIFY_CHANNEL}")
                    logger.info("Listening for store changes on %s", NOTIFY_CHANNEL)
                    async for notify in conn.notifies():
                        await self.handle_notification(notify.payload)
            except Exception:
                logger.exception("Store change listener failed, reconnecting in %gs", self.retry_delay)
            await asyncio.sleep(self.retry_delay)

    def start_listening(self) -> asyncio.Task:
        """Run ``listen`` in a background task."""
        if self._listener is None or self._listener.done():
            self._listener = asyncio.get_running_loop().create_task(self.listen())
        return self._listener

    async def close(self) -> None:
        """Stop listening and cancel pending dispatches."""
        if self._listener is not None:
            self._listener.cancel()
            await asyncio.gather(self._listener, return_exceptions=True)
            self._listener = None
        await super().close()
