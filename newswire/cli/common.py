"""Helpers shared by CLI commands."""

import os
from pathlib import Path
from typing import List

from ..config import Config, ConfigModel, FeedConfig, load_feeds
from ..ingestion import FeedFetcher
from ..log import configure_logging
from ..store import KeyValueStore, MemoryStore, PostgresStore, keys


def get_config() -> Config:
    """Config manager for ``NEWSWIRE_CONFIG`` or the default location."""
    config_path = os.environ.get("NEWSWIRE_CONFIG")
    return Config(Path(config_path).expanduser() if config_path else None)


def setup_logging(config: Config) -> None:
    configure_logging(config.config.logging.level, config.config.logging.file)


def create_store(config: ConfigModel) -> KeyValueStore:
    """Store for the configured backend."""
    if config.store.backend == "postgres":
        return PostgresStore(config.postgres)
    return MemoryStore()


def create_fetcher(config: ConfigModel) -> FeedFetcher:
    return FeedFetcher(
        timeout=config.polling.fetch_timeout_seconds,
        user_agent=config.polling.user_agent,
    )


def read_feeds(config: Config) -> List[FeedConfig]:
    """Feeds from feeds.yaml, or none if the file is missing."""
    try:
        return load_feeds(config.feeds_path)
    except FileNotFoundError:
        return []


async def seed_store(store: KeyValueStore, feeds: List[FeedConfig]) -> None:
    """Publish the configured feeds; seed the selection only if none is stored."""
    await store.set(keys.RSS_FEEDS, [feed.to_feed().to_store() for feed in feeds])
    if await store.get(keys.SELECTED_FEEDS) is None:
        await store.set(keys.SELECTED_FEEDS, [feed.id for feed in feeds if feed.selected])
