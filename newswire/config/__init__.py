"""Configuration management."""

from .loader import Config, load_config, load_feeds, save_config, save_feeds
from .models import (
    DEFAULT_REFRESH_INTERVAL_MIN,
    FETCH_TIMEOUT_SECONDS,
    MAX_REFRESH_INTERVAL_MIN,
    MIN_REFRESH_INTERVAL_MIN,
    ConfigModel,
    FeedConfig,
    LoggingConfig,
    PollingConfig,
    PostgresConfig,
    StoreConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "FeedConfig",
    "LoggingConfig",
    "PollingConfig",
    "PostgresConfig",
    "StoreConfig",
    "DEFAULT_REFRESH_INTERVAL_MIN",
    "FETCH_TIMEOUT_SECONDS",
    "MAX_REFRESH_INTERVAL_MIN",
    "MIN_REFRESH_INTERVAL_MIN",
    "load_config",
    "load_feeds",
    "save_config",
    "save_feeds",
]
