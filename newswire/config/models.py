"""Configuration models."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..models import Feed

DEFAULT_REFRESH_INTERVAL_MIN = 15
MIN_REFRESH_INTERVAL_MIN = 5
MAX_REFRESH_INTERVAL_MIN = 60
FETCH_TIMEOUT_SECONDS = 30.0


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("newswire", description="Database name")
    user: str = Field("newswire", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class StoreConfig(BaseModel):
    """Key-value store backend selection."""

    backend: Literal["memory", "postgres"] = Field("memory", description="Store backend")


class PollingConfig(BaseModel):
    """Poll cycle parameters."""

    refresh_interval_min: float = Field(
        DEFAULT_REFRESH_INTERVAL_MIN,
        description="Default refresh interval when the store holds none",
        gt=0,
    )
    fetch_timeout_seconds: float = Field(
        FETCH_TIMEOUT_SECONDS, description="Per-feed fetch timeout", gt=0
    )
    user_agent: str = Field("Newswire/1.0 (+feed poller)", description="HTTP User-Agent")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    file: Optional[str] = Field(None, description="Optional rotating log file")


class ConfigModel(BaseModel):
    """Main configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class FeedConfig(Feed):
    """Feed entry from feeds.yaml."""

    selected: bool = Field(True, description="Whether the feed is selected for polling")

    def to_feed(self) -> Feed:
        """Drop the file-only fields."""
        return Feed(**self.model_dump(exclude={"selected"}))
