"""Configuration loader."""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel, FeedConfig, PostgresConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "newswire"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_DIR / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def feeds_path(self) -> Path:
        """Path of the feeds file next to the config file."""
        return self.config_path.parent / "feeds.yaml"

    def get_db_config(self) -> PostgresConfig:
        """Get database configuration."""
        return self.config.postgres


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_feeds(feeds_path: Path) -> List[FeedConfig]:
    """Load feeds from YAML file.

    Invalid entries and duplicate ids are skipped with a warning.
    """
    if not feeds_path.exists():
        raise FileNotFoundError(f"Feeds file not found: {feeds_path}")

    try:
        with open(feeds_path, encoding="utf-8") as f:
            feeds_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in feeds file: {e}")

    if not feeds_data or "feeds" not in feeds_data:
        return []

    feeds: List[FeedConfig] = []
    seen = set()
    for feed_data in feeds_data["feeds"] or []:
        try:
            feed = FeedConfig(**feed_data)
        except (TypeError, ValidationError) as e:
            name = feed_data.get("id", "unknown") if isinstance(feed_data, dict) else "unknown"
            logger.warning("Skipping invalid feed %s: %s", name, e)
            continue
        if feed.id in seen:
            logger.warning("Skipping duplicate feed id %s", feed.id)
            continue
        seen.add(feed.id)
        feeds.append(feed)

    return feeds


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def save_feeds(feeds: List[FeedConfig], feeds_path: Path) -> None:
    """Save feeds to YAML file."""
    feeds_path.parent.mkdir(parents=True, exist_ok=True)

    feeds_data = {"feeds": [feed.model_dump(by_alias=True, exclude_none=True) for feed in feeds]}

    with open(feeds_path, "w", encoding="utf-8") as f:
        yaml.dump(feeds_data, f, default_flow_style=False, sort_keys=False)
