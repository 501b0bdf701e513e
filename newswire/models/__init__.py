"""Data models shared by the feed engine."""

from .article import Article
from .base import WireModel
from .feed import DEFAULT_CATEGORY, Feed
from .status import EngineStatus

__all__ = ["Article", "DEFAULT_CATEGORY", "EngineStatus", "Feed", "WireModel"]
