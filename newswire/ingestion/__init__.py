"""Feed document retrieval."""

from .fetcher import FeedFetcher
from .models import FeedResult, FetchResult

__all__ = ["FeedFetcher", "FeedResult", "FetchResult"]
