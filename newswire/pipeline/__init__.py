"""Poll cycle orchestration."""

from .aggregator import AggregateResult, aggregate, persist, sort_articles
from .poller import FeedPoller
from .scheduler import FeedScheduler

__all__ = [
    "AggregateResult",
    "FeedPoller",
    "FeedScheduler",
    "aggregate",
    "persist",
    "sort_articles",
]
