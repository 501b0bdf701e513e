"""Feed format detection and normalization into articles."""

from .atom import AtomMapper
from .base import FeedMapper
from .bbc import BBCMapper
from .bloomberg import BloombergMapper
from .cnn import CNNMapper
from .document import FeedDocument
from .extractors import EntryContext, ImageStrategy, first_image
from .nasa import NASAMapper
from .normalize import parse_timestamp, truncate
from .registry import MapperRegistry, default_registry, sniff_format
from .rss import RSSMapper
from .variety import VarietyMapper

__all__ = [
    "AtomMapper",
    "BBCMapper",
    "BloombergMapper",
    "CNNMapper",
    "EntryContext",
    "FeedDocument",
    "FeedMapper",
    "ImageStrategy",
    "MapperRegistry",
    "NASAMapper",
    "RSSMapper",
    "VarietyMapper",
    "default_registry",
    "first_image",
    "parse_timestamp",
    "sniff_format",
    "truncate",
]
