"""Mapper resolution by source id and format detection."""

import logging
from typing import Dict, List, Optional, Union

from ..errors import UnknownFeedFormatError
from ..models import Article
from .atom import AtomMapper
from .base import FeedMapper
from .bbc import BBCMapper
from .bloomberg import BloombergMapper
from .cnn import CNNMapper
from .document import FeedDocument, as_document, is_core
from .nasa import NASAMapper
from .rss import RSSMapper
from .variety import VarietyMapper

logger = logging.getLogger(__name__)

SPECIALIZED_MAPPERS = (
    BBCMapper,
    CNNMapper,
    BloombergMapper,
    NASAMapper,
    VarietyMapper,
)


def sniff_format(document: Union[str, bytes, FeedDocument]) -> Optional[str]:
    """Return ``"atom"``, ``"rss"`` or None for an unrecognized document.

    RSS documents that declare ``xmlns:atom`` for self links are RSS, and
    so is a bare ``<channel>`` document feedparser assigns no version.
    """
    document = as_document(document)
    if document.version.startswith("atom"):
        return "atom"
    if document.version.startswith("rss") or document.soup.find(is_core("channel")) is not None:
        return "rss"
    return None


class MapperRegistry:
    """Resolve the mapper for a feed.

    An exact source id registration wins; otherwise the document format is
    detected and routed to the generic Atom or RSS mapper.
    """

    def __init__(
        self,
        rss_mapper: Optional[FeedMapper] = None,
        atom_mapper: Optional[FeedMapper] = None,
    ) -> None:
        """Initialize registry with the generic fallback mappers."""
        self.rss_mapper = rss_mapper or RSSMapper()
        self.atom_mapper = atom_mapper or AtomMapper()
        self._mappers: Dict[str, FeedMapper] = {}

    def register(self, mapper: FeedMapper, *source_ids: str) -> None:
        """Register ``mapper`` for ``source_ids`` (default: the mapper's own ids)."""
        for source_id in source_ids or mapper.source_ids:
            self._mappers[source_id] = mapper

    def registered_ids(self) -> List[str]:
        return sorted(self._mappers)

    def resolve(self, source_id: str, document: Union[str, bytes, FeedDocument]) -> FeedMapper:
        """
        Select the mapper for a feed document.

        Raises:
            UnknownFeedFormatError: If no mapper is registered for the id and
                the document is neither Atom nor RSS
        """
        mapper = self._mappers.get(source_id)
        if mapper is not None:
            return mapper

        feed_format = sniff_format(document)
        if feed_format == "atom":
            return self.atom_mapper
        if feed_format == "rss":
            return self.rss_mapper
        raise UnknownFeedFormatError(f"Unknown feed format for {source_id}")

    def parse(
        self,
        document: Union[str, bytes, FeedDocument],
        source_id: str,
        logo_override: Optional[str] = None,
    ) -> List[Article]:
        """Resolve the mapper and parse ``document`` with it."""
        document = as_document(document)
        mapper = self.resolve(source_id, document)
        logger.debug("Parsing %s with %s mapper", source_id, mapper.name)
        return mapper.parse(document, source_id, logo_override)


def default_registry() -> MapperRegistry:
    """Registry with every specialized source mapper registered."""
    registry = MapperRegistry()
    for mapper_class in SPECIALIZED_MAPPERS:
        registry.register(mapper_class())
    return registry
