"""Shared feed-to-article mapping algorithm."""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from feedparser import FeedParserDict

from ..models import Article
from ..models.article import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from .document import FeedDocument, as_document, content_value, entry_text
from .extractors import EntryContext, ImageStrategy, channel_logo, first_image
from .normalize import DateCandidate, resolve_timestamp, truncate

logger = logging.getLogger(__name__)


class FeedMapper:
    """Base class for feed mappers.

    Subclasses configure the entry fields tried for each value and the
    ordered image fallback chain; the extraction algorithm is shared.
    """

    name = "feed"
    source_ids: Tuple[str, ...] = ()
    description_from_content = True
    date_fields: Tuple[str, ...] = ("published", "updated")
    image_strategies: Sequence[ImageStrategy] = ()
    extracts_channel_logo = False

    def parse(
        self,
        document: Union[str, bytes, FeedDocument],
        source_id: str,
        logo_override: Optional[str] = None,
    ) -> List[Article]:
        """
        Parse a feed document into articles.

        Args:
            document: Raw feed document, or one already parsed
            source_id: Id of the feed the document belongs to
            logo_override: Logo URL applied to every article, if configured

        Returns:
            Articles in document order. Entries without a title or a
            description are dropped; entries that fail to map are skipped.

        Raises:
            FeedParseError: If the document is malformed and has no entries
        """
        document = as_document(document)
        document.check()
        source_logo = self.resolve_logo(document, logo_override)

        articles = []
        for index, entry in enumerate(document.entries):
            try:
                article = self.map_entry(entry, index, document, source_id, source_logo)
            except Exception as e:
                logger.warning("Failed to parse %s item %d for %s: %s", self.name, index, source_id, e)
                continue
            if article is not None:
                articles.append(article)
        return articles

    def resolve_logo(self, document: FeedDocument, logo_override: Optional[str]) -> Optional[str]:
        """Feed logo for every article: the override, else the channel image if supported."""
        if logo_override:
            return logo_override
        if self.extracts_channel_logo:
            return channel_logo(document)
        return None

    def extract_description(self, entry: FeedParserDict) -> Optional[str]:
        # feedparser copies content into ``summary`` without a ``summary_detail``
        description = entry_text(entry, "summary") if "summary_detail" in entry else None
        if not description and self.description_from_content:
            description = content_value(entry)
        return description

    def extract_link(self, entry: FeedParserDict) -> str:
        return entry_text(entry, "link") or ""

    def extract_dates(self, entry: FeedParserDict) -> List[DateCandidate]:
        """Parsed date for each of ``date_fields``, or its raw text when feedparser could not parse it."""
        candidates: List[DateCandidate] = []
        for name in self.date_fields:
            if name not in entry:
                continue
            candidates.append(entry.get(f"{name}_parsed") or entry_text(entry, name))
        return candidates

    def map_entry(
        self,
        entry: FeedParserDict,
        index: int,
        document: FeedDocument,
        source_id: str,
        source_logo: Optional[str],
    ) -> Optional[Article]:
        """Map one entry, or return None if it lacks a title or description."""
        title = entry_text(entry, "title")
        description = self.extract_description(entry)
        if not title or not description:
            logger.debug("Dropping %s item without title or description for %s", self.name, source_id)
            return None

        context = EntryContext(
            entry=entry,
            document=document,
            index=index,
            description=description,
            content=content_value(entry),
        )

        return Article(
            title=truncate(title, TITLE_MAX_LENGTH),
            description=truncate(description, DESCRIPTION_MAX_LENGTH),
            link=self.extract_link(entry),
            published_at=resolve_timestamp(self.extract_dates(entry)),
            source_id=source_id,
            image_url=first_image(self.image_strategies, context, source_id),
            source_logo_url=source_logo,
        )
