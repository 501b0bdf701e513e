"""Feed documents parsed with feedparser.

feedparser normalizes RSS 0.9x/1.0/2.0 and Atom into one entry shape, which
every mapper reads. A few image tiers depend on element nesting that
feedparser flattens (the first ``<media:group>``, a thumbnail nested inside
``<media:content>``, an ``<image>`` element on the item); those read the raw
item markup through BeautifulSoup's XML parser.
"""

from typing import List, Optional, Union

import feedparser
from bs4 import BeautifulSoup, Tag

from ..errors import FeedParseError

ATOM_NS = "http://www.w3.org/2005/Atom"
RSS1_NS = "http://purl.org/rss/1.0/"
MEDIA_NAMESPACES = ("http://search.yahoo.com/mrss/", "http://search.yahoo.com/mrss")
CORE_NAMESPACES = (None, "", RSS1_NS, ATOM_NS)

ITEM_NAMES = ("item", "entry")


def is_core(name: str):
    """Tag filter for ``name`` in the RSS 2.0, RSS 1.0 or Atom namespace."""
    return lambda tag: tag.name == name and tag.namespace in CORE_NAMESPACES


def is_media(name: str):
    """Tag filter for the Media RSS element ``name``."""
    return lambda tag: tag.name == name and tag.namespace in MEDIA_NAMESPACES


def _is_item(tag: Tag) -> bool:
    return tag.name in ITEM_NAMES and tag.namespace in CORE_NAMESPACES


class FeedDocument:
    """A fetched feed document and its feedparser result."""

    def __init__(self, raw: Union[str, bytes]) -> None:
        if isinstance(raw, str):
            raw = raw.lstrip("\ufeff \t\r\n").encode("utf-8")
        self.raw = raw.lstrip()
        self.parsed = feedparser.parse(self.raw)
        self._soup: Optional[BeautifulSoup] = None
        self._items: Optional[List[Tag]] = None

    @property
    def version(self) -> str:
        """feedparser's format name (``rss20``, ``atom10``, ...), empty if not a feed."""
        return self.parsed.get("version", "")

    @property
    def feed(self) -> feedparser.FeedParserDict:
        return self.parsed.feed

    @property
    def entries(self) -> List[feedparser.FeedParserDict]:
        return self.parsed.entries

    def check(self) -> None:
        """
        Reject documents feedparser could not read.

        Raises:
            FeedParseError: If the document is malformed and no entry could
                be recovered from it
        """
        if self.parsed.bozo and not self.parsed.entries:
            raise FeedParseError(f"XML parsing error: {self.parsed.get('bozo_exception')}")

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.raw, "xml")
        return self._soup

    def raw_item(self, index: int) -> Optional[Tag]:
        """Raw markup of entry ``index``, or None when it cannot be lined up with the entries."""
        if self._items is None:
            self._items = self.soup.find_all(_is_item)
        if len(self._items) != len(self.entries):
            return None
        return self._items[index]


def as_document(document: Union[str, bytes, FeedDocument]) -> FeedDocument:
    if isinstance(document, FeedDocument):
        return document
    return FeedDocument(document)


def entry_text(entry: feedparser.FeedParserDict, key: str) -> Optional[str]:
    """Stripped string value of ``key``, or None when absent or blank."""
    value = entry.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def content_value(entry: feedparser.FeedParserDict) -> Optional[str]:
    """First non-empty ``content:encoded`` or Atom ``<content>`` body."""
    for content in entry.get("content", []):
        value = (content.get("value") or "").strip()
        if value:
            return value
    return None


def tag_attribute(tag: Optional[Tag], name: str) -> Optional[str]:
    """Stripped attribute value of a raw tag, or None when absent or blank."""
    if tag is None:
        return None
    value = tag.get(name)
    if not isinstance(value, str):
        return None
    return value.strip() or None
