"""Image extraction strategies.

A mapper's image fallback chain is a plain list of ``ImageStrategy`` values
evaluated in order; the first strategy that yields a URL wins. A strategy
that raises is logged and skipped, so one malformed element only costs that
tier.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, NamedTuple, Optional, Sequence

from bs4 import BeautifulSoup, Tag
from feedparser import FeedParserDict

from .document import FeedDocument, is_core, is_media, tag_attribute

logger = logging.getLogger(__name__)


@dataclass
class EntryContext:
    """A feedparser entry plus the values already extracted from it."""

    entry: FeedParserDict
    document: FeedDocument
    index: int = 0
    description: Optional[str] = None
    content: Optional[str] = None

    @property
    def raw_item(self) -> Optional[Tag]:
        return self.document.raw_item(self.index)


class ImageStrategy(NamedTuple):
    """Named image extraction tier."""

    name: str
    extract: Callable[[EntryContext], Optional[str]]


def first_image(
    strategies: Sequence[ImageStrategy],
    context: EntryContext,
    source_id: str = "",
) -> Optional[str]:
    """Evaluate ``strategies`` in order and return the first URL found."""
    for strategy in strategies:
        try:
            url = strategy.extract(context)
        except Exception as e:
            logger.debug("Image strategy %s failed for %s: %s", strategy.name, source_id, e)
            continue
        if url and url.strip():
            return url.strip()
    return None


def _value(attributes: Mapping, name: str) -> Optional[str]:
    value = attributes.get(name)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _is_image_type(attributes: Mapping, prefix: str = "image") -> bool:
    return (_value(attributes, "type") or "").lower().startswith(prefix)


def _is_image_medium(attributes: Mapping) -> bool:
    return (_value(attributes, "medium") or "").lower() == "image"


def _width(attributes: Mapping) -> int:
    try:
        return int(_value(attributes, "width") or 0)
    except ValueError:
        return 0


def enclosure_image(context: EntryContext) -> Optional[str]:
    """RSS ``<enclosure>`` or Atom ``<link rel="enclosure">`` with an image type."""
    for enclosure in context.entry.get("enclosures", []):
        if _is_image_type(enclosure):
            url = _value(enclosure, "href")
            if url:
                return url
    return None


def media_thumbnail(context: EntryContext) -> Optional[str]:
    """First ``<media:thumbnail>`` anywhere in the entry."""
    for thumbnail in context.entry.get("media_thumbnail", []):
        url = _value(thumbnail, "url")
        if url:
            return url
    return None


def media_content_of_type(prefix: str = "image") -> Callable[[EntryContext], Optional[str]]:
    """``<media:content>`` whose ``type`` starts with ``prefix``."""

    def extract(context: EntryContext) -> Optional[str]:
        for content in context.entry.get("media_content", []):
            if _is_image_type(content, prefix):
                url = _value(content, "url")
                if url:
                    return url
        return None

    return extract


media_content_image = media_content_of_type("image")


def media_content_image_or_medium(context: EntryContext) -> Optional[str]:
    """``<media:content>`` typed as an image or with ``medium="image"``."""
    for content in context.entry.get("media_content", []):
        if _is_image_type(content) or _is_image_medium(content):
            url = _value(content, "url")
            if url:
                return url
    return None


def media_group_image(min_width: int = 500) -> Callable[[EntryContext], Optional[str]]:
    """Image from the first ``<media:group>``.

    The first image wider than ``min_width`` is preferred; otherwise the
    last image in the group.
    """

    def extract(context: EntryContext) -> Optional[str]:
        item = context.raw_item
        if item is None:
            return None
        group = item.find(is_media("group"))
        if group is None:
            return None

        last_url = None
        for content in group.find_all(is_media("content")):
            if not _is_image_medium(content.attrs):
                continue
            url = tag_attribute(content, "url")
            if not url:
                continue
            last_url = url
            if _width(content.attrs) > min_width:
                return url
        return last_url

    return extract


def media_content_or_nested_thumbnail(context: EntryContext) -> Optional[str]:
    """``<media:content medium="image">`` or a thumbnail nested in any media content."""
    item = context.raw_item
    if item is None:
        for content in context.entry.get("media_content", []):
            if _is_image_medium(content) and _value(content, "url"):
                return _value(content, "url")
        return None

    for content in item.find_all(is_media("content")):
        if _is_image_medium(content.attrs):
            url = tag_attribute(content, "url")
            if url:
                return url
        url = tag_attribute(content.find(is_media("thumbnail")), "url")
        if url:
            return url
    return None


def item_image_element(context: EntryContext) -> Optional[str]:
    """``<image>`` element inside the entry, by ``url`` attribute or child."""
    item = context.raw_item
    if item is None:
        return None
    for image in item.find_all(is_core("image")):
        url = tag_attribute(image, "url")
        if not url:
            child = image.find(is_core("url"))
            url = child.get_text(strip=True) if child is not None else None
        if url:
            return url
    return None


def channel_image(context: EntryContext) -> Optional[str]:
    """Feed-level ``<channel><image><url>``."""
    return channel_logo(context.document)


def channel_logo(document: FeedDocument) -> Optional[str]:
    """URL of the channel image of an RSS document."""
    image = document.feed.get("image")
    if not image:
        return None
    return _value(image, "href")


def unescape_ampersands(url: str) -> str:
    """Undo ampersand encoding some feeds leave inside image URLs."""
    return url.replace("&#038;", "&").replace("&amp;", "&")


def html_image(field: str, unescape: bool = False) -> Callable[[EntryContext], Optional[str]]:
    """``src`` of the first ``<img>`` inside the HTML held by ``field``."""

    def extract(context: EntryContext) -> Optional[str]:
        markup = getattr(context, field)
        if not markup or "<img" not in markup.lower():
            return None
        soup = BeautifulSoup(markup, "html.parser")
        img = soup.find("img", src=True)
        if img is None:
            return None
        src = img["src"].strip()
        if unescape:
            src = unescape_ampersands(src)
        return src or None

    return extract


description_html_image = html_image("description")


# Shared tiers
ENCLOSURE = ImageStrategy("enclosure[type=image]", enclosure_image)
MEDIA_THUMBNAIL = ImageStrategy("media:thumbnail", media_thumbnail)
MEDIA_CONTENT_IMAGE = ImageStrategy("media:content[type=image]", media_content_image)
ITEM_IMAGE = ImageStrategy("item image", item_image_element)
CHANNEL_IMAGE = ImageStrategy("channel image", channel_image)
DESCRIPTION_HTML_IMAGE = ImageStrategy("description <img>", description_html_image)
