"""Generic Atom mapper."""

from feedparser import FeedParserDict

from .base import FeedMapper
from .extractors import ENCLOSURE, MEDIA_CONTENT_IMAGE, MEDIA_THUMBNAIL


class AtomMapper(FeedMapper):
    """Map the entries of an Atom document.

    The link is the alternate link; ``<updated>`` is preferred over
    ``<published>``. Image order: media thumbnail, image-typed media
    content, image enclosure.
    """

    name = "atom"
    date_fields = ("updated", "published")
    image_strategies = (
        MEDIA_THUMBNAIL,
        MEDIA_CONTENT_IMAGE,
        ENCLOSURE,
    )

    def extract_link(self, entry: FeedParserDict) -> str:
        """The alternate link, falling back to the first link."""
        links = [link for link in entry.get("links", []) if link.get("href")]
        if not links:
            return ""
        preferred = [link for link in links if link.get("rel", "alternate") == "alternate"]
        return (preferred or links)[0]["href"].strip()
