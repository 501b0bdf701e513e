"""Generic RSS 2.0 / RSS 1.0 mapper."""

from .base import FeedMapper
from .extractors import CHANNEL_IMAGE, ENCLOSURE, ITEM_IMAGE, MEDIA_CONTENT_IMAGE


class RSSMapper(FeedMapper):
    """Map the items of an RSS document.

    The description falls back to ``content:encoded``; dates are ``pubDate``
    then ``dc:date``. Image order: image enclosure, image-typed media
    content, an ``<image>`` element on the item, the channel image.
    """

    name = "rss"
    date_fields = ("published", "updated")
    image_strategies = (
        ENCLOSURE,
        MEDIA_CONTENT_IMAGE,
        ITEM_IMAGE,
        CHANNEL_IMAGE,
    )
