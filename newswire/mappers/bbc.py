"""BBC News mapper."""

from .extractors import (
    DESCRIPTION_HTML_IMAGE,
    ENCLOSURE,
    MEDIA_CONTENT_IMAGE,
    MEDIA_THUMBNAIL,
)
from .rss import RSSMapper


class BBCMapper(RSSMapper):
    """BBC News RSS.

    BBC items carry ``<media:thumbnail>``. Image order: media thumbnail,
    image-typed media content, image enclosure, ``<img>`` in the description.
    The channel image is used as the feed logo.
    """

    name = "bbc"
    source_ids = ("bbc-news",)
    extracts_channel_logo = True
    image_strategies = (
        MEDIA_THUMBNAIL,
        MEDIA_CONTENT_IMAGE,
        ENCLOSURE,
        DESCRIPTION_HTML_IMAGE,
    )
