"""Variety mapper."""

from .extractors import (
    DESCRIPTION_HTML_IMAGE,
    ENCLOSURE,
    MEDIA_THUMBNAIL,
    ImageStrategy,
    html_image,
    media_content_image_or_medium,
)
from .rss import RSSMapper


class VarietyMapper(RSSMapper):
    """Variety RSS (WordPress).

    Image order: media content typed or marked as an image, media
    thumbnail, ``<img>`` in ``content:encoded`` (WordPress encodes
    ampersands as ``&#038;``), image enclosure, ``<img>`` in the
    description. The channel image is used as the feed logo.
    """

    name = "variety"
    source_ids = ("variety",)
    extracts_channel_logo = True
    image_strategies = (
        ImageStrategy("media:content[image]", media_content_image_or_medium),
        MEDIA_THUMBNAIL,
        ImageStrategy("content:encoded <img>", html_image("content", unescape=True)),
        ENCLOSURE,
        DESCRIPTION_HTML_IMAGE,
    )
