"""Bloomberg mapper."""

from .extractors import (
    DESCRIPTION_HTML_IMAGE,
    ENCLOSURE,
    MEDIA_THUMBNAIL,
    ImageStrategy,
    media_content_of_type,
)
from .rss import RSSMapper


class BloombergMapper(RSSMapper):
    """Bloomberg RSS.

    Image order: media content with an ``image/*`` MIME type, media
    content whose type starts with ``image``, media thumbnail, image
    enclosure, ``<img>`` in the description. The channel image is used as
    the feed logo.
    """

    name = "bloomberg"
    source_ids = ("bloomberg",)
    extracts_channel_logo = True
    image_strategies = (
        ImageStrategy("media:content[type=image/*]", media_content_of_type("image/")),
        ImageStrategy("media:content[type^=image]", media_content_of_type("image")),
        MEDIA_THUMBNAIL,
        ENCLOSURE,
        DESCRIPTION_HTML_IMAGE,
    )
