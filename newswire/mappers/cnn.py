"""CNN mapper."""

from .extractors import (
    DESCRIPTION_HTML_IMAGE,
    ENCLOSURE,
    MEDIA_THUMBNAIL,
    ImageStrategy,
    media_content_image_or_medium,
    media_group_image,
)
from .rss import RSSMapper

LARGE_IMAGE_WIDTH = 500


class CNNMapper(RSSMapper):
    """CNN RSS.

    CNN wraps several renditions in ``<media:group>``. Image order: grouped
    media content (first image wider than 500px, else the last image),
    media thumbnail, media content typed or marked as an image, image
    enclosure, ``<img>`` in the description. The channel image is used as
    the feed logo.
    """

    name = "cnn"
    source_ids = ("cnn",)
    extracts_channel_logo = True
    image_strategies = (
        ImageStrategy("media:group", media_group_image(LARGE_IMAGE_WIDTH)),
        MEDIA_THUMBNAIL,
        ImageStrategy("media:content[image]", media_content_image_or_medium),
        ENCLOSURE,
        DESCRIPTION_HTML_IMAGE,
    )
