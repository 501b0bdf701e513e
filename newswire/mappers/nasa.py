"""NASA mapper."""

from .extractors import (
    DESCRIPTION_HTML_IMAGE,
    ENCLOSURE,
    MEDIA_THUMBNAIL,
    ImageStrategy,
    html_image,
    media_content_or_nested_thumbnail,
)
from .rss import RSSMapper


class NASAMapper(RSSMapper):
    """NASA RSS.

    NASA descriptions are short teasers; the article body and its lead
    image live in ``content:encoded``, which is not used as description
    text. Image order: ``<img>`` in ``content:encoded`` (ampersands
    unescaped), media thumbnail, image media content or a thumbnail nested
    in it, image enclosure, ``<img>`` in the description. The channel image
    is used as the feed logo.
    """

    name = "nasa"
    source_ids = ("nasa",)
    description_from_content = False
    extracts_channel_logo = True
    image_strategies = (
        ImageStrategy("content:encoded <img>", html_image("content", unescape=True)),
        MEDIA_THUMBNAIL,
        ImageStrategy("media:content[medium=image]", media_content_or_nested_thumbnail),
        ENCLOSURE,
        DESCRIPTION_HTML_IMAGE,
    )
