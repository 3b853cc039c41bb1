"""Collect the image ids shown by a gallery-format post."""

from __future__ import annotations

import logging
from typing import Any

from .context import RenderContext
from .host import CAP_POST_GALLERIES
from .shortcodes import find_shortcodes

logger = logging.getLogger(__name__)

ATTACHMENT_LIMIT = 999


def get_gallery_images(ctx: RenderContext) -> list[str]:
    """Image ids for the current post, in source order.

    Tries the host's gallery parser, then the first ``[gallery]`` shortcode in
    the content, then image attachments of the post ordered by menu order.
    """
    post = ctx.post
    images: list[str] = []
    if ctx.host.supports(CAP_POST_GALLERIES):
        galleries = ctx.host.get_post_galleries(post.id)
        if galleries and galleries[0].get("ids"):
            images = split_ids(galleries[0]["ids"])
    if not images:
        shortcodes = find_shortcodes(post.content, ("gallery",))
        if shortcodes and "ids" in shortcodes[0].attributes:
            images = split_ids(shortcodes[0].attributes["ids"])

    if images:
        return images

    logger.debug("No gallery ids declared for post %s; querying attachments", post.id)
    attachments = ctx.host.get_posts(
        {
            "fields": "ids",
            "numberposts": ATTACHMENT_LIMIT,
            "order": "ASC",
            "orderby": "menu_order",
            "post_mime_type": "image",
            "post_parent": post.id,
            "post_type": "attachment",
        }
    )
    return [str(item) for item in attachments]


def split_ids(value: Any) -> list[str]:
    """Split a comma separated id list, dropping blanks."""
    if isinstance(value, (list, tuple)):
        parts = [str(item) for item in value]
    else:
        parts = str(value).split(",")
    return [part.strip() for part in parts if part.strip()]
