"""Find the first link in a post, used by the "link" post format."""

from __future__ import annotations

import logging

from .anchors import ANCHOR_HREF_RE, url_grabber
from .context import RenderContext
from .host import CAP_URL_IN_CONTENT

__all__ = ["ANCHOR_HREF_RE", "get_first_url", "url_grabber"]

logger = logging.getLogger(__name__)


def get_first_url(ctx: RenderContext) -> str:
    """First link in the current post's content, falling back to its permalink."""
    content = ctx.post.content
    found: str | None = None
    if ctx.host.supports(CAP_URL_IN_CONTENT):
        found = ctx.host.get_url_in_content(content) or None
    if not found:
        found = url_grabber(content)
    if found:
        return found
    logger.debug("No link found in post %s; using its permalink", ctx.post.id)
    return str(ctx.host.apply_filters("the_permalink", ctx.post.permalink))
