"""Excerpt length and "Continue reading" link filters."""

from __future__ import annotations

import re
from html import escape
from typing import Any, Callable

from .context import RenderContext
from .escaping import esc_url

EXCERPT_LENGTH = 40
HOST_EXCERPT_LENGTH = 55
HOST_EXCERPT_MORE = " [&hellip;]"
ELLIPSIS = " &hellip;"
TAG_RE = re.compile(r"<[^>]+>")

ContinueReadingRenderer = Callable[[RenderContext], str]


def excerpt_length(length: int = 0) -> int:
    """Excerpt word count; always 40 regardless of the host default."""
    return EXCERPT_LENGTH


def continue_reading_link(ctx: RenderContext) -> str:
    """Anchor pointing at the full post, shared by both excerpt variants."""
    label = ctx.gettext('Continue reading <span class="meta-nav">&rarr;</span>')
    return f' <a href="{esc_url(ctx.post.permalink)}">{label}</a>'


def auto_excerpt_more(
    more: str,
    ctx: RenderContext,
    link: ContinueReadingRenderer = continue_reading_link,
) -> str:
    """Replace the truncation marker of generated excerpts with an ellipsis and link."""
    if ctx.request.is_admin:
        return more
    return ELLIPSIS + link(ctx)


def custom_excerpt_more(
    output: str,
    ctx: RenderContext,
    link: ContinueReadingRenderer = continue_reading_link,
) -> str:
    """Append the link to hand-written excerpts outside attachment and admin screens."""
    post = ctx.post
    if post.has_excerpt and not post.is_attachment and not ctx.request.is_admin:
        return output + link(ctx)
    return output


def page_menu_args(args: dict[str, Any]) -> dict[str, Any]:
    """Show a home link in the fallback page menu unless the caller decided otherwise."""
    updated = dict(args)
    updated.setdefault("show_home", True)
    return updated


def the_excerpt(ctx: RenderContext) -> str:
    """Excerpt for the current post, passed through the host's excerpt filters."""
    post = ctx.post
    output = post.excerpt if post.has_excerpt else generated_excerpt(ctx)
    return str(ctx.host.apply_filters("get_the_excerpt", output, ctx))


def generated_excerpt(ctx: RenderContext) -> str:
    """Trim post content to the filtered word count, ending with the filtered marker."""
    limit = int(ctx.host.apply_filters("excerpt_length", HOST_EXCERPT_LENGTH))
    tokens = TAG_RE.sub(" ", ctx.post.content).split()
    if len(tokens) <= limit:
        return escape(" ".join(tokens), quote=False)
    trimmed = escape(" ".join(tokens[:limit]), quote=False)
    return trimmed + str(ctx.host.apply_filters("excerpt_more", HOST_EXCERPT_MORE, ctx))
