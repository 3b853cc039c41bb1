"""Small template tags and filters used across the theme's views."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from markupsafe import Markup

from .context import RenderContext
from .escaping import esc_attr, esc_html, esc_url_raw

NON_SINGULAR_TEMPLATES = ("showcase.php", "sidebar-page.php")

TAG_CLOUD_ARGS = {"largest": 22, "smallest": 8, "unit": "pt", "format": "list"}


def format_date(value: datetime | None) -> str:
    """Long date such as 'March 4, 2024'."""
    if value is None:
        return ""
    return f"{value:%B} {value.day}, {value.year}"


def format_time(value: datetime | None) -> str:
    """Clock time such as '9:05 pm'."""
    if value is None:
        return ""
    hour = value.hour % 12 or 12
    suffix = "am" if value.hour < 12 else "pm"
    return f"{hour}:{value:%M} {suffix}"


def posted_on(ctx: RenderContext) -> str:
    """Date and author meta line for the current post."""
    post = ctx.post
    author_title = ctx.gettext("View all posts by {author}").format(author=post.author_name)
    return ctx.render(
        "posted_on",
        permalink=esc_url_raw(post.permalink),
        time_title=format_time(post.date),
        iso_date=post.date.isoformat() if post.date else "",
        display_date=format_date(post.date),
        author_url=esc_url_raw(post.author_url),
        author_title=author_title,
        author=post.author_name,
    ).strip()


def content_nav(html_id: str, ctx: RenderContext, older_url: str = "", newer_url: str = "") -> str:
    """Older/newer pagination block, rendered only when there is more than one page."""
    if ctx.request.max_num_pages <= 1:
        return ""
    older = ctx.gettext('<span class="meta-nav">&larr;</span> Older posts')
    newer = ctx.gettext('Newer posts <span class="meta-nav">&rarr;</span>')
    return ctx.render(
        "content_nav",
        html_id=html_id,
        older_link=_page_link(older_url, older),
        newer_link=_page_link(newer_url, newer),
    ).strip()


def _page_link(url: str, label: str) -> Markup:
    href = esc_url_raw(url)
    if not href:
        return Markup("")
    return Markup(f'<a href="{esc_attr(href)}">{label}</a>')


def body_classes(classes: list[str], ctx: RenderContext) -> list[str]:
    """Append 'single-author' and 'singular' where they apply; never removes classes."""
    updated = list(classes)
    request = ctx.request
    if not request.is_multi_author:
        updated.append("single-author")
    if request.is_singular and not request.is_home and request.page_template not in NON_SINGULAR_TEMPLATES:
        updated.append("singular")
    return updated


def skip_link(ctx: RenderContext) -> str:
    """Skip links printed right after ``<body>`` opens."""
    primary = esc_html(ctx.gettext("Skip to primary content"))
    output = f'<div class="skip-link"><a class="assistive-text" href="#content">{primary}</a></div>'
    if not ctx.request.is_singular:
        secondary = esc_html(ctx.gettext("Skip to secondary content"))
        output += f'<div class="skip-link"><a class="assistive-text" href="#secondary">{secondary}</a></div>'
    return output


def widget_tag_cloud_args(args: dict[str, Any]) -> dict[str, Any]:
    """Tag cloud sizing for the theme's widget areas."""
    return {**args, **TAG_CLOUD_ARGS}


def list_item_separator(ctx: RenderContext) -> str:
    """Separator placed between items of inline lists such as categories."""
    return ctx.gettext(", ")
