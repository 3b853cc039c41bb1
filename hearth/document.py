"""Render the shared document header: everything up to ``<div id="main">``."""

from __future__ import annotations

from markupsafe import Markup

from .context import RenderContext
from .escaping import esc_url_raw
from .header import header_dimensions
from .pluggable import DEFAULT_RENDERERS, Renderers

TITLE_SEPARATOR = " | "


def document_title(ctx: RenderContext) -> str:
    """Text for ``<title>``: view title, site name, tagline on the front, page number."""
    site = ctx.site
    request = ctx.request
    title = f"{request.document_title}{site.name}"
    if site.description and (request.is_home or request.is_front_page):
        title += f"{TITLE_SEPARATOR}{site.description}"
    page_number = max(request.paged, request.page)
    if page_number >= 2 and not request.is_404:
        title += TITLE_SEPARATOR + ctx.gettext("Page {number}").format(number=page_number)
    return title


def base_body_classes(ctx: RenderContext) -> list[str]:
    request = ctx.request
    classes: list[str] = []
    if request.is_home:
        classes.append("home")
    if request.is_singular:
        classes.append("single" if ctx.post.post_type == "post" else ctx.post.post_type)
    if request.is_paged:
        classes.append("paged")
    return classes


def featured_header(ctx: RenderContext, renderers: Renderers = DEFAULT_RENDERERS) -> Markup:
    """Post thumbnail when it is at least as wide as the header, else the header image."""
    width, _ = header_dimensions(ctx)
    post = ctx.post
    if ctx.request.is_singular and post.thumbnail_id is not None:
        image = ctx.host.get_attachment_image_src(post.thumbnail_id, (width, width))
        if image and image[1] >= width:
            return Markup(ctx.host.get_post_thumbnail_html(post.id, "post-thumbnail"))
    return Markup(renderers.header_image(ctx))


def render_document_header(ctx: RenderContext, renderers: Renderers = DEFAULT_RENDERERS) -> str:
    host = ctx.host
    request = ctx.request
    if request.is_singular and request.thread_comments:
        host.enqueue_script("comment-reply")

    is_front = not request.is_paged and (
        request.is_front_page or (request.is_home and request.page_for_posts != request.queried_object_id)
    )
    body_classes = host.apply_filters("body_class", base_body_classes(ctx), ctx)

    return ctx.render(
        "document_header",
        site=ctx.site,
        title=document_title(ctx),
        stylesheet_href=f"{esc_url_raw(ctx.site.stylesheet_uri)}?ver={ctx.config.assets.stylesheet}",
        head=Markup(host.wp_head(ctx)),
        body_classes=" ".join(body_classes),
        body_open=Markup(host.do_action("wp_body_open", ctx)),
        heading_tag="h1" if request.is_home or request.is_front_page else "div",
        home_url=esc_url_raw(ctx.site.home_url),
        is_front=is_front,
        header_image=featured_header(ctx, renderers),
        nav_menu=Markup(host.nav_menu({"container_class": "menu-header", "theme_location": "primary"})),
    )
