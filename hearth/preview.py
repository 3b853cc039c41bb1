"""Render a full page preview from a YAML description of the request."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from markupsafe import Markup, escape
from pydantic import BaseModel, Field

from .config import ThemeConfig
from .comments import walk_comments
from .context import RenderContext, build_context
from .document import render_document_header
from .excerpt import the_excerpt
from .gallery import get_gallery_images
from .hooks import ThemeRuntime, activate
from .host import ALL_CAPABILITIES, Attachment, InMemoryHost
from .links import get_first_url
from .models import CommentNode, Post, ReplyArgs, RequestState, SiteInfo, ThemeOptions, Viewer
from .sidebars import footer_sidebar_class

logger = logging.getLogger(__name__)


class HostFixture(BaseModel):
    """Host state used for a preview."""

    version: str = "6.6"
    capabilities: list[str] = Field(default_factory=lambda: sorted(ALL_CAPABILITIES))
    theme_options: ThemeOptions = Field(default_factory=ThemeOptions)
    header_textcolor: str | None = None
    header_image: str = ""
    active_sidebars: list[str] = Field(default_factory=list)
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    galleries: dict[int, list[dict[str, Any]]] = Field(default_factory=dict)
    menu_html: str = ""

    def build(self) -> InMemoryHost:
        return InMemoryHost(
            version=self.version,
            capabilities=frozenset(self.capabilities),
            theme_options=self.theme_options,
            header_textcolor=self.header_textcolor,
            header_image=self.header_image,
            active_sidebars=set(self.active_sidebars),
            attachments=[Attachment(**item) for item in self.attachments],
            galleries=dict(self.galleries),
            menu_html=self.menu_html,
        )


class PreviewFixture(BaseModel):
    """Everything needed to render one page outside a live host."""

    host: HostFixture = Field(default_factory=HostFixture)
    site: SiteInfo = Field(default_factory=SiteInfo)
    request: RequestState = Field(default_factory=RequestState)
    post: Post = Field(default_factory=Post)
    viewer: Viewer = Field(default_factory=Viewer)
    post_format: str | None = Field(default=None)
    comments: list[CommentNode] = Field(default_factory=list)
    reply: ReplyArgs = Field(default_factory=ReplyArgs)


def load_fixture(path: str | Path) -> PreviewFixture:
    candidate = Path(path)
    with candidate.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return PreviewFixture.model_validate(data)


def render_preview(fixture: PreviewFixture, config: ThemeConfig) -> str:
    """Activate the theme on an in-memory host and render the described page."""
    host = fixture.host.build()
    runtime = activate(host, config)
    ctx = build_context(
        host,
        config,
        site=fixture.site,
        request=fixture.request,
        post=fixture.post,
        viewer=fixture.viewer,
    )
    parts = [
        render_document_header(ctx, runtime.renderers),
        _render_entry(ctx, runtime, fixture.post_format),
    ]
    if not ctx.request.is_singular:
        parts.append(runtime.renderers.content_nav("nav-below", ctx))
    if fixture.comments:
        parts.append('<ol class="commentlist">')
        parts.append(walk_comments(fixture.comments, fixture.reply, ctx, runtime.renderers.comment))
        parts.append("</ol>")
    footer_class = footer_sidebar_class(host)
    parts.append(f'<div id="supplementary" {footer_class}></div>' if footer_class else '<div id="supplementary"></div>')
    parts.append("</div><!-- #main -->\n</div><!-- #wrapper -->\n</body>\n</html>")
    return "\n".join(parts) + "\n"


def _render_entry(ctx: RenderContext, runtime: ThemeRuntime, post_format: str | None) -> str:
    post = ctx.post
    lines = [f'<article id="post-{post.id}" class="post format-{escape(post_format or "standard")}">']
    title_href = get_first_url(ctx) if post_format == "link" else post.permalink
    lines.append(Markup('<h1 class="entry-title"><a href="{}" rel="bookmark">{}</a></h1>').format(title_href, post.title))
    lines.append(f'<div class="entry-meta">{runtime.renderers.posted_on(ctx)}</div>')
    if post_format == "gallery":
        images = get_gallery_images(ctx)
        logger.debug("Gallery preview for post %s shows %d image(s)", post.id, len(images))
        lines.append(f'<p class="gallery-meta">{len(images)} photo(s): {escape(", ".join(images))}</p>')
    if ctx.request.is_singular:
        lines.append(f'<div class="entry-content">{post.content}</div>')
    else:
        lines.append(f'<div class="entry-summary"><p>{the_excerpt(ctx)}</p></div>')
    lines.append("</article>")
    return "\n".join(str(line) for line in lines)
