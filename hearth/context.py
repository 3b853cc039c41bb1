"""Per-request render context handed explicitly to every render function."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .config import ThemeConfig
from .host import Host
from .models import Post, RequestState, SiteInfo, Viewer
from .themes import ThemeLoader, build_theme_loader


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Everything a render pass may read: host services plus request data."""

    host: Host
    config: ThemeConfig
    theme: ThemeLoader
    site: SiteInfo = field(default_factory=SiteInfo)
    request: RequestState = field(default_factory=RequestState)
    post: Post = field(default_factory=Post)
    viewer: Viewer = field(default_factory=Viewer)

    def gettext(self, text: str) -> str:
        """Translate ``text`` in the theme's text domain."""
        return self.host.translate(text, self.config.text_domain)

    def render(self, key: str, **values: Any) -> str:
        return self.theme.render_page(key, {"ctx": self, "_": self.gettext, **values})

    def with_post(self, post: Post) -> "RenderContext":
        return replace(self, post=post)


def build_context(
    host: Host,
    config: ThemeConfig,
    *,
    site: SiteInfo | None = None,
    request: RequestState | None = None,
    post: Post | None = None,
    viewer: Viewer | None = None,
    theme: ThemeLoader | None = None,
) -> RenderContext:
    """Assemble a context, loading the configured theme when none is supplied."""
    loader = theme or build_theme_loader(themes_root=config.themes_dir, active_theme=config.theme_name)
    return RenderContext(
        host=host,
        config=config,
        theme=loader,
        site=site or SiteInfo(),
        request=request or RequestState(),
        post=post or Post(),
        viewer=viewer or Viewer(),
    )
