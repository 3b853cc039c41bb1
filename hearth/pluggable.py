"""Named renderer slots that a child theme may replace."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable

from . import comments, excerpt, header, template_tags
from .context import RenderContext

ContextRenderer = Callable[[RenderContext], str]


@dataclass(frozen=True, slots=True)
class Renderers:
    """Overridable renderers; every slot defaults to the theme's own implementation."""

    header_style: ContextRenderer = header.header_style
    admin_header_style: ContextRenderer = header.admin_header_style
    admin_header_image: ContextRenderer = header.admin_header_image
    header_image: ContextRenderer = header.header_image
    continue_reading_link: ContextRenderer = excerpt.continue_reading_link
    posted_on: ContextRenderer = template_tags.posted_on
    content_nav: Callable[..., str] = template_tags.content_nav
    comment: comments.CommentCallback = comments.render_comment

    def override(self, **slots: Any) -> "Renderers":
        """Return a copy with the named slots replaced."""
        known = {item.name for item in fields(self)}
        unknown = sorted(set(slots) - known)
        if unknown:
            raise KeyError(f"Unknown renderer slot(s): {', '.join(unknown)}")
        return replace(self, **slots)


DEFAULT_RENDERERS = Renderers()
