"""The contract between the theme and its host CMS, plus an in-memory host.

The theme never owns content, hooks, or admin state; it reaches all of them
through an object satisfying :class:`Host`. Optional host helpers (the ones a
theme would normally probe for before calling) are reported through
:meth:`Host.supports` so callers can branch on feature detection instead of
version numbers.
"""

from __future__ import annotations

import hashlib
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Protocol, Sequence

from .anchors import url_grabber
from .models import (
    CommentNode,
    CustomHeaderSupport,
    DefaultHeader,
    HeaderConfig,
    SidebarDefinition,
    ThemeOptions,
)

logger = logging.getLogger(__name__)

CAP_CUSTOM_HEADER = "get_custom_header"
CAP_POST_GALLERIES = "get_post_galleries"
CAP_URL_IN_CONTENT = "get_url_in_content"

ALL_CAPABILITIES = frozenset({CAP_CUSTOM_HEADER, CAP_POST_GALLERIES, CAP_URL_IN_CONTENT})

DEFAULT_PRIORITY = 10


class Host(Protocol):
    """Services a host CMS exposes to the theme."""

    version: str

    def supports(self, capability: str) -> bool: ...

    def translate(self, text: str, domain: str) -> str: ...

    # Hook dispatch
    def add_action(self, hook: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None: ...

    def add_filter(self, hook: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None: ...

    def do_action(self, hook: str, *args: Any) -> str: ...

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any: ...

    # Registration
    def add_theme_support(self, feature: str, args: Any = None) -> None: ...

    def add_editor_style(self, stylesheet: str = "editor-style.css") -> None: ...

    def register_nav_menu(self, location: str, description: str) -> None: ...

    def set_post_thumbnail_size(self, width: int, height: int, crop: bool = False) -> None: ...

    def add_image_size(self, name: str, width: int, height: int, crop: bool = False) -> None: ...

    def register_default_headers(self, headers: Mapping[str, DefaultHeader]) -> None: ...

    def register_sidebar(self, sidebar: SidebarDefinition) -> None: ...

    def register_widget(self, name: str) -> None: ...

    def enqueue_style(self, handle: str, src: str, version: str | None = None) -> None: ...

    def enqueue_script(self, handle: str) -> None: ...

    def load_theme_textdomain(self, domain: str, path: str) -> None: ...

    def define(self, name: str, value: Any) -> None: ...

    def constant(self, name: str, default: Any = None) -> Any: ...

    def add_custom_image_header(
        self,
        wp_head_callback: Callable[..., str] | None,
        admin_head_callback: Callable[..., str] | None,
        admin_preview_callback: Callable[..., str] | None,
    ) -> None: ...

    def add_custom_background(self) -> None: ...

    # Read accessors
    def get_theme_options(self) -> ThemeOptions: ...

    def get_theme_support(self, feature: str) -> Any: ...

    def get_header_textcolor(self) -> str: ...

    def get_header_image(self) -> str: ...

    def get_custom_header(self) -> HeaderConfig: ...

    def is_active_sidebar(self, sidebar_id: str) -> bool: ...

    def get_avatar(self, comment: CommentNode, size: int) -> str: ...

    def get_edit_comment_link(self, comment: CommentNode) -> str: ...

    def get_posts(self, query: Mapping[str, Any]) -> list[Any]: ...

    def get_post_galleries(self, post_id: int) -> list[dict[str, Any]]: ...

    def get_url_in_content(self, content: str) -> str | None: ...

    def get_attachment_image_src(self, attachment_id: int, size: Sequence[int]) -> tuple[str, int, int] | None: ...

    def get_post_thumbnail_html(self, post_id: int, size: str) -> str: ...

    def wp_head(self, *args: Any) -> str: ...

    def nav_menu(self, args: Mapping[str, Any]) -> str: ...


@dataclass(slots=True)
class Attachment:
    """Media item stored by the in-memory host."""

    id: int
    parent: int
    mime_type: str = "image/jpeg"
    menu_order: int = 0
    url: str = ""
    width: int = 0
    height: int = 0


@dataclass(slots=True)
class _Callback:
    priority: int
    sequence: int
    function: Callable[..., Any]


@dataclass
class InMemoryHost:
    """Reference host that records registrations and dispatches hooks in process.

    Used by the CLI previews and the test-suite; production deployments bind
    :class:`Host` to the real CMS instead.
    """

    version: str = "6.6"
    capabilities: frozenset[str] = ALL_CAPABILITIES
    theme_options: ThemeOptions = field(default_factory=ThemeOptions)
    header_textcolor: str | None = None
    header_image: str = ""
    active_sidebars: set[str] = field(default_factory=set)
    attachments: list[Attachment] = field(default_factory=list)
    galleries: dict[int, list[dict[str, Any]]] = field(default_factory=dict)
    translations: dict[str, str] = field(default_factory=dict)
    admin_url: str = "/wp-admin/"
    avatar_base: str = "https://secure.gravatar.com/avatar"
    head_html: str = ""
    menu_html: str = ""

    theme_supports: dict[str, Any] = field(default_factory=dict, init=False)
    editor_styles: list[str] = field(default_factory=list, init=False)
    nav_menus: dict[str, str] = field(default_factory=dict, init=False)
    image_sizes: dict[str, tuple[int, int, bool]] = field(default_factory=dict, init=False)
    default_headers: dict[str, DefaultHeader] = field(default_factory=dict, init=False)
    sidebars: dict[str, SidebarDefinition] = field(default_factory=dict, init=False)
    widgets: list[str] = field(default_factory=list, init=False)
    styles: dict[str, tuple[str, str | None]] = field(default_factory=dict, init=False)
    scripts: list[str] = field(default_factory=list, init=False)
    textdomains: dict[str, str] = field(default_factory=dict, init=False)
    constants: dict[str, Any] = field(default_factory=dict, init=False)
    legacy_header_callbacks: tuple[Any, ...] | None = field(default=None, init=False)
    legacy_background: bool = field(default=False, init=False)
    _actions: dict[str, list[_Callback]] = field(default_factory=dict, init=False, repr=False)
    _filters: dict[str, list[_Callback]] = field(default_factory=dict, init=False, repr=False)
    _sequence: Iterator[int] = field(default_factory=itertools.count, init=False, repr=False)

    def supports(self, capability: str) -> bool:
        return capability in self.capabilities

    def translate(self, text: str, domain: str) -> str:
        return self.translations.get(text, text)

    def add_action(self, hook: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._register(self._actions, hook, callback, priority)

    def add_filter(self, hook: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._register(self._filters, hook, callback, priority)

    def has_action(self, hook: str) -> bool:
        return bool(self._actions.get(hook))

    def has_filter(self, hook: str) -> bool:
        return bool(self._filters.get(hook))

    def do_action(self, hook: str, *args: Any) -> str:
        """Run every callback on ``hook`` and concatenate any markup they return."""
        output: list[str] = []
        for callback in self._ordered(self._actions, hook):
            result = callback.function(*args)
            if isinstance(result, str):
                output.append(result)
        return "".join(output)

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        for callback in self._ordered(self._filters, hook):
            value = callback.function(value, *args)
        return value

    def add_theme_support(self, feature: str, args: Any = None) -> None:
        self.theme_supports[feature] = True if args is None else args

    def add_editor_style(self, stylesheet: str = "editor-style.css") -> None:
        self.editor_styles.append(stylesheet)

    def register_nav_menu(self, location: str, description: str) -> None:
        self.nav_menus[location] = description

    def set_post_thumbnail_size(self, width: int, height: int, crop: bool = False) -> None:
        self.image_sizes["post-thumbnail"] = (width, height, crop)

    def add_image_size(self, name: str, width: int, height: int, crop: bool = False) -> None:
        self.image_sizes[name] = (width, height, crop)

    def register_default_headers(self, headers: Mapping[str, DefaultHeader]) -> None:
        self.default_headers.update(headers)

    def register_sidebar(self, sidebar: SidebarDefinition) -> None:
        self.sidebars[sidebar.id] = sidebar

    def register_widget(self, name: str) -> None:
        self.widgets.append(name)

    def enqueue_style(self, handle: str, src: str, version: str | None = None) -> None:
        self.styles[handle] = (src, version)

    def enqueue_script(self, handle: str) -> None:
        if handle not in self.scripts:
            self.scripts.append(handle)

    def load_theme_textdomain(self, domain: str, path: str) -> None:
        self.textdomains[domain] = path

    def define(self, name: str, value: Any) -> None:
        if name in self.constants:
            logger.debug("Constant %s already defined; keeping %r", name, self.constants[name])
            return
        self.constants[name] = value

    def constant(self, name: str, default: Any = None) -> Any:
        return self.constants.get(name, default)

    def add_custom_image_header(
        self,
        wp_head_callback: Callable[..., str] | None,
        admin_head_callback: Callable[..., str] | None,
        admin_preview_callback: Callable[..., str] | None,
    ) -> None:
        self.legacy_header_callbacks = (wp_head_callback, admin_head_callback, admin_preview_callback)

    def add_custom_background(self) -> None:
        self.legacy_background = True

    def get_theme_options(self) -> ThemeOptions:
        return self.theme_options

    def get_theme_support(self, feature: str) -> Any:
        return self.theme_supports.get(feature)

    def get_header_textcolor(self) -> str:
        if self.header_textcolor is not None:
            return self.header_textcolor
        support = self.theme_supports.get("custom-header")
        if isinstance(support, CustomHeaderSupport):
            return support.default_text_color
        return str(self.constants.get("HEADER_TEXTCOLOR", ""))

    def get_header_image(self) -> str:
        return self.header_image

    def get_custom_header(self) -> HeaderConfig:
        support = self.theme_supports.get("custom-header")
        if not isinstance(support, CustomHeaderSupport):
            return HeaderConfig()
        return HeaderConfig(
            default_text_color=support.default_text_color,
            width=support.width,
            height=support.height,
            flex_height=support.flex_height,
            random_default=support.random_default,
        )

    def is_active_sidebar(self, sidebar_id: str) -> bool:
        return sidebar_id in self.active_sidebars

    def get_avatar(self, comment: CommentNode, size: int) -> str:
        digest = hashlib.md5(comment.author_email.strip().lower().encode("utf-8")).hexdigest()
        src = f"{self.avatar_base}/{digest}?s={size}&amp;d=mm&amp;r=g"
        return f'<img alt="" src="{src}" class="avatar avatar-{size} photo" height="{size}" width="{size}" />'

    def get_edit_comment_link(self, comment: CommentNode) -> str:
        return f"{self.admin_url}comment.php?action=editcomment&c={comment.id}"

    def get_posts(self, query: Mapping[str, Any]) -> list[Any]:
        matches = [
            item
            for item in self.attachments
            if query.get("post_type", "attachment") == "attachment"
            and item.parent == query.get("post_parent")
            and item.mime_type.startswith(str(query.get("post_mime_type", "")))
        ]
        if query.get("orderby") == "menu_order":
            matches.sort(key=lambda item: item.menu_order, reverse=query.get("order", "ASC") == "DESC")
        limit = int(query.get("numberposts", 5))
        if limit >= 0:
            matches = matches[:limit]
        if query.get("fields") == "ids":
            return [item.id for item in matches]
        return list(matches)

    def get_post_galleries(self, post_id: int) -> list[dict[str, Any]]:
        return list(self.galleries.get(post_id, []))

    def get_url_in_content(self, content: str) -> str | None:
        return url_grabber(content)

    def get_attachment_image_src(self, attachment_id: int, size: Sequence[int]) -> tuple[str, int, int] | None:
        for item in self.attachments:
            if item.id == attachment_id:
                return item.url, item.width, item.height
        return None

    def get_post_thumbnail_html(self, post_id: int, size: str) -> str:
        for item in self.attachments:
            if item.parent == post_id and item.url:
                return (
                    f'<img width="{item.width}" height="{item.height}" src="{item.url}" '
                    f'class="attachment-{size} size-{size} wp-post-image" alt="" />'
                )
        return ""

    def wp_head(self, *args: Any) -> str:
        """Head markup: static HTML, the custom header callback, then ``wp_head`` actions."""
        parts = [self.head_html]
        callback = self._header_head_callback()
        if callback is not None:
            parts.append(callback(*args))
        parts.append(self.do_action("wp_head", *args))
        return "\n".join(part for part in parts if part)

    def nav_menu(self, args: Mapping[str, Any]) -> str:
        container_class = args.get("container_class", "")
        return f'<div class="{container_class}">{self.menu_html}</div>'

    def _header_head_callback(self) -> Callable[..., str] | None:
        support = self.theme_supports.get("custom-header")
        if isinstance(support, CustomHeaderSupport) and support.wp_head_callback is not None:
            return support.wp_head_callback
        if self.legacy_header_callbacks is not None:
            return self.legacy_header_callbacks[0]
        return None

    def _register(
        self,
        table: dict[str, list[_Callback]],
        hook: str,
        callback: Callable[..., Any],
        priority: int,
    ) -> None:
        table.setdefault(hook, []).append(_Callback(priority, next(self._sequence), callback))

    @staticmethod
    def _ordered(table: dict[str, list[_Callback]], hook: str) -> list[_Callback]:
        return sorted(table.get(hook, []), key=lambda entry: (entry.priority, entry.sequence))
