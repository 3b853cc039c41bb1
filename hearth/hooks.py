"""Attach the theme's setup routines and filters to the host's hooks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import ThemeConfig
from .context import RenderContext
from .excerpt import auto_excerpt_more, custom_excerpt_more, excerpt_length, page_menu_args
from .features import (
    HeaderCallbacks,
    enqueue_block_editor_styles,
    enqueue_scripts_styles,
    setup_theme,
)
from .host import Host
from .pluggable import DEFAULT_RENDERERS, Renderers
from .sidebars import register_sidebars
from .template_tags import body_classes, skip_link, widget_tag_cloud_args

logger = logging.getLogger(__name__)

SKIP_LINK_PRIORITY = 5


@dataclass(frozen=True, slots=True)
class ThemeRuntime:
    """What :func:`install` wired up, for callers that render outside hooks."""

    host: Host
    config: ThemeConfig
    renderers: Renderers


def install(host: Host, config: ThemeConfig | None = None, renderers: Renderers | None = None) -> ThemeRuntime:
    """Register every theme callback with ``host``.

    Setup and widget registration run when the host fires ``after_setup_theme``
    and ``widgets_init``; nothing is registered eagerly.
    """
    cfg = config or ThemeConfig()
    slots = renderers or DEFAULT_RENDERERS
    callbacks = HeaderCallbacks(
        wp_head=slots.header_style,
        admin_head=slots.admin_header_style,
        admin_preview=slots.admin_header_image,
    )

    def _setup() -> None:
        setup_theme(host, cfg, callbacks)

    def _widgets() -> None:
        register_sidebars(host, lambda text: host.translate(text, cfg.text_domain))

    def _excerpt_more(more: str, ctx: RenderContext) -> str:
        return auto_excerpt_more(more, ctx, slots.continue_reading_link)

    def _custom_excerpt(output: str, ctx: RenderContext) -> str:
        return custom_excerpt_more(output, ctx, slots.continue_reading_link)

    host.add_action("after_setup_theme", _setup)
    host.add_action("widgets_init", _widgets)
    host.add_action("wp_enqueue_scripts", lambda: enqueue_scripts_styles(host, cfg))
    host.add_action("enqueue_block_editor_assets", lambda: enqueue_block_editor_styles(host, cfg))
    host.add_filter("excerpt_length", excerpt_length)
    host.add_filter("excerpt_more", _excerpt_more)
    host.add_filter("get_the_excerpt", _custom_excerpt)
    host.add_filter("wp_page_menu_args", page_menu_args)
    host.add_filter("body_class", body_classes)
    host.add_filter("widget_tag_cloud_args", widget_tag_cloud_args)
    host.add_action("wp_body_open", skip_link, SKIP_LINK_PRIORITY)
    logger.debug("Installed theme hooks for text domain %s", cfg.text_domain)
    return ThemeRuntime(host=host, config=cfg, renderers=slots)


def activate(host: Host, config: ThemeConfig | None = None, renderers: Renderers | None = None) -> ThemeRuntime:
    """Install hooks and fire the startup actions, as the host does on theme activation."""
    runtime = install(host, config, renderers)
    host.do_action("after_setup_theme")
    host.do_action("widgets_init")
    return runtime
