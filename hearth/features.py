"""Declare the theme's presentation features to the host."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .config import ThemeConfig
from .host import CAP_CUSTOM_HEADER, Host
from .models import CustomHeaderSupport, DefaultHeader, PaletteColor

logger = logging.getLogger(__name__)

TEXTDOMAIN_NATIVE_VERSION = (4, 6)

POST_FORMATS = ("aside", "link", "gallery", "status", "quote", "image")

PALETTE: tuple[PaletteColor, ...] = (
    PaletteColor(name="Blue", slug="blue", color="#1982d1"),
    PaletteColor(name="Black", slug="black", color="#000"),
    PaletteColor(name="Dark Gray", slug="dark-gray", color="#373737"),
    PaletteColor(name="Medium Gray", slug="medium-gray", color="#666"),
    PaletteColor(name="Light Gray", slug="light-gray", color="#e2e2e2"),
    PaletteColor(name="White", slug="white", color="#fff"),
)

DEFAULT_HEADER_NAMES: dict[str, str] = {
    "wheel": "Wheel",
    "shore": "Shore",
    "trolley": "Trolley",
    "pine-cone": "Pine Cone",
    "chessboard": "Chessboard",
    "lanterns": "Lanterns",
    "willow": "Willow",
    "hanoi": "Hanoi Plant",
}

SMALL_FEATURE_SIZE = (500, 300)


@dataclass(frozen=True, slots=True)
class HeaderCallbacks:
    """Callbacks the host invokes to style and preview the custom header."""

    wp_head: Callable[..., str] | None = None
    admin_head: Callable[..., str] | None = None
    admin_preview: Callable[..., str] | None = None


def setup_theme(
    host: Host,
    config: ThemeConfig,
    callbacks: HeaderCallbacks | None = None,
) -> CustomHeaderSupport:
    """Register every supported feature; returns the custom header arguments used."""
    gettext = _translator(host, config)
    header_callbacks = callbacks or HeaderCallbacks()
    host.define("CONTENT_WIDTH", config.content_width)

    if _version_tuple(host.version) < TEXTDOMAIN_NATIVE_VERSION:
        host.load_theme_textdomain(config.text_domain, str(config.languages_dir))

    host.add_editor_style()
    host.add_theme_support("editor-styles")
    host.add_theme_support("wp-block-styles")
    host.add_theme_support("responsive-embeds")
    host.add_theme_support(
        "editor-color-palette",
        [swatch.model_copy(update={"name": gettext(swatch.name)}) for swatch in PALETTE],
    )
    host.add_theme_support("automatic-feed-links")
    host.register_nav_menu("primary", gettext("Primary Menu"))
    host.add_theme_support("post-formats", list(POST_FORMATS))

    options = host.get_theme_options()
    host.add_theme_support("custom-background", {"default-color": options.default_background_color})
    host.add_theme_support("post-thumbnails")

    support = CustomHeaderSupport(
        default_text_color=config.header.default_text_color,
        width=int(host.apply_filters("header_image_width", config.header.width)),
        height=int(host.apply_filters("header_image_height", config.header.height)),
        flex_height=config.header.flex_height,
        random_default=config.header.random_default,
        wp_head_callback=header_callbacks.wp_head,
        admin_head_callback=header_callbacks.admin_head,
        admin_preview_callback=header_callbacks.admin_preview,
    )
    host.add_theme_support("custom-header", support)

    if not host.supports(CAP_CUSTOM_HEADER):
        logger.debug("Host lacks %s; defining legacy header constants", CAP_CUSTOM_HEADER)
        host.define("HEADER_TEXTCOLOR", support.default_text_color)
        host.define("HEADER_IMAGE", "")
        host.define("HEADER_IMAGE_WIDTH", support.width)
        host.define("HEADER_IMAGE_HEIGHT", support.height)
        host.add_custom_image_header(
            support.wp_head_callback,
            support.admin_head_callback,
            support.admin_preview_callback,
        )
        host.add_custom_background()

    host.set_post_thumbnail_size(support.width, support.height, True)
    host.add_image_size("large-feature", support.width, support.height, True)
    host.add_image_size("small-feature", *SMALL_FEATURE_SIZE)
    host.register_default_headers(default_headers(gettext))
    host.add_theme_support("customize-selective-refresh-widgets")
    return support


def default_headers(translate: Callable[[str], str] | None = None) -> dict[str, DefaultHeader]:
    """Header images bundled with the theme, keyed by slug."""
    gettext = translate or (lambda text: text)
    return {
        slug: DefaultHeader(
            url=f"%s/images/headers/{slug}.jpg",
            thumbnail_url=f"%s/images/headers/{slug}-thumbnail.jpg",
            description=gettext(description),
        )
        for slug, description in DEFAULT_HEADER_NAMES.items()
    }


def expand_header_url(url: str, template_directory_uri: str) -> str:
    """Substitute the template directory URI into a default header URL."""
    return url.replace("%s", template_directory_uri, 1)


def enqueue_scripts_styles(host: Host, config: ThemeConfig) -> None:
    """Front-end block stylesheet."""
    host.enqueue_style(
        "hearth-block-style",
        f"{config.template_directory_uri}/blocks.css",
        config.assets.block_style,
    )


def enqueue_block_editor_styles(host: Host, config: ThemeConfig) -> None:
    """Block stylesheet for the editor canvas."""
    host.enqueue_style(
        "hearth-block-editor-style",
        f"{config.template_directory_uri}/editor-blocks.css",
        config.assets.block_editor_style,
    )


def _translator(host: Host, config: ThemeConfig) -> Callable[[str], str]:
    def gettext(text: str) -> str:
        return host.translate(text, config.text_domain)

    return gettext


def _version_tuple(version: str) -> tuple[int, ...]:
    parts: list[int] = []
    for piece in version.split(".")[:3]:
        digits = "".join(ch for ch in piece if ch.isdigit())
        if not digits:
            break
        parts.append(int(digits))
    return tuple(parts)
