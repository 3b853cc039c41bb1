"""Custom header styling, admin preview markup, and the header image tag."""

from __future__ import annotations

import logging

from .context import RenderContext
from .escaping import esc_url_raw
from .host import CAP_CUSTOM_HEADER

logger = logging.getLogger(__name__)

BLANK_TEXT_COLOR = "blank"


def header_style(ctx: RenderContext) -> str:
    """Style block injected into the public ``<head>`` for the header text."""
    return header_style_css(ctx, ctx.host.get_header_textcolor(), default_text_color(ctx))


def header_style_css(ctx: RenderContext, text_color: str, default_color: str) -> str:
    """Render the header text style block for ``text_color``.

    Returns an empty string when the color is the unmodified default, a rule
    hiding the site title and description when it is ``"blank"``, and a color
    rule otherwise.
    """
    if text_color == default_color:
        return ""
    return ctx.render("header_style", text_color=text_color).strip()


def admin_header_style(ctx: RenderContext) -> str:
    """Style block for the header preview on the admin appearance screen."""
    text_color = ctx.host.get_header_textcolor()
    return ctx.render(
        "admin_header_style",
        text_color=text_color,
        custom_color=text_color != default_text_color(ctx),
        max_width=header_dimensions(ctx)[0],
    ).strip()


def admin_header_image(ctx: RenderContext) -> str:
    """Preview block shown on the admin custom header screen."""
    color = ctx.host.get_header_textcolor()
    image = ctx.host.get_header_image()
    style = "display: none;"
    if color and color != BLANK_TEXT_COLOR and color != default_text_color(ctx):
        style = f"color: #{color};"
    return ctx.render(
        "admin_header_image",
        site=ctx.site,
        style=style,
        home_url=esc_url_raw(ctx.site.home_url),
        image=esc_url_raw(image),
    ).strip()


def header_image(ctx: RenderContext) -> str:
    """Front-end ``<img>`` for the current header image, or '' when none is set."""
    src = esc_url_raw(ctx.host.get_header_image())
    if not src:
        return ""
    width, height = header_dimensions(ctx)
    return ctx.render("header_image", src=src, width=width, height=height, alt=ctx.site.name).strip()


def header_dimensions(ctx: RenderContext) -> tuple[int, int]:
    """Header width and height, read from the legacy constants on hosts without custom headers."""
    if ctx.host.supports(CAP_CUSTOM_HEADER):
        custom = ctx.host.get_custom_header()
        return custom.width, custom.height
    logger.debug("Host lacks %s; reading header size from constants", CAP_CUSTOM_HEADER)
    width = ctx.host.constant("HEADER_IMAGE_WIDTH", ctx.config.header.width)
    height = ctx.host.constant("HEADER_IMAGE_HEIGHT", ctx.config.header.height)
    return int(width), int(height)


def default_text_color(ctx: RenderContext) -> str:
    if ctx.host.supports(CAP_CUSTOM_HEADER):
        return ctx.host.get_custom_header().default_text_color
    return str(ctx.host.constant("HEADER_TEXTCOLOR", ctx.config.header.default_text_color))

