"""Output escaping helpers mirroring the host's esc_* family."""

from __future__ import annotations

import re
from html import escape
from urllib.parse import urlsplit

ALLOWED_PROTOCOLS = frozenset(
    {"http", "https", "ftp", "ftps", "mailto", "news", "irc", "gopher", "nntp", "feed", "telnet", "sms", "tel"}
)

_UNSAFE_URL_CHARS = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\uffff]", re.IGNORECASE)


def esc_html(text: object) -> str:
    """Escape text for an HTML text node."""
    return escape(str(text), quote=False)


def esc_attr(text: object) -> str:
    """Escape text for an HTML attribute value."""
    return escape(str(text), quote=True)


def esc_url_raw(url: str | None) -> str:
    """Sanitize a URL for storage or redirects; returns '' for unsafe input."""
    if not url:
        return ""
    cleaned = _UNSAFE_URL_CHARS.sub("", url.strip().replace(" ", "%20"))
    if not cleaned or cleaned.startswith(("/", "#", "?")):
        return cleaned
    try:
        scheme = urlsplit(cleaned).scheme.lower()
    except ValueError:
        return ""
    if scheme and scheme not in ALLOWED_PROTOCOLS:
        return ""
    return cleaned


def esc_url(url: str | None) -> str:
    """Sanitize a URL for display inside markup."""
    return escape(esc_url_raw(url), quote=True)
