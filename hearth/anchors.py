"""Anchor scanning shared by the theme's link helpers and the in-memory host."""

from __future__ import annotations

import re

from .escaping import esc_url_raw

ANCHOR_HREF_RE = re.compile(r"""<a\s[^>]*?href=['"](.+?)['"]""", re.IGNORECASE | re.DOTALL)


def url_grabber(content: str | None) -> str | None:
    """Return the sanitized href of the first anchor in ``content``, or None."""
    if not content:
        return None
    match = ANCHOR_HREF_RE.search(content)
    if match is None:
        return None
    return esc_url_raw(match.group(1)) or None
