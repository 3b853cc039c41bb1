"""Shortcode matching and attribute parsing for post content."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Sequence

DEFAULT_TAGS = ("gallery", "caption", "audio", "video", "playlist", "embed")

_ATTR_RE = re.compile(
    r"""([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)"""
    r"""|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"""
    r"""|([\w-]+)\s*=\s*([^\s'"]+)(?:\s|$)"""
    r"""|"([^"]*)"(?:\s|$)"""
    r"""|'([^']*)'(?:\s|$)"""
    r"""|(\S+)(?:\s|$)"""
)
_NBSP_RE = re.compile("[\u00a0\u200b]+")


@dataclass(frozen=True, slots=True)
class Shortcode:
    """A single shortcode occurrence found in content."""

    tag: str
    raw_attributes: str
    content: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)


@lru_cache(maxsize=16)
def shortcode_regex(tags: Sequence[str] = DEFAULT_TAGS) -> re.Pattern[str]:
    """Compile the pattern matching any of ``tags``, with or without a closing tag.

    Groups: 1 opening escape ``[``, 2 tag, 3 attributes, 4 self-closing ``/``,
    5 enclosed content, 6 closing escape ``]``.
    """
    tagnames = "|".join(re.escape(tag) for tag in tags)
    pattern = (
        r"\[(\[?)"
        rf"({tagnames})"
        r"(?![\w-])"
        r"([^\]/]*(?:/(?!\])[^\]/]*)*?)"
        r"(?:(/)\]|\](?:([^\[]*(?:\[(?!/\2\])[^\[]*)*)\[/\2\])?)"
        r"(\]?)"
    )
    return re.compile(pattern, re.DOTALL)


def shortcode_parse_atts(text: str | None) -> dict[str, str]:
    """Parse a shortcode attribute string into a mapping.

    Named attributes are lower-cased; bare values are stored under their
    position ("0", "1", ...).
    """
    if not text:
        return {}
    normalized = _NBSP_RE.sub(" ", text)
    attributes: dict[str, str] = {}
    position = 0
    for match in _ATTR_RE.finditer(normalized):
        groups = match.groups()
        if groups[0] is not None:
            attributes[groups[0].lower()] = groups[1]
        elif groups[2] is not None:
            attributes[groups[2].lower()] = groups[3]
        elif groups[4] is not None:
            attributes[groups[4].lower()] = groups[5]
        else:
            value = next(group for group in groups[6:] if group is not None)
            attributes[str(position)] = value
            position += 1
    return attributes


def find_shortcodes(content: str | None, tags: Sequence[str] = DEFAULT_TAGS) -> list[Shortcode]:
    """All unescaped shortcodes for ``tags`` in document order."""
    if not content or "[" not in content:
        return []
    found: list[Shortcode] = []
    for match in shortcode_regex(tuple(tags)).finditer(content):
        if match.group(1) == "[" and match.group(6) == "]":
            continue
        raw = match.group(3) or ""
        found.append(
            Shortcode(
                tag=match.group(2),
                raw_attributes=raw,
                content=match.group(5),
                attributes=shortcode_parse_atts(raw),
            )
        )
    return found
