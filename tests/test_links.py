from __future__ import annotations

import pytest

from hearth.hooks import activate
from hearth.host import InMemoryHost
from hearth.links import get_first_url, url_grabber
from hearth.models import Post


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ('<p><a href="http://x/">t</a></p>', "http://x/"),
        ("<A class='out' HREF='https://example.org/a?b=1'>x</A>", "https://example.org/a?b=1"),
        ('<a\n  title="multi"\n  href="http://y/path">y</a>', "http://y/path"),
        ('<a href="http://first/">1</a> <a href="http://second/">2</a>', "http://first/"),
    ],
)
def test_url_grabber_finds_first_anchor(content, expected) -> None:
    assert url_grabber(content) == expected


@pytest.mark.parametrize("content", ["", None, "<p>plain text</p>", '<a href="unterminated', "<a>no href</a>"])
def test_url_grabber_returns_none_when_nothing_matches(content) -> None:
    assert url_grabber(content) is None


def test_url_grabber_rejects_unsafe_protocols() -> None:
    assert url_grabber('<a href="javascript:alert(1)">x</a>') is None


def test_get_first_url_extracts_link(make_ctx) -> None:
    post = Post(id=1, content='<p><a href="http://x/">t</a></p>', permalink="https://example.com/p/")
    assert get_first_url(make_ctx(post=post)) == "http://x/"


def test_get_first_url_falls_back_to_permalink(make_ctx) -> None:
    post = Post(id=1, content="<p>No links here.</p>", permalink="https://example.com/p/")
    assert get_first_url(make_ctx(post=post)) == "https://example.com/p/"


def test_get_first_url_without_host_helper(config, make_ctx) -> None:
    host = InMemoryHost(capabilities=frozenset())
    activate(host, config)
    post = Post(id=1, content="<a href='http://z/'>z</a>", permalink="https://example.com/p/")
    assert get_first_url(make_ctx(host, post=post)) == "http://z/"


def test_get_first_url_filters_permalink(config, make_ctx) -> None:
    host = InMemoryHost()
    host.add_filter("the_permalink", lambda url: url + "#top")
    activate(host, config)
    post = Post(id=1, content="", permalink="https://example.com/p/")
    assert get_first_url(make_ctx(host, post=post)) == "https://example.com/p/#top"


@pytest.mark.parametrize("content", ['<a href="http://[oops/">x</a>', '<a href="http://[::1/">x</a>'])
def test_url_grabber_tolerates_broken_hosts(content) -> None:
    assert url_grabber(content) is None


def test_get_first_url_with_broken_host_uses_permalink(make_ctx) -> None:
    post = Post(id=1, content='<p><a href="http://[oops/">x</a></p>', permalink="https://example.com/p/")
    assert get_first_url(make_ctx(post=post)) == "https://example.com/p/"


def test_in_memory_host_helper_matches_grabber() -> None:
    host = InMemoryHost()
    assert host.get_url_in_content('<a href="http://x/">t</a>') == "http://x/"
    assert host.get_url_in_content('<a href="http://[oops/">x</a>') is None
