from __future__ import annotations

from hearth.gallery import ATTACHMENT_LIMIT, get_gallery_images, split_ids
from hearth.hooks import activate
from hearth.host import CAP_URL_IN_CONTENT, Attachment, InMemoryHost
from hearth.models import Post
from hearth.shortcodes import find_shortcodes, shortcode_parse_atts


def _host_without_parser(config, **kwargs) -> InMemoryHost:
    host = InMemoryHost(capabilities=frozenset({CAP_URL_IN_CONTENT}), **kwargs)
    activate(host, config)
    return host


def test_shortcode_ids_are_returned_in_order(config, make_ctx) -> None:
    host = _host_without_parser(config)
    post = Post(id=4, content='<p>Intro</p>[gallery ids="3,5,9"]<p>Outro</p>')
    assert get_gallery_images(make_ctx(host, post=post)) == ["3", "5", "9"]


def test_host_gallery_parser_takes_precedence(config, make_ctx) -> None:
    host = InMemoryHost(galleries={4: [{"ids": "12,11"}, {"ids": "1"}]})
    activate(host, config)
    post = Post(id=4, content='[gallery ids="3,5,9"]')
    assert get_gallery_images(make_ctx(host, post=post)) == ["12", "11"]


def test_shortcode_used_when_host_parser_finds_nothing(make_ctx) -> None:
    post = Post(id=4, content="[gallery ids='8, 2']")
    assert get_gallery_images(make_ctx(post=post)) == ["8", "2"]


def test_falls_back_to_attachments_by_menu_order(config, make_ctx) -> None:
    host = _host_without_parser(
        config,
        attachments=[
            Attachment(id=31, parent=4, menu_order=2),
            Attachment(id=30, parent=4, menu_order=1),
            Attachment(id=40, parent=5, menu_order=0),
            Attachment(id=32, parent=4, mime_type="application/pdf", menu_order=0),
        ],
    )
    post = Post(id=4, content="[gallery columns=2]")
    assert get_gallery_images(make_ctx(host, post=post)) == ["30", "31"]


def test_attachment_query_is_capped(config, make_ctx) -> None:
    host = _host_without_parser(
        config,
        attachments=[Attachment(id=index, parent=9, menu_order=index) for index in range(ATTACHMENT_LIMIT + 5)],
    )
    images = get_gallery_images(make_ctx(host, post=Post(id=9)))
    assert len(images) == ATTACHMENT_LIMIT
    assert images[0] == "0"


def test_no_images_is_an_empty_list(config, make_ctx) -> None:
    host = _host_without_parser(config)
    assert get_gallery_images(make_ctx(host, post=Post(id=1, content="<p>Words only.</p>"))) == []


def test_shortcode_parse_atts_handles_every_quoting_style() -> None:
    atts = shortcode_parse_atts("""ids="1,2" Columns='3' size=large link""")
    assert atts == {"ids": "1,2", "columns": "3", "size": "large", "0": "link"}


def test_escaped_shortcodes_are_ignored() -> None:
    assert find_shortcodes('[[gallery ids="1"]]', ("gallery",)) == []
    found = find_shortcodes('[gallery ids="1"][/gallery] [gallery ids="2"/]', ("gallery",))
    assert [item.attributes["ids"] for item in found] == ["1", "2"]


def test_galleryfoo_is_not_a_gallery() -> None:
    assert find_shortcodes('[gallery-extra ids="1"]', ("gallery",)) == []


def test_split_ids_drops_blanks() -> None:
    assert split_ids("1, ,2,") == ["1", "2"]
    assert split_ids([3, 4]) == ["3", "4"]
