from __future__ import annotations

from hearth.excerpt import (
    auto_excerpt_more,
    continue_reading_link,
    custom_excerpt_more,
    excerpt_length,
    page_menu_args,
    the_excerpt,
)
from hearth.models import Post, RequestState

LINK = ' <a href="https://example.com/hello/">Continue reading <span class="meta-nav">&rarr;</span></a>'


def _post(**overrides) -> Post:
    data = {"id": 7, "permalink": "https://example.com/hello/", "content": "<p>Hello world</p>"}
    data.update(overrides)
    return Post(**data)


def test_excerpt_length_is_fixed() -> None:
    assert excerpt_length() == 40
    assert excerpt_length(55) == 40
    assert excerpt_length(-3) == 40


def test_continue_reading_link_markup(make_ctx) -> None:
    assert continue_reading_link(make_ctx(post=_post())) == LINK


def test_auto_excerpt_more_replaces_marker(make_ctx) -> None:
    ctx = make_ctx(post=_post())
    assert auto_excerpt_more(" [&hellip;]", ctx) == " &hellip;" + LINK


def test_auto_excerpt_more_leaves_admin_screens_alone(make_ctx) -> None:
    ctx = make_ctx(post=_post(), request=RequestState(is_admin=True))
    assert auto_excerpt_more(" [&hellip;]", ctx) == " [&hellip;]"


def test_custom_excerpt_more_appends_same_link(make_ctx) -> None:
    ctx = make_ctx(post=_post(excerpt="Handwritten."))
    assert custom_excerpt_more("Handwritten.", ctx) == "Handwritten." + LINK


def test_custom_excerpt_more_skips_generated_attachment_and_admin(make_ctx) -> None:
    assert custom_excerpt_more("Auto", make_ctx(post=_post())) == "Auto"
    attachment = make_ctx(post=_post(excerpt="Caption", post_type="attachment"))
    assert custom_excerpt_more("Caption", attachment) == "Caption"
    admin = make_ctx(post=_post(excerpt="Mine"), request=RequestState(is_admin=True))
    assert custom_excerpt_more("Mine", admin) == "Mine"


def test_the_excerpt_trims_generated_text_through_host_filters(make_ctx) -> None:
    words = " ".join(f"w{index}" for index in range(60))
    ctx = make_ctx(post=_post(content=f"<p>{words}</p>"))
    output = the_excerpt(ctx)
    assert output.startswith("w0 w1")
    assert "w39" in output and "w40" not in output
    assert output.endswith(" &hellip;" + LINK)


def test_the_excerpt_keeps_handwritten_text(make_ctx) -> None:
    ctx = make_ctx(post=_post(excerpt="Short & sweet."))
    assert the_excerpt(ctx) == "Short & sweet." + LINK


def test_page_menu_args_defaults_show_home() -> None:
    assert page_menu_args({})["show_home"] is True
    assert page_menu_args({"show_home": False})["show_home"] is False
