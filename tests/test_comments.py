from __future__ import annotations

from datetime import datetime, timezone

from hearth.comments import (
    GENERIC_MODERATION_NOTE,
    PREVIEW_MODERATION_NOTE,
    avatar_size,
    render_comment,
    walk_comments,
)
from hearth.models import CommentNode, Post, ReplyArgs, Viewer

WHEN = datetime(2024, 3, 4, 21, 5, tzinfo=timezone.utc)
POST = Post(id=11, permalink="https://example.com/hello/")


def _comment(**overrides) -> CommentNode:
    data = {
        "id": "5",
        "author": "Ada",
        "author_email": "ada@example.com",
        "author_url": "https://ada.example.com",
        "date": WHEN,
        "content": "<p>Nice post.</p>",
        "link": "https://example.com/hello/#comment-5",
    }
    data.update(overrides)
    return CommentNode(**data)


def test_pingback_renders_compact_entry(make_ctx) -> None:
    html = render_comment(_comment(type="pingback"), ReplyArgs(), 1, make_ctx(post=POST))
    assert html.startswith('<li class="post pingback">')
    assert "Pingback:" in html
    assert 'href="https://ada.example.com"' in html
    assert "comment-content" not in html
    assert "avatar" not in html


def test_trackback_uses_the_pingback_path(make_ctx) -> None:
    html = render_comment(_comment(type="trackback"), ReplyArgs(), 1, make_ctx(post=POST))
    assert "Pingback:" in html
    assert "<article" not in html


def test_full_comment_markup(make_ctx) -> None:
    html = render_comment(_comment(), ReplyArgs(max_depth=5), 1, make_ctx(post=POST))
    assert 'id="li-comment-5"' in html
    assert 'class="avatar avatar-68 photo"' in html
    assert '<span class="fn"><a href="https://ada.example.com" class="url" rel="ugc external nofollow">Ada</a></span>' in html
    assert '<time datetime="2024-03-04T21:05:00+00:00">March 4, 2024 at 9:05 pm</time>' in html
    assert '<span class="says">said:</span>' in html
    assert '<div class="comment-content"><p>Nice post.</p></div>' in html
    assert "replytocom=5#respond" in html
    assert "Reply <span>&darr;</span>" in html
    assert "comment-awaiting-moderation" not in html
    assert "comment-edit-link" not in html


def test_nested_comment_uses_small_avatar() -> None:
    assert avatar_size(_comment()) == 68
    assert avatar_size(_comment(parent_id="3")) == 39


def test_edit_link_requires_permission(make_ctx) -> None:
    ctx = make_ctx(post=POST, viewer=Viewer(can_edit_comments=True))
    html = render_comment(_comment(), ReplyArgs(), 1, ctx)
    assert '<span class="edit-link"><a class="comment-edit-link" href="/wp-admin/comment.php?action=editcomment&amp;c=5">Edit</a></span>' in html


def test_pending_comment_preview_for_its_author(make_ctx) -> None:
    ctx = make_ctx(post=POST, viewer=Viewer(commenter_email="ADA@example.com"))
    html = render_comment(_comment(approved=False), ReplyArgs(), 1, ctx)
    assert PREVIEW_MODERATION_NOTE in html


def test_pending_comment_generic_note_for_others(make_ctx) -> None:
    ctx = make_ctx(post=POST, viewer=Viewer(commenter_email="bob@example.com"))
    html = render_comment(_comment(approved="0"), ReplyArgs(), 1, ctx)
    assert GENERIC_MODERATION_NOTE in html
    assert "This is a preview" not in html


def test_reply_link_omitted_at_max_depth(make_ctx) -> None:
    ctx = make_ctx(post=POST)
    html = render_comment(_comment(parent_id="1"), ReplyArgs(max_depth=3), 3, ctx)
    assert "comment-reply-link" not in html
    closed = render_comment(_comment(), ReplyArgs(comments_open=False), 1, ctx)
    assert "comment-reply-link" not in closed


def test_walk_comments_nests_replies_depth_first(make_ctx) -> None:
    nodes = [
        _comment(id="1"),
        _comment(id="2", parent_id="1"),
        _comment(id="3"),
        _comment(id="4", parent_id="2"),
    ]
    html = walk_comments(nodes, ReplyArgs(max_depth=5), make_ctx(post=POST))
    order = [html.index(f'id="li-comment-{index}"') for index in ("1", "2", "4", "3")]
    assert order == sorted(order)
    assert html.count('<ol class="children">') == 2
    assert html.count("<li ") == html.count("</li>")
    assert "depth-3" in html


def test_walk_comments_hides_other_viewers_pending_comments(make_ctx) -> None:
    nodes = [
        _comment(id="1"),
        _comment(id="2", approved="0", author_email="eve@example.com"),
        _comment(id="3", approved="0"),
        _comment(id="4", approved="spam"),
    ]
    ctx = make_ctx(post=POST, viewer=Viewer(commenter_email="ada@example.com"))
    html = walk_comments(nodes, ReplyArgs(), ctx)
    assert 'id="li-comment-1"' in html
    assert 'id="li-comment-2"' not in html
    assert 'id="li-comment-3"' in html
    assert 'id="li-comment-4"' not in html


def test_walk_comments_flattens_past_max_depth(make_ctx) -> None:
    nodes = [
        _comment(id="1"),
        _comment(id="2", parent_id="1"),
        _comment(id="3", parent_id="2"),
    ]
    html = walk_comments(nodes, ReplyArgs(max_depth=2), make_ctx(post=POST))
    assert html.count('<ol class="children">') == 1
    assert "depth-3" not in html
    assert html.index('id="li-comment-2"') < html.index('id="li-comment-3"')


def test_unlimited_depth_keeps_nesting_and_reply_links(make_ctx) -> None:
    nodes = [_comment(id="1"), _comment(id="2", parent_id="1")]
    html = walk_comments(nodes, ReplyArgs(max_depth=0), make_ctx(post=POST))
    assert '<ol class="children">' in html
    assert html.count("comment-reply-link") == 2


def test_reply_link_appends_to_existing_query(make_ctx) -> None:
    post = Post(id=11, permalink="https://example.com/?p=11")
    html = render_comment(_comment(), ReplyArgs(), 1, make_ctx(post=post))
    assert 'href="https://example.com/?p=11&amp;replytocom=5#respond"' in html
