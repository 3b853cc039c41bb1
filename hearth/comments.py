"""Comment list rendering: the per-node callback and a depth-first walker."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Iterable, Sequence

from markupsafe import Markup

from .context import RenderContext
from .escaping import esc_attr, esc_html, esc_url_raw
from .models import APPROVED, CommentNode, CommentType, ReplyArgs
from .template_tags import format_date, format_time

logger = logging.getLogger(__name__)

TOP_LEVEL_AVATAR_SIZE = 68
NESTED_AVATAR_SIZE = 39

GENERIC_MODERATION_NOTE = "Your comment is awaiting moderation."
PREVIEW_MODERATION_NOTE = (
    "Your comment is awaiting moderation. This is a preview; "
    "your comment will be visible after it has been approved."
)

CommentCallback = Callable[[CommentNode, ReplyArgs, int, RenderContext], str]


def render_comment(comment: CommentNode, args: ReplyArgs, depth: int, ctx: RenderContext) -> str:
    """Open the list item for one comment; the walker closes it after any replies."""
    if comment.type in (CommentType.PINGBACK, CommentType.TRACKBACK):
        return ctx.render(
            "pingback",
            author_link=comment_author_link(comment),
            edit_link=edit_comment_link(comment, ctx),
        )

    return ctx.render(
        "comment",
        comment=comment,
        comment_class=comment_class(comment, depth),
        avatar=Markup(ctx.host.get_avatar(comment, avatar_size(comment))),
        byline=comment_byline(comment, ctx),
        edit_link=edit_comment_link(comment, ctx),
        moderation_note=moderation_note(comment, ctx),
        comment_text=Markup(comment.content),
        reply_link=reply_link(comment, args, depth, ctx),
    )


def avatar_size(comment: CommentNode) -> int:
    return TOP_LEVEL_AVATAR_SIZE if comment.is_top_level else NESTED_AVATAR_SIZE


def comment_class(comment: CommentNode, depth: int) -> str:
    classes = [comment.type.value, f"depth-{depth}"]
    if comment.is_pending:
        classes.append("unapproved")
    return " ".join(classes)


def moderation_note(comment: CommentNode, ctx: RenderContext) -> str | None:
    """Notice for a pending comment; the author sees the preview wording."""
    if not comment.is_pending:
        return None
    if is_own_comment(comment, ctx):
        return ctx.gettext(PREVIEW_MODERATION_NOTE)
    return ctx.gettext(GENERIC_MODERATION_NOTE)


def is_own_comment(comment: CommentNode, ctx: RenderContext) -> bool:
    stored = ctx.viewer.commenter_email.strip().lower()
    return bool(stored) and stored == comment.author_email.strip().lower()


def comment_author_link(comment: CommentNode) -> Markup:
    author = comment.author or "Anonymous"
    url = esc_url_raw(comment.author_url)
    if not url:
        return Markup(esc_html(author))
    return Markup(f'<a href="{esc_attr(url)}" class="url" rel="ugc external nofollow">{esc_html(author)}</a>')


def comment_byline(comment: CommentNode, ctx: RenderContext) -> Markup:
    """'<Author> on <Date> said:' header with a permalink to the comment."""
    author = Markup('<span class="fn">{}</span>').format(comment_author_link(comment))
    when = ctx.gettext("{date} at {time}").format(date=format_date(comment.date), time=format_time(comment.date))
    stamp = Markup('<a href="{}"><time datetime="{}">{}</time></a>').format(
        esc_url_raw(comment.link),
        comment.date.isoformat() if comment.date else "",
        when,
    )
    template = ctx.gettext('{author} on {date} <span class="says">said:</span>')
    return Markup(template).format(author=author, date=stamp)


def edit_comment_link(comment: CommentNode, ctx: RenderContext) -> Markup:
    if not ctx.viewer.can_edit_comments:
        return Markup("")
    url = esc_url_raw(ctx.host.get_edit_comment_link(comment))
    if not url:
        return Markup("")
    label = esc_html(ctx.gettext("Edit"))
    return Markup(f'<span class="edit-link"><a class="comment-edit-link" href="{esc_attr(url)}">{label}</a></span>')


def reply_link(comment: CommentNode, args: ReplyArgs, depth: int, ctx: RenderContext) -> Markup:
    """Reply anchor, omitted once ``depth`` reaches a positive max depth."""
    if not args.comments_open or depth <= 0 or (args.max_depth > 0 and depth >= args.max_depth):
        return Markup("")
    text = args.reply_text or ctx.gettext("Reply <span>&darr;</span>")
    permalink = esc_url_raw(ctx.post.permalink)
    separator = "&" if "?" in permalink else "?"
    href = f"{permalink}{separator}replytocom={comment.id}#{args.respond_id}"
    label = ctx.gettext("Reply to {author}").format(author=comment.author)
    return Markup(
        f'<a rel="nofollow" class="comment-reply-link" href="{esc_attr(href)}" '
        f'data-commentid="{esc_attr(comment.id)}" data-postid="{ctx.post.id}" '
        f'data-belowelement="comment-{esc_attr(comment.id)}" data-respondelement="{esc_attr(args.respond_id)}" '
        f'aria-label="{esc_attr(label)}">{text}</a>'
    )


def is_visible(comment: CommentNode, ctx: RenderContext) -> bool:
    """Approved comments, plus pending ones shown back to their own author."""
    if comment.approved == APPROVED:
        return True
    return comment.is_pending and is_own_comment(comment, ctx)


def walk_comments(
    comments: Sequence[CommentNode],
    args: ReplyArgs,
    ctx: RenderContext,
    callback: CommentCallback = render_comment,
) -> str:
    """Render a comment list depth-first in document order.

    Replies deeper than ``args.max_depth`` are flattened into the deepest
    allowed level, the way threaded lists display them.
    """
    visible = [comment for comment in comments if is_visible(comment, ctx)]
    known = {comment.id for comment in visible}
    children: dict[str, list[CommentNode]] = defaultdict(list)
    roots: list[CommentNode] = []
    for comment in visible:
        if comment.is_top_level or comment.parent_id not in known:
            roots.append(comment)
        else:
            children[comment.parent_id].append(comment)

    output: list[str] = []

    def _descendants(comment: CommentNode) -> Iterable[CommentNode]:
        for child in children.get(comment.id, []):
            yield child
            yield from _descendants(child)

    def _emit(comment: CommentNode, depth: int) -> None:
        output.append(callback(comment, args, depth, ctx))
        replies = children.get(comment.id, [])
        if replies and (args.max_depth <= 0 or depth < args.max_depth):
            output.append('<ol class="children">')
            for reply in replies:
                _emit(reply, depth + 1)
            output.append("</ol><!-- .children -->")
            output.append("</li><!-- #comment-## -->")
            return
        output.append("</li><!-- #comment-## -->")
        for reply in replies:
            for flattened in (reply, *_descendants(reply)):
                output.append(callback(flattened, args, depth, ctx))
                output.append("</li><!-- #comment-## -->")

    for root in roots:
        _emit(root, 1)
    logger.debug("Rendered %d of %d comments", len(visible), len(comments))
    return "\n".join(output)
