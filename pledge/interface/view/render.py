"""Flattened render model of a comment thread."""

from typing import Optional

from pydantic import BaseModel

from pledge.domain.model.comment import CommentNode
from pledge.domain.tree import visual_depth
from pledge.interface.view.comments import CommentsView


class RenderedComment(BaseModel):
    """One visible row of the comment section."""

    comment_id: str
    author_name: str
    initials: str
    avatar: Optional[str]
    content: str
    depth: int
    indent: int
    pending_approval: bool
    reply_count: int
    show_toggle: bool
    toggle_disabled: bool
    expanded: bool
    can_reply: bool
    can_edit: bool
    can_delete: bool
    editing: bool
    replying: bool


def _row(view: CommentsView, comment: CommentNode, depth: int) -> RenderedComment:
    author = comment.author
    is_author = view.is_author(comment)
    return RenderedComment(
        comment_id=comment.id,
        author_name=author.display_name if author else "",
        initials=author.initials if author else "UN",
        avatar=author.avatar if author else None,
        content=comment.content,
        depth=depth,
        indent=visual_depth(depth, view.settings.max_visual_depth),
        pending_approval=not comment.is_approved,
        reply_count=comment.reply_count,
        show_toggle=comment.reply_count > 0,
        toggle_disabled=view.expansion.is_loading(comment.id),
        expanded=view.expansion.is_expanded(comment.id),
        can_reply=view.can_reply(comment),
        can_edit=is_author,
        can_delete=is_author,
        editing=view.editing == comment.id,
        replying=view.reply_to == comment.id,
    )


def render_thread(view: CommentsView) -> list[RenderedComment]:
    """Rows for every visible comment, in display order.

    Replies appear only under expanded comments. Indentation stops growing
    at the configured maximum depth while ``depth`` keeps the real level.
    """
    rows: list[RenderedComment] = []

    def visit(comments: tuple[CommentNode, ...], depth: int) -> None:
        for comment in comments:
            rows.append(_row(view, comment, depth))
            if view.expansion.is_expanded(comment.id) and comment.replies:
                visit(comment.replies, depth + 1)

    visit(view.top_level, 0)
    return rows


def render_text(view: CommentsView, indent_width: int = 2) -> str:
    """Plain-text rendering, used by the command line viewer."""
    lines = []
    for row in render_thread(view):
        pad = " " * (row.indent * indent_width)
        marker = ""
        if row.show_toggle:
            marker = f" [{'-' if row.expanded else '+'}{row.reply_count}]"
        badge = " (pending approval)" if row.pending_approval else ""
        lines.append(f"{pad}{row.author_name or 'Anonymous'}{badge}{marker}: {row.content}")
    return "\n".join(lines)
