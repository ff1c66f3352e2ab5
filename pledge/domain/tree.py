"""Comment tree mutation engine.

Pure functions over the list of top-level comments held by a thread view.
Every update returns a new tree and leaves the input untouched, so a view
can swap its whole tree in one assignment. Ids are unique across a tree,
which makes the first depth-first match the only match.

An id that is not in the tree is never an error: the node may have been
deleted by someone else between fetch and mutation, so every update is a
no-op for unknown ids.
"""

from collections.abc import Callable, Iterator, Sequence

from pledge.domain.model.comment import CommentNode
from pledge.domain.value import CommentId

Tree = tuple[CommentNode, ...]

# Replies deeper than this share the indentation of this level
MAX_VISUAL_DEPTH = 6


def find(tree: Sequence[CommentNode], comment_id: CommentId) -> CommentNode | None:
    """Depth-first search for a comment anywhere in the tree."""
    for node in tree:
        if node.id == comment_id:
            return node
        found = find(node.replies, comment_id)
        if found is not None:
            return found
    return None


def _map_node(
    tree: Sequence[CommentNode],
    comment_id: CommentId,
    change: Callable[[CommentNode], CommentNode],
) -> Tree:
    """Rebuild the path to ``comment_id`` with ``change`` applied to it.

    Subtrees that don't contain the target are reused as-is, and the input
    tree is returned unchanged when the id is unknown.
    """
    changed = False
    result = []
    for node in tree:
        if node.id == comment_id:
            node = change(node)
            changed = True
        elif node.replies:
            replies = _map_node(node.replies, comment_id, change)
            if replies is not node.replies:
                node = node.model_copy(update={"replies": replies})
                changed = True
        result.append(node)
    if not changed:
        return tree if isinstance(tree, tuple) else tuple(tree)
    return tuple(result)


def set_replies(
    tree: Sequence[CommentNode],
    parent_id: CommentId,
    replies: Sequence[CommentNode],
) -> Tree:
    """Replace the loaded replies of ``parent_id``."""
    new_replies = tuple(replies)
    return _map_node(
        tree, parent_id, lambda node: node.model_copy(update={"replies": new_replies})
    )


def append_reply(
    tree: Sequence[CommentNode], parent_id: CommentId, reply: CommentNode
) -> Tree:
    """Add ``reply`` after the loaded replies of ``parent_id``."""
    return _map_node(
        tree,
        parent_id,
        lambda node: node.model_copy(update={"replies": (*node.replies, reply)}),
    )


def update_content(
    tree: Sequence[CommentNode], comment_id: CommentId, content: str
) -> Tree:
    """Replace only the text of a comment; its replies are kept."""
    return _map_node(
        tree, comment_id, lambda node: node.model_copy(update={"content": content})
    )


def adjust_reply_count(
    tree: Sequence[CommentNode], comment_id: CommentId, delta: int
) -> Tree:
    """Shift the server-reported reply count of a comment, never below zero."""
    return _map_node(
        tree,
        comment_id,
        lambda node: node.model_copy(
            update={"reply_count": max(0, node.reply_count + delta)}
        ),
    )


def remove(tree: Sequence[CommentNode], comment_id: CommentId) -> Tree:
    """Drop a comment and, with it, every reply below it."""
    result = []
    changed = False
    for node in tree:
        if node.id == comment_id:
            changed = True
            continue
        if node.replies:
            replies = remove(node.replies, comment_id)
            if replies is not node.replies:
                node = node.model_copy(update={"replies": replies})
                changed = True
        result.append(node)
    if not changed:
        return tree if isinstance(tree, tuple) else tuple(tree)
    return tuple(result)


def walk(
    tree: Sequence[CommentNode], depth: int = 0
) -> Iterator[tuple[int, CommentNode]]:
    """Yield ``(depth, node)`` pairs in display order."""
    for node in tree:
        yield depth, node
        yield from walk(node.replies, depth + 1)


def count(tree: Sequence[CommentNode]) -> int:
    """Number of comments loaded in the tree."""
    return sum(1 for _ in walk(tree))


def visual_depth(depth: int, max_depth: int = MAX_VISUAL_DEPTH) -> int:
    """Indentation level for a reply at logical ``depth``."""
    return min(depth, max_depth)
