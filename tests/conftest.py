"""Test configuration and helpers."""

from datetime import datetime, timedelta
from itertools import count

from pledge.domain.model import CommentAuthor, CommentNode, Viewer
from pledge.domain.value import CampaignId, CommentId, UserId

CAMPAIGN = CampaignId("camp-1")

_clock = count()


def make_author(user_id: str = "u1", first: str = "Ada", last: str = "Lovelace") -> CommentAuthor:
    """Build a comment author."""
    return CommentAuthor(id=UserId(user_id), first_name=first, last_name=last)


def make_viewer(user_id: str = "u1", first: str = "Ada", last: str = "Lovelace") -> Viewer:
    """Build the signed-in viewer."""
    return Viewer(id=UserId(user_id), first_name=first, last_name=last)


def make_comment(
    comment_id: str,
    content: str = "",
    parent_id: str | None = None,
    author_id: str = "u2",
    reply_count: int = 0,
    replies: tuple[CommentNode, ...] = (),
    campaign_id: str = CAMPAIGN,
    is_approved: bool = True,
) -> CommentNode:
    """Build a comment with increasing timestamps.

    Helper for tests; every call is one second later than the last so
    insertion order matches creation order.
    """
    created = datetime(2026, 1, 1) + timedelta(seconds=next(_clock))
    return CommentNode(
        id=CommentId(comment_id),
        campaign_id=CampaignId(campaign_id),
        author_id=UserId(author_id),
        content=content or f"comment {comment_id}",
        parent_id=CommentId(parent_id) if parent_id else None,
        is_approved=is_approved,
        created_at=created,
        updated_at=created,
        reply_count=reply_count,
        author=make_author(author_id, first=author_id.upper(), last="Tester"),
        replies=replies,
    )
