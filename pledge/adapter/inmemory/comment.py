"""In-memory comment repository for testing and offline runs."""

import math
from collections.abc import Callable
from datetime import datetime
from typing import Optional
from uuid import uuid4

from pledge.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from pledge.domain.model.comment import CommentAuthor, CommentNode
from pledge.domain.model.page import CommentPage, Page
from pledge.domain.repository.comment import CommentRepository
from pledge.domain.value import CampaignId, CommentId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository.

    Behaves like the backend: top-level comments are listed newest first,
    replies oldest first, reply counts are derived from stored children,
    and only the author may edit or delete.
    """

    def __init__(
        self,
        user: Optional[CommentAuthor] = None,
        moderate: Optional[Callable[[str], str]] = None,
    ) -> None:
        """Initialize in-memory repository.

        Args:
            user: The signed-in user requests are made as (None for anonymous)
            moderate: Rewrites stored content, like server-side moderation
        """
        self.user = user
        self.moderate = moderate
        self._comments: dict[CommentId, CommentNode] = {}
        self._order: list[CommentId] = []

    def save(self, comment: CommentNode) -> CommentNode:
        """Store a comment as-is (test seeding)."""
        if comment.id not in self._comments:
            self._order.append(comment.id)
        self._comments[comment.id] = comment.model_copy(update={"replies": ()})
        return comment

    def _children(self, parent_id: CommentId) -> list[CommentNode]:
        return [
            self._comments[cid]
            for cid in self._order
            if self._comments[cid].parent_id == parent_id
        ]

    def _present(self, comment: CommentNode) -> CommentNode:
        return comment.model_copy(
            update={"reply_count": len(self._children(comment.id)), "replies": ()}
        )

    def _paginate(
        self, comments: list[CommentNode], page: int, limit: int
    ) -> CommentPage:
        total = len(comments)
        total_pages = math.ceil(total / limit) if total else 0
        start = (page - 1) * limit
        return CommentPage(
            items=tuple(self._present(c) for c in comments[start : start + limit]),
            pagination=Page(
                page=page,
                limit=limit,
                total=total,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_prev=page > 1,
            ),
        )

    def _owned(self, comment_id: CommentId) -> CommentNode:
        comment = self._comments.get(comment_id)
        if comment is None:
            raise NotFoundError("comment", comment_id)
        if self.user is None or comment.author_id != self.user.id:
            raise NotAuthorizedError("comment", comment_id)
        return comment

    async def list_comments(
        self, campaign_id: CampaignId, page: int = 1, limit: int = 10
    ) -> CommentPage:
        """List top-level comments, newest first."""
        top_level = [
            self._comments[cid]
            for cid in reversed(self._order)
            if self._comments[cid].campaign_id == campaign_id
            and self._comments[cid].parent_id is None
        ]
        return self._paginate(top_level, page, limit)

    async def list_replies(
        self, comment_id: CommentId, page: int = 1, limit: int = 50
    ) -> CommentPage:
        """List direct replies, oldest first."""
        if comment_id not in self._comments:
            raise NotFoundError("comment", comment_id)
        return self._paginate(self._children(comment_id), page, limit)

    async def create(
        self,
        campaign_id: CampaignId,
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> CommentNode:
        """Create a comment as the signed-in user."""
        if self.user is None:
            raise NotAuthorizedError("campaign", campaign_id, "Authentication required")
        if not content.strip():
            raise ValidationError("Comment content cannot be empty")
        if parent_id is not None:
            parent = self._comments.get(parent_id)
            if parent is None:
                raise NotFoundError("comment", parent_id)
            if parent.campaign_id != campaign_id:
                raise ValidationError("Parent comment does not belong to this campaign")

        now = datetime.now()
        comment = CommentNode(
            id=CommentId(str(uuid4())),
            campaign_id=campaign_id,
            author_id=self.user.id,
            content=self.moderate(content) if self.moderate else content,
            parent_id=parent_id,
            is_approved=True,
            created_at=now,
            updated_at=now,
            reply_count=0,
            author=self.user,
        )
        self.save(comment)
        return self._present(comment)

    async def update(self, comment_id: CommentId, content: str) -> CommentNode:
        """Update a comment owned by the signed-in user."""
        comment = self._owned(comment_id)
        if not content.strip():
            raise ValidationError("Comment content cannot be empty")
        updated = comment.model_copy(
            update={
                "content": self.moderate(content) if self.moderate else content,
                "updated_at": datetime.now(),
            }
        )
        self._comments[comment_id] = updated
        return self._present(updated)

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment owned by the signed-in user, with its replies."""
        self._owned(comment_id)
        doomed = {comment_id}
        frontier = [comment_id]
        while frontier:
            children = [c.id for c in self._children(frontier.pop())]
            doomed.update(children)
            frontier.extend(children)
        self._order = [cid for cid in self._order if cid not in doomed]
        for cid in doomed:
            del self._comments[cid]

    def count(self, campaign_id: CampaignId | None = None) -> int:
        """Number of stored comments, optionally for one campaign."""
        return sum(
            1
            for c in self._comments.values()
            if campaign_id is None or c.campaign_id == campaign_id
        )

