"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pledge.domain.model.comment import CommentNode
from pledge.domain.model.page import CommentPage
from pledge.domain.value import CampaignId, CommentId


class CommentRepository(ABC):
    """Repository for campaign comments.

    The source of truth is the remote comments API; implementations live
    in the adapter layer. Every method returns the server's canonical
    records, never the client's draft.
    """

    @abstractmethod
    async def list_comments(
        self, campaign_id: CampaignId, page: int = 1, limit: int = 10
    ) -> CommentPage:
        """List top-level comments of a campaign, newest first.

        Args:
            campaign_id: The campaign ID
            page: 1-based page number
            limit: Page size

        Returns:
            One page of top-level comments with pagination metadata
        """
        pass

    @abstractmethod
    async def list_replies(
        self, comment_id: CommentId, page: int = 1, limit: int = 50
    ) -> CommentPage:
        """List direct replies to a comment.

        Args:
            comment_id: The parent comment ID
            page: 1-based page number
            limit: Page size

        Returns:
            One page of replies with pagination metadata
        """
        pass

    @abstractmethod
    async def create(
        self,
        campaign_id: CampaignId,
        content: str,
        parent_id: Optional[CommentId] = None,
    ) -> CommentNode:
        """Create a comment or a reply.

        Args:
            campaign_id: The campaign commented on
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            The created comment as stored by the server
        """
        pass

    @abstractmethod
    async def update(self, comment_id: CommentId, content: str) -> CommentNode:
        """Replace the text of a comment. Only its author may succeed.

        Returns:
            The updated comment as stored by the server
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and its replies. Only its author may succeed."""
        pass
