"""Comment domain service."""

import logfire

from pledge.domain.error import ValidationError
from pledge.domain.model.comment import CommentNode
from pledge.domain.model.page import CommentPage
from pledge.domain.repository import CommentRepository
from pledge.domain.value import CampaignId, CommentId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    @staticmethod
    def _clean(content: str) -> str:
        text = content.strip()
        if not text:
            raise ValidationError("Comment content cannot be empty")
        return text

    async def list_comments(
        self, campaign_id: CampaignId, page: int = 1, limit: int = 10
    ) -> CommentPage:
        """Get one page of top-level comments for a campaign.

        Args:
            campaign_id: Campaign ID
            page: 1-based page number
            limit: Page size

        Returns:
            Page of top-level comments in server order (newest first)
        """
        with logfire.span(
            "comment_service.list_comments",
            campaign_id=campaign_id,
            page=page,
            limit=limit,
        ):
            result = await self.comment_repository.list_comments(
                campaign_id, page=page, limit=limit
            )
            logfire.info(
                "Comments retrieved for campaign",
                campaign_id=campaign_id,
                page=page,
                count=len(result.items),
                has_next=result.pagination.has_next,
            )
            return result

    async def list_replies(
        self, comment_id: CommentId, page: int = 1, limit: int = 50
    ) -> CommentPage:
        """Get the direct replies of a comment."""
        with logfire.span(
            "comment_service.list_replies",
            comment_id=comment_id,
            page=page,
            limit=limit,
        ):
            result = await self.comment_repository.list_replies(
                comment_id, page=page, limit=limit
            )
            logfire.info(
                "Replies retrieved",
                comment_id=comment_id,
                count=len(result.items),
            )
            return result

    async def create_comment(
        self,
        campaign_id: CampaignId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> CommentNode:
        """Create a comment on a campaign or reply to another comment.

        Args:
            campaign_id: Campaign ID
            content: Comment text, surrounding whitespace is dropped
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment as returned by the server

        Raises:
            ValidationError: If content is blank
        """
        text = self._clean(content)
        with logfire.span(
            "comment_service.create_comment",
            campaign_id=campaign_id,
            parent_id=parent_id,
            text_length=len(text),
        ):
            created = await self.comment_repository.create(
                campaign_id, text, parent_id=parent_id
            )
            logfire.info(
                "Comment created",
                comment_id=created.id,
                campaign_id=campaign_id,
                parent_id=parent_id,
            )
            return created

    async def update_content(self, comment_id: CommentId, content: str) -> CommentNode:
        """Update the text of a comment.

        Returns:
            Updated comment; its content is what the server stored, which may
            differ from the submitted text

        Raises:
            ValidationError: If content is blank
        """
        text = self._clean(content)
        with logfire.span(
            "comment_service.update_content",
            comment_id=comment_id,
            text_length=len(text),
        ):
            updated = await self.comment_repository.update(comment_id, text)
            if updated.content != text:
                logfire.info(
                    "Comment content rewritten by server",
                    comment_id=comment_id,
                )
            logfire.info("Comment content updated", comment_id=comment_id)
            return updated

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment together with its replies."""
        with logfire.span("comment_service.delete_comment", comment_id=comment_id):
            await self.comment_repository.delete(comment_id)
            logfire.info("Comment deleted", comment_id=comment_id)
