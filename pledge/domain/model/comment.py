"""Comment entity.

Comments form a threaded discussion on a campaign with unlimited depth.
The client only ever holds part of the tree: replies are fetched lazily
when a thread is expanded, so ``replies`` may lag behind ``reply_count``.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from pledge.domain.model.common import DomainModel
from pledge.domain.value import CampaignId, CommentId, UserId


class CommentAuthor(DomainModel):
    """Public profile of the user who wrote a comment."""

    id: UserId
    first_name: str = ""
    last_name: str = ""
    avatar: Optional[str] = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def blank_name(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        """Two-letter avatar fallback, ``UN`` when names are missing."""
        return f"{(self.first_name or 'U')[0]}{(self.last_name or 'N')[0]}"


class CommentNode(DomainModel):
    """Comment entity.

    Represents a comment on a campaign or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - reply_count: Number of direct replies as reported by the server
    - replies: Direct replies loaded so far (empty until expanded)
    """

    id: CommentId
    campaign_id: CampaignId
    author_id: UserId = Field(alias="userId")
    content: str
    parent_id: Optional[CommentId] = None
    is_approved: bool = True
    created_at: datetime
    updated_at: datetime
    reply_count: int = Field(default=0, ge=0)
    author: Optional[CommentAuthor] = Field(default=None, alias="user")
    replies: tuple["CommentNode", ...] = ()

    @field_validator("reply_count", mode="before")
    @classmethod
    def default_reply_count(cls, v: Any) -> Any:
        """The backend omits replyCount for comments without replies."""
        return 0 if v is None else v

    @field_validator("replies", mode="before")
    @classmethod
    def default_replies(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    @property
    def needs_fetch(self) -> bool:
        """True when the server reports replies that are not loaded yet."""
        return not self.replies and self.reply_count > 0
