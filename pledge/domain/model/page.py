"""Paginated listings returned by the comments API."""

from pydantic import Field

from pledge.domain.model.comment import CommentNode
from pledge.domain.model.common import DomainModel


class Page(DomainModel):
    """Pagination metadata."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    total: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    has_next: bool = False
    has_prev: bool = False


class CommentPage(DomainModel):
    """One page of comments (top-level comments or replies)."""

    items: tuple[CommentNode, ...] = ()
    pagination: Page = Page()
