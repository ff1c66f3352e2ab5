"""Repository interfaces."""

from pledge.domain.repository.comment import CommentRepository

__all__ = ["CommentRepository"]
