"""Remote comments API adapter."""

from .comment import HttpCommentRepository, build_client

__all__ = ["HttpCommentRepository", "build_client"]
