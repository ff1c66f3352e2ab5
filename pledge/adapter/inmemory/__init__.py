"""In-memory adapters for testing."""

from .comment import InMemoryCommentRepository

__all__ = ["InMemoryCommentRepository"]
