"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .notification import Notifier

__all__ = [
    "Service",
    "CommentService",
    "Notifier",
]
