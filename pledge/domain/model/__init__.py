"""Domain model entities for Pledge."""

from pledge.domain.model.comment import CommentAuthor, CommentNode
from pledge.domain.model.page import CommentPage, Page
from pledge.domain.model.viewer import Viewer

__all__ = [
    "CommentAuthor",
    "CommentNode",
    "CommentPage",
    "Page",
    "Viewer",
]
