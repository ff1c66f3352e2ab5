"""Presentation state for campaign comment threads."""

from .comments import CommentsView, CommentsViewFactory
from .render import RenderedComment, render_text, render_thread
from .toast import ToastQueue

__all__ = [
    "CommentsView",
    "CommentsViewFactory",
    "RenderedComment",
    "ToastQueue",
    "render_text",
    "render_thread",
]
