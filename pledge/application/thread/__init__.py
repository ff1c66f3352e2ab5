"""Comment thread use cases: pagination, lazy replies and submissions."""

from .coordinator import DELETE_PROMPT, Confirm, ThreadCoordinator
from .expansion import ReplyExpansion
from .form import CommentForm, FormState
from .state import ThreadState
from .tracker import RequestTracker, ViewClosedError

__all__ = [
    "CommentForm",
    "Confirm",
    "DELETE_PROMPT",
    "FormState",
    "ReplyExpansion",
    "RequestTracker",
    "ThreadCoordinator",
    "ThreadState",
    "ViewClosedError",
]
