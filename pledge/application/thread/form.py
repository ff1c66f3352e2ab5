"""Comment input widget state."""

from enum import Enum


class FormState(str, Enum):
    """Lifecycle of a comment input.

    IDLE -> SUBMITTING -> IDLE on success, ERROR on failure. ERROR behaves
    like IDLE except that the last failure message is kept.
    """

    IDLE = "idle"
    SUBMITTING = "submitting"
    ERROR = "error"


class CommentForm:
    """Draft text and submission state of one comment input."""

    def __init__(self, draft: str = "") -> None:
        self.draft = draft
        self.state = FormState.IDLE
        self.error: str | None = None

    @property
    def submitting(self) -> bool:
        return self.state is FormState.SUBMITTING

    @property
    def can_submit(self) -> bool:
        """Whether the submit action is enabled."""
        return not self.submitting and bool(self.draft.strip())

    def begin(self, content: str) -> None:
        self.draft = content
        self.state = FormState.SUBMITTING
        self.error = None

    def succeed(self) -> None:
        self.draft = ""
        self.state = FormState.IDLE

    def fail(self, message: str) -> None:
        # The draft stays so nothing the user typed is lost
        self.state = FormState.ERROR
        self.error = message

    def abandon(self) -> None:
        self.state = FormState.IDLE

    def reset(self, draft: str = "") -> None:
        self.draft = draft
        self.state = FormState.IDLE
        self.error = None
