"""Top-level pagination and comment submission for a thread view."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Optional

import logfire

from pledge.adapter.error import AdapterError
from pledge.application.thread.form import CommentForm
from pledge.application.thread.state import ThreadState
from pledge.application.thread.tracker import RequestTracker, ViewClosedError
from pledge.domain import tree
from pledge.domain.error import DomainError
from pledge.domain.model.comment import CommentNode
from pledge.domain.service import CommentService, Notifier
from pledge.domain.value import CommentId

# Asked before a delete is sent; may be sync or async
Confirm = Callable[[str], bool | Awaitable[bool]]

DELETE_PROMPT = "Are you sure you want to delete this comment?"


class ThreadCoordinator:
    """Fetches comment pages and runs create/edit/delete requests.

    The tree only changes after the server confirms a request, and always
    with the server's copy of the comment.
    """

    def __init__(
        self,
        state: ThreadState,
        comment_service: CommentService,
        notifier: Notifier,
        tracker: RequestTracker,
        confirm: Optional[Confirm] = None,
        page_size: int = 10,
    ) -> None:
        """Initialize thread coordinator.

        Args:
            state: Thread state to update
            comment_service: Comment domain service
            notifier: Receives success and failure notifications
            tracker: In-flight request tracker of the owning view
            confirm: Delete confirmation prompt (None refuses every delete)
            page_size: Top-level comments per page
        """
        self.state = state
        self.comment_service = comment_service
        self.notifier = notifier
        self.tracker = tracker
        self.confirm = confirm
        self.page_size = page_size

    async def fetch_page(self, page: int = 1, append: bool = False) -> None:
        """Load one page of top-level comments.

        Args:
            page: 1-based page number
            append: Add after the loaded comments instead of replacing them
        """
        if self.state.loading:
            logfire.debug("Comment page fetch already running", page=page)
            return

        self.state.loading = True
        try:
            result = await self.tracker.run(
                self.comment_service.list_comments(
                    self.state.campaign_id, page=page, limit=self.page_size
                )
            )
            if append:
                self.state.comments = (*self.state.comments, *result.items)
            else:
                self.state.comments = tuple(result.items)
            self.state.has_more = result.pagination.has_next
            self.state.page = page
        except ViewClosedError:
            logfire.debug("Comment page fetch dropped, view closed", page=page)
        except (DomainError, AdapterError) as e:
            logfire.error(
                "Error fetching comments",
                campaign_id=self.state.campaign_id,
                page=page,
                error=str(e),
            )
            self.notifier.error("Failed to load comments")
        finally:
            self.state.loading = False

    async def load_more(self) -> None:
        """Append the next page if the server reported one."""
        if not self.state.has_more:
            return
        await self.fetch_page(self.state.page + 1, append=True)

    async def submit(
        self,
        form: CommentForm,
        content: str,
        parent_id: CommentId | None = None,
    ) -> CommentNode | None:
        """Post a comment, or a reply when ``parent_id`` is given.

        Returns:
            The created comment, or None if nothing was posted
        """
        text = content.strip()
        if not text or form.submitting:
            return None

        form.begin(content)
        try:
            created = await self.tracker.run(
                self.comment_service.create_comment(
                    self.state.campaign_id, text, parent_id=parent_id
                )
            )
        except ViewClosedError:
            form.abandon()
            return None
        except (DomainError, AdapterError) as e:
            logfire.error(
                "Error posting comment",
                campaign_id=self.state.campaign_id,
                parent_id=parent_id,
                error=str(e),
            )
            form.fail(str(e))
            self.notifier.error(
                "Failed to post reply" if parent_id else "Failed to post comment"
            )
            return None

        created = created.model_copy(update={"replies": ()})
        if parent_id is None:
            # Listing is newest first
            self.state.comments = (created, *self.state.comments)
            form.succeed()
            self.notifier.success(
                "Comment posted", "Your comment has been posted successfully."
            )
        else:
            comments = tree.append_reply(self.state.comments, parent_id, created)
            self.state.comments = tree.adjust_reply_count(comments, parent_id, 1)
            form.succeed()
            self.notifier.success(
                "Reply posted", "Your reply has been posted successfully."
            )
        return created

    async def edit(
        self, form: CommentForm, comment_id: CommentId, content: str
    ) -> CommentNode | None:
        """Replace a comment's text with what the server stores for it.

        Returns:
            The updated comment, or None if the edit did not go through
        """
        text = content.strip()
        if not text or form.submitting:
            return None

        form.begin(content)
        try:
            updated = await self.tracker.run(
                self.comment_service.update_content(comment_id, text)
            )
        except ViewClosedError:
            form.abandon()
            return None
        except (DomainError, AdapterError) as e:
            logfire.error("Error updating comment", comment_id=comment_id, error=str(e))
            form.fail(str(e))
            self.notifier.error("Failed to update comment")
            return None

        self.state.comments = tree.update_content(
            self.state.comments, comment_id, updated.content
        )
        form.succeed()
        self.notifier.success(
            "Comment updated", "Your comment has been updated successfully."
        )
        return updated

    async def _confirmed(self) -> bool:
        if self.confirm is None:
            logfire.warn("Delete refused, no confirmation prompt configured")
            return False
        answer = self.confirm(DELETE_PROMPT)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment and its replies after the user confirms.

        Returns:
            True if the comment was deleted
        """
        if not await self._confirmed():
            return False

        node = tree.find(self.state.comments, comment_id)
        try:
            await self.tracker.run(self.comment_service.delete_comment(comment_id))
        except ViewClosedError:
            return False
        except (DomainError, AdapterError) as e:
            logfire.error("Error deleting comment", comment_id=comment_id, error=str(e))
            self.notifier.error("Failed to delete comment")
            return False

        comments = tree.remove(self.state.comments, comment_id)
        if node is not None and node.parent_id is not None:
            comments = tree.adjust_reply_count(comments, node.parent_id, -1)
        self.state.comments = comments
        self.notifier.success(
            "Comment deleted", "Your comment has been deleted successfully."
        )
        return True
