"""Lazy loading of comment replies."""

import logfire

from pledge.adapter.error import AdapterError
from pledge.application.thread.state import ThreadState
from pledge.application.thread.tracker import RequestTracker, ViewClosedError
from pledge.domain import tree
from pledge.domain.error import DomainError
from pledge.domain.service import CommentService, Notifier
from pledge.domain.value import CommentId


class ReplyExpansion:
    """Tracks which threads are open and fetches their replies on demand.

    A thread's replies are fetched the first time it is opened, and only
    when the server reports replies that are not loaded yet. At most one
    fetch per comment is in flight.
    """

    def __init__(
        self,
        state: ThreadState,
        comment_service: CommentService,
        notifier: Notifier,
        tracker: RequestTracker,
        page_size: int = 50,
    ) -> None:
        """Initialize reply expansion.

        Args:
            state: Thread state the replies are merged into
            comment_service: Comment domain service
            notifier: Receives failure notifications
            tracker: In-flight request tracker of the owning view
            page_size: Replies fetched per expansion
        """
        self.state = state
        self.comment_service = comment_service
        self.notifier = notifier
        self.tracker = tracker
        self.page_size = page_size
        self.expanded: set[CommentId] = set()
        self.loading: set[CommentId] = set()

    def is_expanded(self, comment_id: CommentId) -> bool:
        return comment_id in self.expanded

    def is_loading(self, comment_id: CommentId) -> bool:
        return comment_id in self.loading

    def forget(self, comment_id: CommentId) -> None:
        self.expanded.discard(comment_id)

    def prune(self) -> None:
        """Close threads whose replies are no longer loaded.

        Called after the tree was replaced: a reloaded comment comes back
        without replies and has to be fetched again on the next expand.
        """
        for comment_id in list(self.expanded):
            node = tree.find(self.state.comments, comment_id)
            if node is None or node.needs_fetch:
                self.expanded.discard(comment_id)

    async def toggle(self, comment_id: CommentId) -> None:
        """Open or close a comment's replies.

        Closing never touches the network. Opening fetches replies only
        when the comment has unloaded replies; a second toggle while that
        fetch runs is ignored. On failure the thread stays closed.
        """
        if comment_id in self.expanded:
            self.expanded.discard(comment_id)
            return

        node = tree.find(self.state.comments, comment_id)
        if node is None:
            logfire.debug("Toggle on unknown comment ignored", comment_id=comment_id)
            return

        if not node.needs_fetch:
            self.expanded.add(comment_id)
            return

        if comment_id in self.loading:
            return

        self.loading.add(comment_id)
        try:
            page = await self.tracker.run(
                self.comment_service.list_replies(
                    comment_id, page=1, limit=self.page_size
                )
            )
            self.state.comments = tree.set_replies(
                self.state.comments, comment_id, page.items
            )
            self.expanded.add(comment_id)
        except ViewClosedError:
            logfire.debug("Reply fetch dropped, view closed", comment_id=comment_id)
        except (DomainError, AdapterError) as e:
            logfire.error(
                "Error fetching replies", comment_id=comment_id, error=str(e)
            )
            self.notifier.error("Failed to load replies")
        finally:
            self.loading.discard(comment_id)
