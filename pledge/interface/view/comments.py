"""Comment thread view for a campaign page.

The view owns the comment tree of one campaign and everything the UI binds
to: loaded comments, open threads, the three comment inputs (new comment,
reply, edit) and the toast queue. UI events call its coroutines; rendering
reads its state through ``pledge.interface.view.render``.
"""

from typing import Optional

import logfire

from pledge.application.thread import (
    CommentForm,
    Confirm,
    ReplyExpansion,
    RequestTracker,
    ThreadCoordinator,
    ThreadState,
)
from pledge.config import CommentSettings
from pledge.domain import tree
from pledge.domain.model.comment import CommentNode
from pledge.domain.model.viewer import Viewer
from pledge.domain.service import CommentService, Notifier
from pledge.domain.value import CampaignId, CommentId
from pledge.interface.view.toast import ToastQueue


class CommentsView:
    """Mountable comment section for a single campaign."""

    def __init__(
        self,
        campaign_id: CampaignId,
        comment_service: CommentService,
        viewer: Optional[Viewer] = None,
        confirm: Optional[Confirm] = None,
        notifier: Optional[Notifier] = None,
        settings: Optional[CommentSettings] = None,
    ) -> None:
        """Initialize comments view.

        Args:
            campaign_id: Campaign whose comments are shown
            comment_service: Comment domain service
            viewer: Signed-in user, None when browsing anonymously
            confirm: Prompt asked before deleting a comment
            notifier: Toast sink (a fresh ToastQueue by default)
            settings: Comment settings (page sizes, indentation cap)
        """
        self.settings = settings or CommentSettings()
        self.viewer = viewer
        self.notifier = notifier or ToastQueue()
        self.state = ThreadState(campaign_id)
        self.tracker = RequestTracker()
        self.expansion = ReplyExpansion(
            self.state,
            comment_service,
            self.notifier,
            self.tracker,
            page_size=self.settings.reply_page_size,
        )
        self.coordinator = ThreadCoordinator(
            self.state,
            comment_service,
            self.notifier,
            self.tracker,
            confirm=confirm,
            page_size=self.settings.page_size,
        )

        self.comment_form = CommentForm()
        self.reply_form = CommentForm()
        self.edit_form = CommentForm()
        self.reply_to: CommentId | None = None
        self.editing: CommentId | None = None

    # State the UI renders

    @property
    def campaign_id(self) -> CampaignId:
        return self.state.campaign_id

    @property
    def comments(self) -> tuple[CommentNode, ...]:
        return self.state.comments

    @property
    def top_level(self) -> tuple[CommentNode, ...]:
        """Comments rendered at the root of the section."""
        return tuple(c for c in self.state.comments if c.parent_id is None)

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def has_more(self) -> bool:
        return self.state.has_more

    @property
    def page(self) -> int:
        return self.state.page

    @property
    def expanded(self) -> frozenset[CommentId]:
        return frozenset(self.expansion.expanded)

    @property
    def loading_replies(self) -> frozenset[CommentId]:
        return frozenset(self.expansion.loading)

    @property
    def is_authenticated(self) -> bool:
        return self.viewer is not None

    @property
    def mounted(self) -> bool:
        return not self.tracker.closed

    def find(self, comment_id: CommentId) -> CommentNode | None:
        return tree.find(self.state.comments, comment_id)

    def is_author(self, comment: CommentNode) -> bool:
        return self.viewer is not None and self.viewer.id == comment.author_id

    def can_reply(self, comment: CommentNode) -> bool:
        """Signed-in users reply to other people's comments."""
        return self.viewer is not None and self.viewer.id != comment.author_id

    # Lifecycle

    async def mount(self) -> None:
        """Load the first page of comments."""
        with logfire.span("comments_view.mount", campaign_id=self.campaign_id):
            await self.fetch_page(1)

    def unmount(self) -> None:
        """Cancel pending requests; their results are discarded."""
        logfire.debug(
            "Comments view unmounted",
            campaign_id=self.campaign_id,
            pending=self.tracker.pending,
        )
        self.tracker.close()

    # Pagination and threads

    async def fetch_page(self, page: int = 1, append: bool = False) -> None:
        await self.coordinator.fetch_page(page, append=append)
        if not append:
            self.expansion.prune()

    async def load_more(self) -> None:
        await self.coordinator.load_more()

    async def toggle_replies(self, comment_id: CommentId) -> None:
        await self.expansion.toggle(comment_id)

    # Submissions

    async def submit(
        self, content: str | None = None, parent_id: CommentId | None = None
    ) -> CommentNode | None:
        """Post a top-level comment, or a reply when ``parent_id`` is given.

        Args:
            content: Text to post; defaults to the matching input's draft
            parent_id: Comment replied to

        Returns:
            The created comment, or None if nothing was posted
        """
        form = self.comment_form if parent_id is None else self.reply_form
        if content is None:
            content = form.draft
        if self.viewer is None:
            logfire.warn("Anonymous comment submission ignored", campaign_id=self.campaign_id)
            return None

        created = await self.coordinator.submit(form, content, parent_id=parent_id)
        if created is not None and parent_id is not None and self.reply_to == parent_id:
            self.reply_to = None
        return created

    def toggle_reply(self, comment_id: CommentId) -> None:
        """Open the reply input under a comment, or close it if open."""
        if self.reply_to == comment_id:
            self.cancel_reply()
        else:
            self.reply_to = comment_id

    def cancel_reply(self) -> None:
        self.reply_to = None
        self.reply_form.reset()

    async def submit_reply(self, content: str | None = None) -> CommentNode | None:
        """Post the open reply input."""
        if self.reply_to is None:
            return None
        return await self.submit(content, parent_id=self.reply_to)

    def start_edit(self, comment_id: CommentId) -> bool:
        """Enter edit mode for one of the viewer's own comments."""
        comment = self.find(comment_id)
        if comment is None or not self.is_author(comment):
            return False
        self.editing = comment_id
        self.edit_form.reset(draft=comment.content)
        return True

    def cancel_edit(self) -> None:
        self.editing = None
        self.edit_form.reset()

    async def edit(
        self, comment_id: CommentId | None = None, content: str | None = None
    ) -> CommentNode | None:
        """Save an edit; defaults to the comment and draft in edit mode.

        Edit mode is left only when the server accepted the change.
        """
        comment_id = comment_id or self.editing
        if comment_id is None:
            return None
        if content is None:
            content = self.edit_form.draft

        updated = await self.coordinator.edit(self.edit_form, comment_id, content)
        if updated is not None and self.editing == comment_id:
            self.editing = None
        return updated

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment with its replies after confirmation.

        Open threads and edit or reply inputs inside the removed subtree are
        closed with it.
        """
        node = self.find(comment_id)
        removed = {comment_id}
        if node is not None:
            removed.update(n.id for _, n in tree.walk((node,)))

        deleted = await self.coordinator.delete(comment_id)
        if deleted:
            for removed_id in removed:
                self.expansion.forget(removed_id)
            if self.editing in removed:
                self.cancel_edit()
            if self.reply_to in removed:
                self.cancel_reply()
        return deleted


class CommentsViewFactory:
    """Builds a view per mounted campaign page."""

    def __init__(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> None:
        self.comment_service = comment_service
        self.settings = settings

    def create(
        self,
        campaign_id: CampaignId,
        viewer: Optional[Viewer] = None,
        confirm: Optional[Confirm] = None,
        notifier: Optional[Notifier] = None,
    ) -> CommentsView:
        return CommentsView(
            campaign_id,
            self.comment_service,
            viewer=viewer,
            confirm=confirm,
            notifier=notifier,
            settings=self.settings,
        )
