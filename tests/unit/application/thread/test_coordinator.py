"""Unit tests for ThreadCoordinator."""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest

from pledge.adapter.error import ApiError
from pledge.adapter.inmemory import InMemoryCommentRepository
from pledge.application.thread import (
    DELETE_PROMPT,
    CommentForm,
    FormState,
    RequestTracker,
    ThreadCoordinator,
    ThreadState,
)
from pledge.domain import tree
from pledge.domain.service import CommentService
from pledge.domain.value import CommentId, NotificationVariant
from pledge.interface.view import ToastQueue
from tests.conftest import CAMPAIGN, make_author, make_comment


@pytest.fixture
def repo():
    return InMemoryCommentRepository(user=make_author("u1"))


@pytest.fixture
def toasts():
    return ToastQueue()


@pytest.fixture
def coordinator(repo, toasts):
    return ThreadCoordinator(
        ThreadState(CAMPAIGN),
        CommentService(repo),
        toasts,
        RequestTracker(),
        confirm=lambda prompt: True,
    )


def ids(comments):
    return [c.id for c in comments]


class TestFetchPage:
    """Tests for fetch_page and load_more."""

    @pytest.mark.asyncio
    async def test_first_page_replaces_and_appends_follow(self, repo, coordinator):
        for i in range(25):
            repo.save(make_comment(f"c{i}"))

        await coordinator.fetch_page(1)
        first = ids(coordinator.state.comments)
        await coordinator.load_more()

        assert len(first) == 10
        assert ids(coordinator.state.comments)[:10] == first
        assert len(coordinator.state.comments) == 20
        assert coordinator.state.page == 2
        assert coordinator.state.has_more

    @pytest.mark.asyncio
    async def test_refetch_without_append_replaces(self, repo, coordinator):
        for i in range(12):
            repo.save(make_comment(f"c{i}"))

        await coordinator.fetch_page(1)
        await coordinator.fetch_page(2)

        assert ids(coordinator.state.comments) == ["c1", "c0"]
        assert not coordinator.state.has_more

    @pytest.mark.asyncio
    async def test_load_more_without_next_page_is_noop(self, repo, coordinator):
        repo.save(make_comment("c1"))
        await coordinator.fetch_page(1)

        with patch.object(coordinator.comment_service, "list_comments") as list_comments:
            await coordinator.load_more()

        list_comments.assert_not_called()
        assert coordinator.state.page == 1

    @pytest.mark.asyncio
    async def test_concurrent_fetch_is_ignored(self, repo, coordinator):
        gate = asyncio.Event()
        fetch = coordinator.comment_service.list_comments

        async def slow_fetch(*args, **kwargs):
            await gate.wait()
            return await fetch(*args, **kwargs)

        with patch.object(
            coordinator.comment_service, "list_comments", side_effect=slow_fetch
        ) as list_comments:
            first = asyncio.create_task(coordinator.fetch_page(1))
            await asyncio.sleep(0)
            assert coordinator.state.loading

            await coordinator.fetch_page(1)
            gate.set()
            await first

        assert list_comments.await_count == 1
        assert not coordinator.state.loading

    @pytest.mark.asyncio
    async def test_failure_keeps_comments_and_notifies(self, repo, coordinator, toasts):
        repo.save(make_comment("c1"))
        await coordinator.fetch_page(1)

        with patch.object(
            coordinator.comment_service,
            "list_comments",
            side_effect=ApiError("timeout"),
        ):
            await coordinator.fetch_page(2, append=True)

        assert ids(coordinator.state.comments) == ["c1"]
        assert not coordinator.state.loading
        assert toasts.latest.description == "Failed to load comments"


class TestSubmit:
    """Tests for submit."""

    @pytest.mark.asyncio
    async def test_top_level_comment_goes_first(self, repo, coordinator, toasts):
        repo.save(make_comment("c1"))
        await coordinator.fetch_page(1)
        form = CommentForm()

        created = await coordinator.submit(form, "  hello  ")

        assert ids(coordinator.state.comments) == [created.id, "c1"]
        assert created.content == "hello"
        assert form.draft == ""
        assert toasts.latest.title == "Comment posted"

    @pytest.mark.asyncio
    async def test_reply_is_appended_and_counted(self, repo, coordinator, toasts):
        repo.save(make_comment("c1"))
        await coordinator.fetch_page(1)

        reply = await coordinator.submit(CommentForm(), "nice work", CommentId("c1"))

        parent = tree.find(coordinator.state.comments, CommentId("c1"))
        assert [r.content for r in parent.replies] == ["nice work"]
        assert parent.reply_count == 1
        assert reply.parent_id == "c1"
        assert toasts.latest.title == "Reply posted"

    @pytest.mark.asyncio
    async def test_blank_content_sends_nothing(self, coordinator):
        with patch.object(coordinator.comment_service, "create_comment") as create:
            assert await coordinator.submit(CommentForm(), "   ") is None

        create.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_keeps_draft(self, coordinator, toasts):
        form = CommentForm()

        with patch.object(
            coordinator.comment_service,
            "create_comment",
            side_effect=ApiError("Service unavailable"),
        ):
            result = await coordinator.submit(form, "my long comment")

        assert result is None
        assert form.draft == "my long comment"
        assert form.state is FormState.ERROR
        assert coordinator.state.comments == ()
        assert toasts.latest.description == "Failed to post comment"
        assert toasts.latest.variant is NotificationVariant.DESTRUCTIVE

    @pytest.mark.asyncio
    async def test_form_is_single_flight(self, coordinator):
        form = CommentForm()
        gate = asyncio.Event()
        create = coordinator.comment_service.create_comment

        async def slow_create(*args, **kwargs):
            await gate.wait()
            return await create(*args, **kwargs)

        with patch.object(
            coordinator.comment_service, "create_comment", side_effect=slow_create
        ) as create_comment:
            first = asyncio.create_task(coordinator.submit(form, "hello"))
            await asyncio.sleep(0)

            assert await coordinator.submit(form, "hello") is None
            gate.set()
            await first

        assert create_comment.await_count == 1
        assert len(coordinator.state.comments) == 1


class TestEdit:
    """Tests for edit."""

    @pytest.mark.asyncio
    async def test_tree_shows_server_content(self, repo, coordinator, toasts):
        repo.save(make_comment("c2", content="old text", author_id="u1"))
        repo.moderate = lambda text: f"{text} (moderated)"
        await coordinator.fetch_page(1)

        await coordinator.edit(CommentForm(), CommentId("c2"), "new text")

        node = tree.find(coordinator.state.comments, CommentId("c2"))
        assert node.content == "new text (moderated)"
        assert toasts.latest.title == "Comment updated"

    @pytest.mark.asyncio
    async def test_rejected_edit_keeps_old_text(self, repo, coordinator, toasts):
        repo.save(make_comment("c2", content="old text", author_id="u2"))
        await coordinator.fetch_page(1)
        form = CommentForm()

        result = await coordinator.edit(form, CommentId("c2"), "new text")

        assert result is None
        assert form.draft == "new text"
        assert tree.find(coordinator.state.comments, CommentId("c2")).content == "old text"
        assert toasts.latest.description == "Failed to update comment"


class TestDelete:
    """Tests for delete."""

    @pytest.mark.asyncio
    async def test_removes_comment_with_loaded_replies(self, repo, coordinator):
        repo.save(make_comment("c3", author_id="u1"))
        repo.save(make_comment("r1", parent_id="c3"))
        repo.save(make_comment("r2", parent_id="c3"))
        await coordinator.fetch_page(1)
        replies = await coordinator.comment_service.list_replies(CommentId("c3"))
        coordinator.state.comments = tree.set_replies(
            coordinator.state.comments, CommentId("c3"), replies.items
        )

        assert await coordinator.delete(CommentId("c3"))

        assert coordinator.state.comments == ()

    @pytest.mark.asyncio
    async def test_deleting_reply_decrements_parent(self, repo, coordinator):
        parent = make_comment("c1")
        reply = make_comment("r1", parent_id="c1", author_id="u1")
        repo.save(parent)
        repo.save(reply)
        coordinator.state.comments = (
            parent.model_copy(update={"reply_count": 1, "replies": (reply,)}),
        )

        await coordinator.delete(CommentId("r1"))

        node = tree.find(coordinator.state.comments, CommentId("c1"))
        assert node.replies == ()
        assert node.reply_count == 0

    @pytest.mark.asyncio
    async def test_declined_confirmation_sends_nothing(self, repo, coordinator):
        repo.save(make_comment("c1", author_id="u1"))
        await coordinator.fetch_page(1)
        confirm = Mock(return_value=False)
        coordinator.confirm = confirm

        with patch.object(coordinator.comment_service, "delete_comment") as delete:
            assert not await coordinator.delete(CommentId("c1"))

        confirm.assert_called_once_with(DELETE_PROMPT)
        delete.assert_not_called()
        assert ids(coordinator.state.comments) == ["c1"]

    @pytest.mark.asyncio
    async def test_async_confirmation(self, repo, coordinator):
        repo.save(make_comment("c1", author_id="u1"))
        await coordinator.fetch_page(1)
        coordinator.confirm = AsyncMock(return_value=True)

        assert await coordinator.delete(CommentId("c1"))
        assert coordinator.state.comments == ()

    @pytest.mark.asyncio
    async def test_no_prompt_refuses_delete(self, repo, coordinator):
        repo.save(make_comment("c1", author_id="u1"))
        await coordinator.fetch_page(1)
        coordinator.confirm = None

        assert not await coordinator.delete(CommentId("c1"))
        assert repo.count() == 1

    @pytest.mark.asyncio
    async def test_failed_delete_leaves_node(self, repo, coordinator, toasts):
        repo.save(make_comment("c1", author_id="u2"))
        await coordinator.fetch_page(1)

        assert not await coordinator.delete(CommentId("c1"))

        assert ids(coordinator.state.comments) == ["c1"]
        assert toasts.latest.description == "Failed to delete comment"
