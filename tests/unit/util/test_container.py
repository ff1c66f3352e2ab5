"""Unit tests for dependency injection wiring."""

import pytest

from pledge.adapter.api import HttpCommentRepository
from pledge.adapter.inmemory import InMemoryCommentRepository
from pledge.adapter.storage import RecentSearchStore
from pledge.config import CommentSettings, Settings
from pledge.domain.repository import CommentRepository
from pledge.interface.view import CommentsViewFactory
from pledge.util.di import ApiProvider, ProdApiProvider, get_provider
from tests.di import MockApiProvider, build_test_container
from tests.harness import create_env_fixture

unit_env = create_env_fixture()
api_env = create_env_fixture(unmock={"api"})


class TestGetProvider:
    """Tests for get_provider."""

    def test_selects_by_mock_flag(self):
        assert get_provider(ApiProvider, use_mock=False) is ProdApiProvider
        assert get_provider(ApiProvider, use_mock=True) is MockApiProvider

    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"database"})


class TestContainer:
    """Tests for the assembled test container."""

    @pytest.mark.asyncio
    async def test_mocked_infrastructure(self, unit_env):
        repo = await unit_env.get(CommentRepository)
        store = await unit_env.get(RecentSearchStore)

        assert isinstance(repo, InMemoryCommentRepository)
        assert store.path is None

    @pytest.mark.asyncio
    async def test_view_factory_uses_comment_settings(self, unit_env):
        factory = await unit_env.get(CommentsViewFactory)
        settings = await unit_env.get(Settings)

        assert await unit_env.get(CommentSettings) == settings.comments
        assert factory.settings.page_size == settings.comments.page_size

    @pytest.mark.asyncio
    async def test_unmocked_api_uses_http_repository(self, api_env):
        repo = await api_env.get(CommentRepository)

        assert isinstance(repo, HttpCommentRepository)
        assert str(repo.client.base_url).startswith("http")
