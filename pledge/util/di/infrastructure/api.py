"""Comments API infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
import logfire
from dishka import Scope, provide

from pledge.adapter.api import HttpCommentRepository, build_client
from pledge.config import Settings
from pledge.domain.repository import CommentRepository
from pledge.util.di.base import ProviderBase
from pledge.util.error import ConfigurationError
from pledge.util.observability import instrument_httpx


class ApiProvider(ProviderBase):
    """Comments API component base."""

    __mock_component__ = "api"


class ProdApiProvider(ApiProvider):
    """Production API provider talking to the remote backend."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(self, settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the shared HTTP client, closed with the container.

        Raises:
            ConfigurationError: If no API base URL is configured
        """
        if not settings.api.base_url:
            raise ConfigurationError("API base URL must be configured")

        instrument_httpx()
        client = build_client(
            settings.api.base_url,
            token=settings.api.token,
            timeout=settings.api.timeout,
        )
        logfire.info("Comments API client created", base_url=settings.api.base_url)
        try:
            yield client
        finally:
            await client.aclose()

    @provide(scope=Scope.APP)
    def get_comment_repository(self, client: httpx.AsyncClient) -> CommentRepository:
        """Provide HTTP comment repository."""
        return HttpCommentRepository(client)
