"""Application layer DI providers."""

from dishka import Scope, provide

from pledge.config import CommentSettings
from pledge.domain.service import CommentService
from pledge.interface.view import CommentsViewFactory
from pledge.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_comments_view_factory(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> CommentsViewFactory:
        """Provide the factory that builds one comments view per campaign page."""
        return CommentsViewFactory(comment_service=comment_service, settings=settings)
