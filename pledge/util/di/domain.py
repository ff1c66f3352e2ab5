"""Domain layer DI providers."""

from dishka import Scope, provide

from pledge.domain.repository import CommentRepository
from pledge.domain.service import CommentService
from pledge.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to follow the repository they wrap.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)
