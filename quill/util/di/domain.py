"""Domain layer DI providers."""

from dishka import Scope, provide

from quill.config import CommentSettings
from quill.domain.repository import CommentRepository, PostRepository
from quill.domain.service import CommentService, CorpusScanner, StatsService
from quill.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_corpus_scanner(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> CorpusScanner:
        """Provide corpus scanner."""
        return CorpusScanner(comment_repository=comment_repository, settings=settings)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        scanner: CorpusScanner,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            scanner=scanner,
            settings=settings,
        )

    @provide
    def get_stats_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        settings: CommentSettings,
    ) -> StatsService:
        """Provide stats domain service."""
        return StatsService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            settings=settings,
        )
