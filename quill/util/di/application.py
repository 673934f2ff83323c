"""Application layer DI providers."""

from dishka import Scope, provide

from quill.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    DeletePostCommentsUseCase,
    GetAllCommentsUseCase,
    GetCommentsUseCase,
    ModerateCommentUseCase,
)
from quill.application.usecase.stats import GetStatsUseCase
from quill.domain.service import CommentService, StatsService
from quill.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_all_comments_use_case(
        self, comment_service: CommentService
    ) -> GetAllCommentsUseCase:
        """Provide get all comments use case."""
        return GetAllCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_comments_use_case(
        self, comment_service: CommentService
    ) -> DeletePostCommentsUseCase:
        """Provide delete post comments use case."""
        return DeletePostCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_comment_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(comment_service=comment_service)

    # Stats use cases
    @provide(scope=Scope.REQUEST)
    def get_get_stats_use_case(self, stats_service: StatsService) -> GetStatsUseCase:
        """Provide get stats use case."""
        return GetStatsUseCase(stats_service=stats_service)
