"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from elasticsearch import AsyncElasticsearch

from quill.config import ElasticsearchSettings, Settings
from quill.domain.repository import CommentRepository, PostRepository
from quill.persistence.database import create_client
from quill.persistence.repository import (
    ElasticsearchCommentRepository,
    ElasticsearchPostRepository,
)
from quill.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using Elasticsearch."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_client(self, settings: Settings) -> AsyncIterator[AsyncElasticsearch]:
        """Provide the process-wide Elasticsearch client.

        The client is closed when the container shuts down.
        """
        client = create_client(settings)
        logfire.info("Elasticsearch client created", hosts=settings.elasticsearch.hosts)
        try:
            yield client
        finally:
            await client.close()
            logfire.info("Elasticsearch client closed")

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(
        self, client: AsyncElasticsearch, settings: ElasticsearchSettings
    ) -> CommentRepository:
        """Provide Comment repository."""
        return ElasticsearchCommentRepository(client, index=settings.comments_index)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(
        self, client: AsyncElasticsearch, settings: ElasticsearchSettings
    ) -> PostRepository:
        """Provide Post repository."""
        return ElasticsearchPostRepository(client, index=settings.posts_index)
