"""Elasticsearch implementation of Post repository."""

from typing import Sequence

from elasticsearch import AsyncElasticsearch

from quill.domain.model import Post
from quill.domain.repository import PostRepository
from quill.domain.value import PostId
from quill.persistence.mappers import doc_to_post
from quill.persistence.repository.comment import translate_store_errors


class ElasticsearchPostRepository(PostRepository):
    """Reads posts from the blog posts index."""

    def __init__(self, client: AsyncElasticsearch, index: str) -> None:
        """Initialize repository.

        Args:
            client: Shared async Elasticsearch client
            index: Posts index name
        """
        self.client = client
        self.index = index

    async def get_items_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Fetch posts by id in one multi-get."""
        if not post_ids:
            return []

        with translate_store_errors("mget"):
            response = await self.client.mget(index=self.index, ids=list(post_ids))

        return [doc_to_post(doc) for doc in response.body["docs"] if doc.get("found")]
