"""Elasticsearch implementation of Comment repository."""

from contextlib import contextmanager
from typing import Iterator, Optional

import logfire
from elasticsearch import (
    ApiError,
    AsyncElasticsearch,
    ConflictError,
    NotFoundError,
    TransportError,
)

from quill.adapter.error import (
    ScrollExpiredError,
    StoreRequestError,
    StoreUnavailableError,
)
from quill.domain.error import ThreadConflictError
from quill.domain.model import Comment, StatsAggregation, Thread, ThreadVersion
from quill.domain.repository import CommentRepository, ScrollPage
from quill.domain.value import CommentQuery, HistogramInterval, PostId, ThreadId
from quill.persistence.mappers import (
    buckets_to_date_buckets,
    buckets_to_post_buckets,
    hit_to_comment,
    query_to_es,
    response_to_thread,
    sort_to_es,
    stats_aggs_to_es,
)

# Writes block until the change is visible to search
REFRESH = "wait_for"

# Handled by the caller where they are expected, an outage otherwise
PASSTHROUGH_STATUSES = (404, 409)


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """Surface store failures as adapter errors.

    Client errors other than not-found and version conflicts become
    StoreRequestError; transport failures and everything else become
    StoreUnavailableError.
    """
    try:
        yield
    except ApiError as e:
        if 400 <= e.status_code < 500 and e.status_code not in PASSTHROUGH_STATUSES:
            logfire.error(
                "Document store rejected request",
                operation=operation,
                status_code=e.status_code,
                error=str(e),
            )
            raise StoreRequestError(f"{operation} rejected: {e}", e.status_code) from e
        logfire.error(
            "Document store call failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise StoreUnavailableError(f"{operation} failed: {e}") from e
    except TransportError as e:
        logfire.error(
            "Document store call failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise StoreUnavailableError(f"{operation} failed: {e}") from e


class ElasticsearchCommentRepository(CommentRepository):
    """Elasticsearch implementation of CommentRepository."""

    def __init__(self, client: AsyncElasticsearch, index: str) -> None:
        """Initialize repository.

        Args:
            client: Shared async Elasticsearch client
            index: Comments index name
        """
        self.client = client
        self.index = index

    async def get_thread(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by its document id."""
        with translate_store_errors("get"):
            try:
                response = await self.client.get(index=self.index, id=thread_id)
            except NotFoundError:
                return None
        return response_to_thread(response.body)

    async def create_thread(self, root: Comment) -> Thread:
        """Index a new thread document with a store-assigned id."""
        with translate_store_errors("index"):
            response = await self.client.index(
                index=self.index,
                document=root.to_document(),
                refresh=REFRESH,
            )
        thread_id = ThreadId(response["_id"])
        return Thread(
            id=thread_id,
            version=ThreadVersion(
                seq_no=response["_seq_no"], primary_term=response["_primary_term"]
            ),
            root=root.model_copy(update={"id": thread_id}),
        )

    async def replace_thread(self, thread: Thread) -> Thread:
        """Replace a thread document if it is still at ``thread.version``.

        A document deleted since it was read also fails the version check.
        """
        with translate_store_errors("index"):
            try:
                response = await self.client.index(
                    index=self.index,
                    id=thread.id,
                    document=thread.root.to_document(),
                    if_seq_no=thread.version.seq_no,
                    if_primary_term=thread.version.primary_term,
                    refresh=REFRESH,
                )
            except ConflictError:
                raise ThreadConflictError(thread.id)
        return Thread(
            id=thread.id,
            version=ThreadVersion(
                seq_no=response["_seq_no"], primary_term=response["_primary_term"]
            ),
            root=thread.root,
        )

    async def delete_thread(self, thread_id: ThreadId) -> bool:
        """Delete a thread document."""
        with translate_store_errors("delete"):
            try:
                await self.client.delete(index=self.index, id=thread_id, refresh=REFRESH)
            except NotFoundError:
                return False
        return True

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every thread on a post."""
        with translate_store_errors("delete_by_query"):
            response = await self.client.delete_by_query(
                index=self.index,
                query={"bool": {"filter": [{"term": {"post_id": post_id}}]}},
                # delete_by_query has no wait_for mode
                refresh=True,
                ignore_unavailable=True,
                conflicts="proceed",
            )
        return response.body.get("deleted", 0)

    async def count(self, query: CommentQuery) -> int:
        """Count thread documents matching a query."""
        with translate_store_errors("count"):
            response = await self.client.count(
                index=self.index,
                query=query_to_es(query),
                ignore_unavailable=True,
            )
        return response["count"]

    async def aggregate_stats(
        self,
        query: CommentQuery,
        recent_size: int,
        top_posts: int,
        interval: HistogramInterval,
    ) -> StatsAggregation:
        """Recent roots plus post and date buckets in one search."""
        with translate_store_errors("search"):
            response = await self.client.search(
                index=self.index,
                query=query_to_es(query),
                sort=sort_to_es(query),
                size=recent_size,
                aggs=stats_aggs_to_es(top_posts, interval),
                ignore_unavailable=True,
            )
        body = response.body
        aggregations = body.get("aggregations") or {}
        return StatsAggregation(
            recent=[hit_to_comment(hit) for hit in body["hits"]["hits"]],
            post_buckets=buckets_to_post_buckets(aggregations),
            date_buckets=buckets_to_date_buckets(aggregations),
        )

    async def open_scroll(
        self, query: CommentQuery, page_size: int, keep_alive: str
    ) -> ScrollPage:
        """Start a scroll search."""
        with translate_store_errors("search"):
            response = await self.client.search(
                index=self.index,
                query=query_to_es(query),
                sort=sort_to_es(query),
                size=page_size,
                scroll=keep_alive,
                ignore_unavailable=True,
            )
        return self._to_page(response.body)

    async def continue_scroll(self, cursor: str, keep_alive: str) -> ScrollPage:
        """Fetch the next scroll page."""
        with translate_store_errors("scroll"):
            try:
                response = await self.client.scroll(scroll_id=cursor, scroll=keep_alive)
            except NotFoundError as e:
                logfire.warn("Scroll cursor expired", error=str(e))
                raise ScrollExpiredError(
                    "Scroll cursor expired before the scan finished"
                ) from e
        return self._to_page(response.body)

    async def clear_scroll(self, cursor: str) -> None:
        """Release a scroll cursor; an already expired cursor is released too."""
        with translate_store_errors("clear_scroll"):
            try:
                await self.client.clear_scroll(scroll_id=cursor)
            except NotFoundError:
                logfire.debug("Scroll cursor already released")

    @staticmethod
    def _to_page(body: dict) -> ScrollPage:
        return ScrollPage(
            cursor=body.get("_scroll_id"),
            hits=[hit_to_comment(hit) for hit in body["hits"]["hits"]],
        )
