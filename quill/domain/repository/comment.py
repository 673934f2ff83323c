"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quill.domain.model.comment import Comment, Thread
from quill.domain.model.common import DomainModel
from quill.domain.model.stats import StatsAggregation
from quill.domain.value import CommentQuery, HistogramInterval, PostId, ThreadId


class ScrollPage(DomainModel):
    """One page of a cursor-based scan."""

    cursor: Optional[str] = None
    hits: list[Comment] = []


class CommentRepository(ABC):
    """Repository over the comment document store.

    Each document is one thread: a root comment with its replies embedded.
    Writes must be searchable before they return.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def get_thread(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by its document id.

        Args:
            thread_id: Store-assigned id of the root document

        Returns:
            The thread with its current version, None if absent
        """
        pass

    @abstractmethod
    async def create_thread(self, root: Comment) -> Thread:
        """Index a new thread document.

        Args:
            root: Root comment; its ``id`` is ignored

        Returns:
            The stored thread, root ``id`` set to the assigned document id
        """
        pass

    @abstractmethod
    async def replace_thread(self, thread: Thread) -> Thread:
        """Replace a whole thread document.

        The write only succeeds if the stored document still has
        ``thread.version``.

        Args:
            thread: Thread holding the new tree and the version it was read at

        Returns:
            The stored thread with its new version

        Raises:
            ThreadConflictError: If the document changed or was deleted
                since it was read
        """
        pass

    @abstractmethod
    async def delete_thread(self, thread_id: ThreadId) -> bool:
        """Delete a thread document with every reply inside it.

        Returns:
            True if a document was deleted, False if there was none
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every thread on a post.

        Returns:
            Number of deleted thread documents
        """
        pass

    @abstractmethod
    async def count(self, query: CommentQuery) -> int:
        """Count thread documents matching a query."""
        pass

    @abstractmethod
    async def aggregate_stats(
        self,
        query: CommentQuery,
        recent_size: int,
        top_posts: int,
        interval: HistogramInterval,
    ) -> StatsAggregation:
        """Run the stats search.

        Args:
            query: Filter applied to every part of the result
            recent_size: Number of most recent roots to return
            top_posts: Number of post buckets to return, most comments
                first, ties broken by ascending post id
            interval: Date histogram bucket width

        Returns:
            Recent roots and aggregation buckets (empty when the store
            reports no aggregations)
        """
        pass

    @abstractmethod
    async def open_scroll(
        self, query: CommentQuery, page_size: int, keep_alive: str
    ) -> ScrollPage:
        """Start a cursor-based scan and return its first page."""
        pass

    @abstractmethod
    async def continue_scroll(self, cursor: str, keep_alive: str) -> ScrollPage:
        """Fetch the next page of a scan, renewing the cursor.

        Raises:
            ScrollExpiredError: If the cursor expired or is unknown
        """
        pass

    @abstractmethod
    async def clear_scroll(self, cursor: str) -> None:
        """Release a cursor before it expires."""
        pass
