"""In-memory comment repository for testing."""

from collections import Counter
from datetime import timezone
from itertools import count
from typing import Optional
from uuid import uuid4

from quill.adapter.error import ScrollExpiredError
from quill.domain.error import ThreadConflictError
from quill.domain.model import (
    Comment,
    PostBucket,
    StatsAggregation,
    Thread,
    ThreadVersion,
)
from quill.domain.repository import CommentRepository, ScrollPage
from quill.domain.value import (
    CommentQuery,
    HistogramInterval,
    PostId,
    SortOrder,
    ThreadId,
)

from .histogram import date_histogram

PRIMARY_TERM = 1


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mirrors the store's observable behavior: sequence-number versioning,
    conflicts on stale writes, snapshot scroll cursors and aggregations.
    """

    def __init__(self) -> None:
        self._threads: dict[ThreadId, Thread] = {}
        self._seq_no = count()
        self._scrolls: dict[str, tuple[list[Comment], int]] = {}

    def _next_version(self) -> ThreadVersion:
        return ThreadVersion(seq_no=next(self._seq_no), primary_term=PRIMARY_TERM)

    async def get_thread(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by id."""
        return self._threads.get(thread_id)

    async def create_thread(self, root: Comment) -> Thread:
        """Store a new thread under a fresh id."""
        thread_id = ThreadId(uuid4().hex[:20])
        thread = Thread(
            id=thread_id,
            version=self._next_version(),
            root=root.model_copy(update={"id": thread_id}),
        )
        self._threads[thread_id] = thread
        return thread

    async def replace_thread(self, thread: Thread) -> Thread:
        """Replace a thread if its version still matches."""
        current = self._threads.get(thread.id)
        if current is None or current.version != thread.version:
            raise ThreadConflictError(thread.id)

        saved = Thread(
            id=thread.id,
            version=self._next_version(),
            root=thread.root.model_copy(update={"id": thread.id}),
        )
        self._threads[thread.id] = saved
        return saved

    async def delete_thread(self, thread_id: ThreadId) -> bool:
        """Delete a thread."""
        return self._threads.pop(thread_id, None) is not None

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every thread on a post."""
        doomed = [tid for tid, t in self._threads.items() if t.root.post_id == post_id]
        for thread_id in doomed:
            del self._threads[thread_id]
        return len(doomed)

    async def count(self, query: CommentQuery) -> int:
        """Count matching threads."""
        return len(self._select(query))

    async def aggregate_stats(
        self,
        query: CommentQuery,
        recent_size: int,
        top_posts: int,
        interval: HistogramInterval,
    ) -> StatsAggregation:
        """Recent roots, top posts and date histogram."""
        roots = self._select(query)

        per_post = Counter(root.post_id for root in roots)
        ranked = sorted(per_post.items(), key=lambda item: (-item[1], item[0]))

        return StatsAggregation(
            recent=roots[:recent_size],
            post_buckets=[
                PostBucket(post_id=post_id, doc_count=doc_count)
                for post_id, doc_count in ranked[:top_posts]
            ],
            date_buckets=date_histogram((r.published_at for r in roots), interval),
        )

    async def open_scroll(
        self, query: CommentQuery, page_size: int, keep_alive: str
    ) -> ScrollPage:
        """Snapshot the matches and hand out the first page."""
        cursor = uuid4().hex
        self._scrolls[cursor] = (self._select(query), page_size)
        return self._next_page(cursor)

    async def continue_scroll(self, cursor: str, keep_alive: str) -> ScrollPage:
        """Hand out the next page of a snapshot."""
        if cursor not in self._scrolls:
            raise ScrollExpiredError(f"Unknown scroll cursor: {cursor}")
        return self._next_page(cursor)

    async def clear_scroll(self, cursor: str) -> None:
        """Forget a snapshot."""
        self._scrolls.pop(cursor, None)

    def expire_scrolls(self) -> None:
        """Drop every open cursor, as if their keep-alive ran out."""
        self._scrolls.clear()

    @property
    def open_scroll_count(self) -> int:
        return len(self._scrolls)

    def _next_page(self, cursor: str) -> ScrollPage:
        remaining, page_size = self._scrolls[cursor]
        page, rest = remaining[:page_size], remaining[page_size:]
        self._scrolls[cursor] = (rest, page_size)
        return ScrollPage(cursor=cursor, hits=page)

    def _select(self, query: CommentQuery) -> list[Comment]:
        roots = [t.root for t in self._threads.values() if self._matches(t.root, query)]
        if query.sort is not None:
            roots.sort(
                key=lambda root: root.published_at,
                reverse=query.sort is SortOrder.DESC,
            )
        return roots

    @staticmethod
    def _matches(root: Comment, query: CommentQuery) -> bool:
        if query.post_ids is not None and root.post_id not in query.post_ids:
            return False
        if query.published_since is not None:
            since = query.published_since
            if since.tzinfo is None:
                since = since.replace(tzinfo=timezone.utc)
            if root.published_at < since:
                return False
        if query.visible_only and not root.is_visible:
            return False
        return True
