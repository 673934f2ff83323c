"""Exhaustive retrieval over the comment store."""

from collections.abc import AsyncIterator

import logfire

from quill.config import CommentSettings
from quill.domain.model.comment import Comment
from quill.domain.repository import CommentRepository
from quill.domain.value import CommentQuery

from .base import Service


class CorpusScanner(Service):
    """Walks every document matching a query with a scroll cursor.

    Each page renews the cursor for ``scroll_keep_alive``. A caller that
    holds the iterator longer than that between pages loses the cursor and
    gets ScrollExpiredError; scans are not resumable.
    """

    def __init__(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> None:
        """Initialize corpus scanner.

        Args:
            comment_repository: Comment repository
            settings: Page size and cursor lifetime
        """
        self.comment_repository = comment_repository
        self.page_size = settings.scroll_page_size
        self.keep_alive = settings.scroll_keep_alive

    async def scan(self, query: CommentQuery) -> AsyncIterator[Comment]:
        """Yield every root comment matching ``query``.

        Pages are fetched lazily; the scan ends at the first empty page.
        The cursor is released however the iteration ends.
        """
        page = await self.comment_repository.open_scroll(
            query, page_size=self.page_size, keep_alive=self.keep_alive
        )
        cursor = page.cursor
        try:
            while page.hits:
                for hit in page.hits:
                    yield hit
                page = await self.comment_repository.continue_scroll(
                    cursor, keep_alive=self.keep_alive
                )
                cursor = page.cursor or cursor
        finally:
            if cursor:
                await self.comment_repository.clear_scroll(cursor)

    async def scan_all(self, query: CommentQuery) -> list[Comment]:
        """Materialize a full scan."""
        with logfire.span("corpus_scanner.scan_all", page_size=self.page_size):
            comments = [comment async for comment in self.scan(query)]
            logfire.info("Scan finished", count=len(comments))
            return comments
