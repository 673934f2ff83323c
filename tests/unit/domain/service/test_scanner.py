"""Unit tests for CorpusScanner."""

import pytest

from quill.adapter.error import ScrollExpiredError
from quill.config import CommentSettings
from quill.domain.service import CorpusScanner
from quill.domain.value import CommentQuery, SortOrder
from quill.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment


async def seed(repository: InMemoryCommentRepository, count: int) -> list[str]:
    ids = []
    for i in range(count):
        thread = await repository.create_thread(make_comment(f"c{i}"))
        ids.append(thread.id)
    return ids


def build_scanner(repository, page_size: int) -> CorpusScanner:
    return CorpusScanner(repository, CommentSettings(scroll_page_size=page_size))


class TestScan:
    """Tests for exhaustive scans."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [1, 3, 7, 10, 100])
    async def test_every_document_exactly_once(self, page_size):
        """Scans return everything regardless of how it is paged."""
        repository = InMemoryCommentRepository()
        ids = await seed(repository, 10)

        comments = await build_scanner(repository, page_size).scan_all(CommentQuery())

        assert sorted(c.id for c in comments) == sorted(ids)

    @pytest.mark.asyncio
    async def test_more_than_one_page(self):
        repository = InMemoryCommentRepository()
        await seed(repository, 250)

        comments = await build_scanner(repository, 100).scan_all(CommentQuery())

        assert len(comments) == 250
        assert len({c.id for c in comments}) == 250

    @pytest.mark.asyncio
    async def test_empty_store(self):
        repository = InMemoryCommentRepository()

        assert await build_scanner(repository, 10).scan_all(CommentQuery()) == []
        assert repository.open_scroll_count == 0

    @pytest.mark.asyncio
    async def test_sorted_scan_keeps_order_across_pages(self):
        repository = InMemoryCommentRepository()
        ids = await seed(repository, 9)

        comments = await build_scanner(repository, 2).scan_all(
            CommentQuery(sort=SortOrder.ASC)
        )

        assert [c.id for c in comments] == ids

    @pytest.mark.asyncio
    async def test_cursor_released_after_scan(self):
        repository = InMemoryCommentRepository()
        await seed(repository, 5)

        await build_scanner(repository, 2).scan_all(CommentQuery())

        assert repository.open_scroll_count == 0

    @pytest.mark.asyncio
    async def test_cursor_released_when_caller_stops_early(self):
        repository = InMemoryCommentRepository()
        await seed(repository, 5)
        scan = build_scanner(repository, 2).scan(CommentQuery())

        async for _ in scan:
            break
        await scan.aclose()

        assert repository.open_scroll_count == 0

    @pytest.mark.asyncio
    async def test_expired_cursor_fails_scan(self):
        repository = InMemoryCommentRepository()
        await seed(repository, 5)
        scan = build_scanner(repository, 2).scan(CommentQuery())

        await scan.__anext__()
        await scan.__anext__()
        repository.expire_scrolls()

        with pytest.raises(ScrollExpiredError):
            await scan.__anext__()
