"""Unit tests for InMemoryCommentRepository versioning."""

import pytest

from quill.domain.error import ThreadConflictError
from quill.domain.value import CommentQuery
from quill.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment


class TestVersioning:
    """Tests for optimistic concurrency emulation."""

    @pytest.mark.asyncio
    async def test_replace_bumps_version(self):
        repository = InMemoryCommentRepository()
        thread = await repository.create_thread(make_comment())

        saved = await repository.replace_thread(thread)

        assert saved.version.seq_no > thread.version.seq_no

    @pytest.mark.asyncio
    async def test_stale_write_conflicts(self):
        repository = InMemoryCommentRepository()
        thread = await repository.create_thread(make_comment())
        await repository.replace_thread(thread)

        with pytest.raises(ThreadConflictError):
            await repository.replace_thread(thread)

    @pytest.mark.asyncio
    async def test_write_to_deleted_thread_conflicts(self):
        repository = InMemoryCommentRepository()
        thread = await repository.create_thread(make_comment())
        await repository.delete_thread(thread.id)

        with pytest.raises(ThreadConflictError):
            await repository.replace_thread(thread)


class TestSelection:
    """Tests for query matching."""

    @pytest.mark.asyncio
    async def test_visible_only(self):
        repository = InMemoryCommentRepository()
        await repository.create_thread(make_comment("ok"))
        await repository.create_thread(make_comment("spam", spam=True))
        await repository.create_thread(make_comment("held", approved=False))

        assert await repository.count(CommentQuery(visible_only=True)) == 1
        assert await repository.count(CommentQuery()) == 3
