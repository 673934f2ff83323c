"""Unit tests for StatsService."""

from datetime import datetime, timedelta, timezone

import pytest

from quill.domain.model import Post
from quill.domain.repository import CommentRepository, PostRepository
from quill.domain.service import CommentService, StatsService
from quill.domain.value import HistogramInterval, RecipientPath, ThreadId
from tests.conftest import make_comment, make_draft
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def day(n: int) -> datetime:
    return datetime(2024, 3, 1, 12, tzinfo=timezone.utc) + timedelta(days=n)


async def seed_posts(post_repo, *post_ids: str) -> None:
    for post_id in post_ids:
        await post_repo.save(Post(id=post_id, title=f"Post {post_id}"))


class TestGetStats:
    """Tests for get_stats."""

    @pytest.mark.asyncio
    async def test_counts_threads_spam_included(self, unit_env):
        """Four threads on p1 (one spam), replies are not counted."""
        comment_service = await unit_env.get(CommentService)
        stats_service = await unit_env.get(StatsService)
        post_repo = await unit_env.get(PostRepository)
        await seed_posts(post_repo, "p1")

        roots = []
        for spam in (False, False, False, True):
            created = await comment_service.create_comment(make_draft(spam=spam))
            roots.append(created.new_comment)
        await comment_service.create_comment(
            make_draft(),
            RecipientPath(thread_id=ThreadId(roots[0].id)),
        )

        stats = await stats_service.get_stats(post_id="p1")

        assert stats.comments_count == 4
        assert len(stats.recent_comments) == 4
        assert len(await comment_service.list_comments(["p1"])) == 3
        assert [p.id for p in stats.most_commented_posts] == ["p1"]
        assert stats.most_commented_posts[0].comments_count == 4
        assert stats.most_commented_posts[0].title == "Post p1"

    @pytest.mark.asyncio
    async def test_recent_newest_first_and_capped(self, unit_env):
        stats_service = await unit_env.get(StatsService)
        comment_repo = await unit_env.get(CommentRepository)

        for n in range(12):
            await comment_repo.create_thread(
                make_comment(f"c{n}", published_at=day(n))
            )

        stats = await stats_service.get_stats()

        assert stats.comments_count == 12
        assert [c.comment_id for c in stats.recent_comments] == [
            f"c{n}" for n in range(11, 1, -1)
        ]

    @pytest.mark.asyncio
    async def test_histogram_sums_to_count(self, unit_env):
        stats_service = await unit_env.get(StatsService)
        comment_repo = await unit_env.get(CommentRepository)

        for n in (0, 0, 2, 5):
            await comment_repo.create_thread(make_comment(published_at=day(n)))

        stats = await stats_service.get_stats(interval=HistogramInterval("1d"))

        assert sum(b.doc_count for b in stats.comments_by_date) == stats.comments_count
        assert [b.doc_count for b in stats.comments_by_date] == [2, 0, 1, 0, 0, 1]
        assert stats.comments_by_date[0].key_as_string == "2024-03-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_start_date_filters(self, unit_env):
        stats_service = await unit_env.get(StatsService)
        comment_repo = await unit_env.get(CommentRepository)

        for n in range(5):
            await comment_repo.create_thread(make_comment(published_at=day(n)))

        stats = await stats_service.get_stats(start_date=day(3))

        assert stats.comments_count == 2

    @pytest.mark.asyncio
    async def test_top_posts_ranked_and_tie_broken_by_id(self, unit_env):
        stats_service = await unit_env.get(StatsService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)

        tallies = {"a": 1, "b": 3, "c": 2, "d": 2, "e": 1, "f": 4}
        await seed_posts(post_repo, *tallies)
        for post_id, tally in tallies.items():
            for _ in range(tally):
                await comment_repo.create_thread(make_comment(post_id=post_id))

        stats = await stats_service.get_stats()

        ranked = [(p.id, p.comments_count) for p in stats.most_commented_posts]
        assert ranked == [("f", 4), ("b", 3), ("c", 2), ("d", 2), ("a", 1)]

    @pytest.mark.asyncio
    async def test_stored_comment_count_overwritten(self, unit_env):
        """A post document carrying its own comments_count gets the live tally."""
        stats_service = await unit_env.get(StatsService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)

        await post_repo.save(Post(id="p1", title="Stale", comments_count=99))
        await comment_repo.create_thread(make_comment(post_id="p1"))

        stats = await stats_service.get_stats()

        [post] = stats.most_commented_posts
        assert post.comments_count == 1
        assert post.title == "Stale"

    @pytest.mark.asyncio
    async def test_unknown_posts_skipped(self, unit_env):
        stats_service = await unit_env.get(StatsService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)

        await seed_posts(post_repo, "known")
        await comment_repo.create_thread(make_comment(post_id="known"))
        await comment_repo.create_thread(make_comment(post_id="gone"))

        stats = await stats_service.get_stats()

        assert [p.id for p in stats.most_commented_posts] == ["known"]
        assert stats.comments_count == 2

    @pytest.mark.asyncio
    async def test_empty_store(self, unit_env):
        stats_service = await unit_env.get(StatsService)

        stats = await stats_service.get_stats()

        assert stats.comments_count == 0
        assert stats.comments_by_date == []
        assert stats.most_commented_posts == []
        assert stats.recent_comments == []
