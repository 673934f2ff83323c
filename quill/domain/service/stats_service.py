"""Comment statistics service."""

from datetime import datetime

import logfire

from quill.config import CommentSettings
from quill.domain.model.stats import CommentedPost, CommentStats
from quill.domain.repository import CommentRepository, PostRepository
from quill.domain.value import CommentQuery, HistogramInterval, PostId, SortOrder

from .base import Service


class StatsService(Service):
    """Aggregates over the whole comment corpus, spam included."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        settings: CommentSettings,
    ) -> None:
        """Initialize stats service.

        Args:
            comment_repository: Comment repository
            post_repository: Post store, to describe the most commented posts
            settings: Result sizes and default interval
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.settings = settings

    async def get_stats(
        self,
        start_date: datetime | None = None,
        post_id: PostId | None = None,
        interval: HistogramInterval | None = None,
    ) -> CommentStats:
        """Compute dashboard statistics.

        Args:
            start_date: Only count comments published at or after this time
            post_id: Only count comments on this post
            interval: Histogram bucket width, defaults to the configured one

        Returns:
            Count, recent comments, most commented posts and date histogram
        """
        interval = interval or HistogramInterval(self.settings.default_interval)
        query = CommentQuery(
            post_ids=(post_id,) if post_id else None,
            published_since=start_date,
            sort=SortOrder.DESC,
        )

        with logfire.span(
            "stats_service.get_stats",
            post_id=post_id,
            start_date=start_date.isoformat() if start_date else None,
            interval=str(interval),
        ):
            count = await self.comment_repository.count(query)
            aggregation = await self.comment_repository.aggregate_stats(
                query,
                recent_size=self.settings.recent_comments_size,
                top_posts=self.settings.top_posts_size,
                interval=interval,
            )

            most_commented: list[CommentedPost] = []
            if aggregation.post_buckets:
                counts = {b.post_id: b.doc_count for b in aggregation.post_buckets}
                posts = await self.post_repository.get_items_by_ids(list(counts))
                most_commented = [
                    CommentedPost(
                        **{**post.model_dump(), "comments_count": counts[post.id]}
                    )
                    for post in posts
                    if post.id in counts
                ]
                # Keep bucket order whatever order the post store answers in
                most_commented.sort(key=lambda p: list(counts).index(p.id))

            logfire.info(
                "Stats computed",
                comments_count=count,
                buckets=len(aggregation.date_buckets),
                top_posts=len(most_commented),
            )
            return CommentStats(
                comments_by_date=aggregation.date_buckets,
                most_commented_posts=most_commented,
                recent_comments=aggregation.recent,
                comments_count=count,
            )
