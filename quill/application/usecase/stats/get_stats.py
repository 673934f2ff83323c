"""Get stats use case."""

from datetime import datetime

from pydantic import BaseModel

from quill.application.usecase.base import BaseUseCase
from quill.domain.model import Comment, CommentedPost, DateBucket
from quill.domain.service import StatsService
from quill.domain.value import HistogramInterval, PostId


class GetStatsRequest(BaseModel):
    """Get stats request."""

    start_date: datetime | None = None
    post_id: str | None = None
    interval: str | None = None  # e.g. "1d", "1M", "12h"; configured default if unset


class GetStatsResponse(BaseModel):
    """Get stats response."""

    comments_by_date: list[DateBucket]
    most_commented_posts: list[CommentedPost]
    recent_comments: list[Comment]
    comments_count: int


class GetStatsUseCase(BaseUseCase):
    """Use case for the comments dashboard.

    Spam and unapproved comments are counted like any other.
    """

    def __init__(self, stats_service: StatsService) -> None:
        """Initialize get stats use case.

        Args:
            stats_service: Stats domain service
        """
        self.stats_service = stats_service

    async def execute(self, request: GetStatsRequest) -> GetStatsResponse:
        """Execute get stats flow.

        Raises:
            ValidationError: If the interval is not usable
        """
        interval = (
            HistogramInterval.parse(request.interval) if request.interval else None
        )
        stats = await self.stats_service.get_stats(
            start_date=request.start_date,
            post_id=PostId(request.post_id) if request.post_id else None,
            interval=interval,
        )
        return GetStatsResponse(
            comments_by_date=stats.comments_by_date,
            most_commented_posts=stats.most_commented_posts,
            recent_comments=stats.recent_comments,
            comments_count=stats.comments_count,
        )
