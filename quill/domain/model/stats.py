"""Aggregated comment statistics."""

from pydantic import ConfigDict

from quill.domain.model.comment import Comment
from quill.domain.model.common import DomainModel
from quill.domain.model.post import Post
from quill.domain.value import PostId


class DateBucket(DomainModel):
    """One histogram bucket: comments published in ``[key, key + interval)``."""

    key: int  # bucket start, epoch milliseconds
    key_as_string: str
    doc_count: int


class PostBucket(DomainModel):
    """Number of comment threads on one post."""

    post_id: PostId
    doc_count: int


class StatsAggregation(DomainModel):
    """Raw result of the stats search, before joining against posts."""

    recent: list[Comment] = []
    post_buckets: list[PostBucket] = []
    date_buckets: list[DateBucket] = []


class CommentedPost(Post):
    """Post decorated with the number of comments it received."""

    model_config = ConfigDict(frozen=True, extra="allow")

    comments_count: int


class CommentStats(DomainModel):
    """Dashboard statistics over the comment corpus."""

    comments_by_date: list[DateBucket]
    most_commented_posts: list[CommentedPost]
    recent_comments: list[Comment]
    comments_count: int
