"""Domain model entities for the comment engine."""

from quill.domain.model.comment import (
    Author,
    AuthorDraft,
    Comment,
    CommentDraft,
    CreatedComment,
    Thread,
    ThreadVersion,
)
from quill.domain.model.post import Post
from quill.domain.model.stats import (
    CommentedPost,
    CommentStats,
    DateBucket,
    PostBucket,
    StatsAggregation,
)

__all__ = [
    "Author",
    "AuthorDraft",
    "Comment",
    "CommentDraft",
    "CreatedComment",
    "Thread",
    "ThreadVersion",
    "Post",
    "CommentedPost",
    "CommentStats",
    "DateBucket",
    "PostBucket",
    "StatsAggregation",
]
