"""Domain value objects for the comment engine."""

from quill.domain.value.identifiers import CommentId, PostId, ThreadId
from quill.domain.value.types import (
    CommentQuery,
    HistogramInterval,
    RecipientPath,
    SortOrder,
)

__all__ = [
    # Identifiers
    "ThreadId",
    "CommentId",
    "PostId",
    # Types
    "CommentQuery",
    "HistogramInterval",
    "RecipientPath",
    "SortOrder",
]
