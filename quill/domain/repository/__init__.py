"""Repository interfaces for the comment engine.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from quill.domain.repository.comment import CommentRepository, ScrollPage
from quill.domain.repository.post import PostRepository

__all__ = [
    "CommentRepository",
    "PostRepository",
    "ScrollPage",
]
