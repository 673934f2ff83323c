"""Elasticsearch repository implementations."""

from quill.persistence.repository.comment import ElasticsearchCommentRepository
from quill.persistence.repository.post import ElasticsearchPostRepository

__all__ = [
    "ElasticsearchCommentRepository",
    "ElasticsearchPostRepository",
]
