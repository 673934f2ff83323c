"""Domain services."""

from .base import Service
from .comment_service import CommentService, generate_comment_id
from .comment_tree import append_reply, filter_visible, resolve_node, update_node
from .scanner import CorpusScanner
from .stats_service import StatsService

__all__ = [
    "CommentService",
    "CorpusScanner",
    "Service",
    "StatsService",
    "append_reply",
    "filter_visible",
    "generate_comment_id",
    "resolve_node",
    "update_node",
]
