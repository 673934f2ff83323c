"""Test configuration and fixtures."""

from datetime import datetime, timezone
from typing import Any

from quill.domain.model import Author, AuthorDraft, Comment, CommentDraft
from quill.domain.value import CommentId, PostId


def make_draft(post_id: str = "p1", spam: bool | None = False, **overrides) -> CommentDraft:
    """Build a valid comment draft for a post."""
    data: dict[str, Any] = {
        "post_id": PostId(post_id),
        "author": AuthorDraft(name="Ada", email="ada@example.com", website=""),
        "content": "Nice post",
        "user_host_address": "127.0.0.1",
        "user_agent": "pytest",
        "spam": spam,
    }
    data.update(overrides)
    return CommentDraft(**data)


def make_payload(**overrides) -> dict[str, Any]:
    """Build a valid create-comment request body."""
    payload: dict[str, Any] = {
        "post_id": "p1",
        "author": {"name": "Ada", "email": "ada@example.com", "website": ""},
        "content": "Nice post",
        "user_host_address": "127.0.0.1",
        "user_agent": "pytest",
        "spam": False,
        "recipient_path": None,
    }
    payload.update(overrides)
    return payload


def make_comment(
    comment_id: str = "c1",
    post_id: str = "p1",
    approved: bool = True,
    spam: bool = False,
    replies: list[Comment] | None = None,
    published_at: datetime | None = None,
) -> Comment:
    """Build a comment node."""
    return Comment(
        comment_id=CommentId(comment_id),
        post_id=PostId(post_id),
        author=Author(name="Ada", email="ada@example.com"),
        content=f"Comment {comment_id}",
        user_host_address="127.0.0.1",
        user_agent="pytest",
        spam=spam,
        approved=approved,
        published_at=published_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
        replies=replies or [],
    )
