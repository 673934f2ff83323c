"""In-memory post repository for testing."""

from typing import Sequence

from quill.domain.model import Post
from quill.domain.repository import PostRepository
from quill.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def save(self, post: Post) -> Post:
        """Add or replace a post."""
        self._posts[post.id] = post
        return post

    async def get_items_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Fetch posts by id, skipping unknown ids."""
        return [self._posts[pid] for pid in post_ids if pid in self._posts]
