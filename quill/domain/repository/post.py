"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from quill.domain.model.post import Post
from quill.domain.value import PostId


class PostRepository(ABC):
    """Read access to the external post store."""

    @abstractmethod
    async def get_items_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Fetch posts by id.

        Args:
            post_ids: Ids to look up

        Returns:
            Posts found, in the order of ``post_ids``; unknown ids are skipped
        """
        pass
