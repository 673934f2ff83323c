"""Post entity.

Posts live in an external store. The comment engine only reads them to
decorate statistics, so every field beyond the id and title is carried
through untouched.
"""

from typing import Optional

from pydantic import ConfigDict

from quill.domain.model.common import DomainModel
from quill.domain.value import PostId


class Post(DomainModel):
    """Blog post as returned by the post store."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: PostId
    title: str = ""
    slug: Optional[str] = None
