"""Get comments use case."""

from pydantic import BaseModel, Field

from quill.application.usecase.base import BaseUseCase
from quill.domain.model import Comment
from quill.domain.service import CommentService
from quill.domain.value import PostId


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_ids: list[str] = Field(min_length=1)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[Comment]
    total: int  # number of threads


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing the visible threads of one or more posts."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Threads are returned oldest first. Unapproved and spam comments
        are removed together with every reply below them.
        """
        comments = await self.comment_service.list_comments(
            [PostId(post_id) for post_id in request.post_ids]
        )
        return GetCommentsResponse(comments=comments, total=len(comments))
