"""Delete comment use cases."""

from pydantic import BaseModel

from quill.application.usecase.base import BaseUseCase
from quill.domain.service import CommentService
from quill.domain.value import PostId, ThreadId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    thread_id: str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    thread_id: str
    deleted: bool


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a thread with all of its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If there is no such thread
        """
        await self.comment_service.delete_comment(ThreadId(request.thread_id))
        return DeleteCommentResponse(thread_id=request.thread_id, deleted=True)


class DeletePostCommentsRequest(BaseModel):
    """Delete post comments request."""

    post_id: str


class DeletePostCommentsResponse(BaseModel):
    """Delete post comments response."""

    post_id: str
    deleted: int


class DeletePostCommentsUseCase(BaseUseCase):
    """Use case for removing every thread on a post, e.g. when it is deleted.

    Repeating the call is harmless and reports zero deletions.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete post comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(
        self, request: DeletePostCommentsRequest
    ) -> DeletePostCommentsResponse:
        """Execute delete post comments flow."""
        deleted = await self.comment_service.delete_post_comments(
            PostId(request.post_id)
        )
        return DeletePostCommentsResponse(post_id=request.post_id, deleted=deleted)
