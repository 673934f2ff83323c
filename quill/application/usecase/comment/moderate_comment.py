"""Moderate comment use case."""

from typing import Any

from pydantic import BaseModel

from quill.application.usecase.base import BaseUseCase
from quill.domain.error import ValidationError
from quill.domain.model import Comment
from quill.domain.service import CommentService
from quill.domain.value import RecipientPath


class ModerateCommentRequest(BaseModel):
    """Moderate comment request.

    ``recipient_path`` addresses the comment the same way replies do,
    ``["<thread id>"]`` being the root itself.
    """

    recipient_path: str | list[Any]
    approved: bool


class ModerateCommentResponse(BaseModel):
    """Moderate comment response."""

    comment: Comment


class ModerateCommentUseCase(BaseUseCase):
    """Use case for approving or rejecting a comment after the fact."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize moderate comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ModerateCommentRequest) -> ModerateCommentResponse:
        """Execute moderate comment flow.

        Raises:
            ValidationError: If the path is malformed
            NotFoundError: If the thread does not exist
            StructuralError: If the path does not fit the thread
            ConflictError: If concurrent writers kept invalidating the write
        """
        path = RecipientPath.parse(request.recipient_path)
        if path is None:
            raise ValidationError(
                [{"field": "recipient_path", "message": "Field required"}]
            )
        comment = await self.comment_service.moderate_comment(
            path, approved=request.approved
        )
        return ModerateCommentResponse(comment=comment)
