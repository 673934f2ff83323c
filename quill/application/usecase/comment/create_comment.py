"""Create comment use case."""

from typing import Any, Mapping

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from quill.application.usecase.base import BaseUseCase
from quill.domain.error import ValidationError
from quill.domain.model import Comment, CommentDraft
from quill.domain.service import CommentService
from quill.domain.value import RecipientPath


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    draft: CommentDraft
    recipient_path: RecipientPath | None = None  # None starts a new thread

    @classmethod
    def parse(cls, payload: Mapping[str, Any]) -> "CreateCommentRequest":
        """Validate a raw request body.

        Every problem is collected before failing, so the caller learns
        about all invalid fields at once. Server-side fields such as
        ``comment_id``, ``approved`` or ``published_at`` are ignored.

        Args:
            payload: Decoded request body

        Returns:
            Validated request

        Raises:
            ValidationError: Listing every invalid field
        """
        errors: list[dict[str, Any]] = []

        draft = None
        try:
            draft = CommentDraft.model_validate(dict(payload))
        except PydanticValidationError as e:
            errors.extend(ValidationError.from_pydantic(e).errors)

        recipient_path = None
        try:
            recipient_path = RecipientPath.parse(payload.get("recipient_path"))
        except ValidationError as e:
            errors.extend(e.errors)

        if errors:
            raise ValidationError(errors)
        return cls(draft=draft, recipient_path=recipient_path)


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    new_comment: Comment
    replied_to_comment: Comment | None


class CreateCommentUseCase(BaseUseCase):
    """Use case for starting a thread or replying inside one."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Validated request

        Returns:
            The new comment and, for replies, the comment replied to

        Raises:
            NotFoundError: If the thread does not exist
            StructuralError: If the recipient path does not fit the thread
            ConflictError: If concurrent replies kept invalidating the write
        """
        created = await self.comment_service.create_comment(
            draft=request.draft,
            recipient_path=request.recipient_path,
        )
        return CreateCommentResponse(
            new_comment=created.new_comment,
            replied_to_comment=created.replied_to_comment,
        )
