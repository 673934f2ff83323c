"""Get all comments use case."""

from pydantic import BaseModel

from quill.application.usecase.base import BaseUseCase
from quill.domain.model import Comment
from quill.domain.service import CommentService


class GetAllCommentsRequest(BaseModel):
    """Get all comments request; the export takes no filters."""


class GetAllCommentsResponse(BaseModel):
    """Full, unfiltered comment export."""

    comments: list[Comment]
    total: int


class GetAllCommentsUseCase(BaseUseCase):
    """Use case for the administrative export of every thread.

    Unlike listing, nothing is hidden: spam and unapproved comments are
    part of the export.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetAllCommentsRequest) -> GetAllCommentsResponse:
        comments = await self.comment_service.get_all_comments()
        return GetAllCommentsResponse(comments=comments, total=len(comments))
