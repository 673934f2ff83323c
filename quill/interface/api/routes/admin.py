"""Administrative comment routes.

Nothing here filters out spam or unapproved comments.
"""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from quill.adapter.error import AdapterError
from quill.application.usecase.comment import (
    GetAllCommentsRequest,
    GetAllCommentsResponse,
    GetAllCommentsUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from quill.domain.error import DomainError
from quill.interface.error import to_http_exception

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/comments", response_model=GetAllCommentsResponse)
async def get_all_comments(
    get_all_comments_use_case: FromDishka[GetAllCommentsUseCase],
) -> GetAllCommentsResponse:
    """Export every thread exactly as stored."""
    try:
        return await get_all_comments_use_case.execute(GetAllCommentsRequest())
    except AdapterError as e:
        raise to_http_exception(e)


@router.patch("/comments/moderation", response_model=ModerateCommentResponse)
async def moderate_comment(
    request: ModerateCommentRequest,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
) -> ModerateCommentResponse:
    """Approve or reject a comment anywhere in a thread."""
    try:
        return await moderate_comment_use_case.execute(request)
    except (DomainError, AdapterError) as e:
        logfire.warn("Moderation failed", error=str(e))
        raise to_http_exception(e)
