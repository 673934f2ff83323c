"""Comment routes."""

from typing import Any

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel

from quill.adapter.error import AdapterError
from quill.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    DeletePostCommentsRequest,
    DeletePostCommentsResponse,
    DeletePostCommentsUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from quill.domain.error import DomainError
from quill.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class AuthorAPIRequest(BaseModel):
    """Commenter identity in an API request."""

    name: str | None = None
    email: str | None = None
    website: str | None = None


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Fields are only type-checked here. Required fields and content rules
    are checked together by CreateCommentRequest.parse, so one response
    lists every problem. Fields left out stay out of the parsed payload.
    """

    post_id: str | None = None
    author: AuthorAPIRequest | None = None
    content: str | None = None
    user_host_address: str | None = None
    user_agent: str | None = None
    spam: bool | None = None
    recipient_path: str | list[Any] | None = None  # None starts a new thread


@router.post(
    "/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CreateCommentResponse:
    """Start a thread or reply to a comment.

    ``recipient_path`` is a JSON array ``["<thread id>", i, j, ...]``
    naming the comment to reply to; null or absent starts a new thread.
    The reply is searchable by the time the response is sent.

    Returns:
        The new comment and the comment replied to

    Raises:
        HTTPException: 422 listing every invalid field, 404 for an unknown
            thread, 400 for a path that does not fit it, 409 when
            concurrent replies kept conflicting
    """
    try:
        use_case_request = CreateCommentRequest.parse(
            request.model_dump(exclude_unset=True)
        )
        return await create_comment_use_case.execute(use_case_request)
    except (DomainError, AdapterError) as e:
        logfire.warn("Comment creation failed", error=str(e))
        raise to_http_exception(e)


@router.get("/comments", response_model=GetCommentsResponse)
async def get_comments(
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    post_id: list[str] = Query(..., min_length=1),
) -> GetCommentsResponse:
    """Get the visible threads of one or more posts, oldest first.

    Repeat ``post_id`` to fetch several posts at once.
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(post_ids=post_id)
        )
    except AdapterError as e:
        raise to_http_exception(e)


@router.delete("/comments/{thread_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    thread_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> DeleteCommentResponse:
    """Delete a thread with all of its replies."""
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(thread_id=thread_id)
        )
    except (DomainError, AdapterError) as e:
        raise to_http_exception(e)


@router.delete("/posts/{post_id}/comments", response_model=DeletePostCommentsResponse)
async def delete_post_comments(
    post_id: str,
    delete_post_comments_use_case: FromDishka[DeletePostCommentsUseCase],
) -> DeletePostCommentsResponse:
    """Delete every thread on a post. Repeating the call deletes nothing more."""
    try:
        return await delete_post_comments_use_case.execute(
            DeletePostCommentsRequest(post_id=post_id)
        )
    except AdapterError as e:
        raise to_http_exception(e)
